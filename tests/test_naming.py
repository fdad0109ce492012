import pytest

from asset_renamer.naming import NameChangeTracker, NamingRule, changed_indices, compose_name, with_extension


def test_compose_name_with_variant(rock_rule):
    assert compose_name(rock_rule, "BC") == "SM_Rock_BC_01"


def test_compose_name_without_variant():
    rule = NamingRule(asset_type_prefix="T", asset_name="Rock", variant="")
    assert compose_name(rule, "N") == "T_Rock_N"


def test_empty_descriptor_keeps_its_slot(rock_rule):
    assert compose_name(rock_rule, "") == "SM_Rock__01"


def test_prefix_argument_replaces_rule_prefix(rock_rule):
    assert compose_name(rock_rule, "BC", "T") == "T_Rock_BC_01"


def test_compose_is_idempotent(rock_rule):
    assert compose_name(rock_rule, "R") == compose_name(rock_rule, "R")


def test_empty_asset_name_is_composed():
    rule = NamingRule(asset_type_prefix="T", asset_name="", variant="A")
    assert compose_name(rule, "BC") == "T__BC_A"


def test_unknown_prefix_rejected():
    with pytest.raises(ValueError):
        NamingRule(asset_type_prefix="XX")


def test_rule_defaults_and_with_changes():
    rule = NamingRule()
    assert (rule.asset_type_prefix, rule.asset_name, rule.descriptor, rule.variant) == ("T", "name", "", "01")
    changed = rule.with_changes(asset_name="Soldier")
    assert changed.asset_name == "Soldier"
    assert rule.asset_name == "name"


def test_with_extension():
    assert with_extension("T_Rock_BC_01", "png") == "T_Rock_BC_01.png"
    assert with_extension("T_Rock_BC_01", "") == "T_Rock_BC_01."


def test_changed_indices():
    assert changed_indices("T_Rock_BC_01", "T_Rock_BC_01") == set()
    assert changed_indices("T_Rock_BC_01", "T_Rock_NM_01") == {7, 8}
    assert changed_indices("T_A", "T_AB") == {3}
    assert changed_indices("T_ABC", "T_A") == set()


def test_change_tracker_highlights_against_last_shown_name():
    tracker = NameChangeTracker()
    assert tracker.update("/a/x.png", "T_A_BC_01.png") == set()
    assert tracker.update("/a/x.png", "T_A_NM_01.png") == {4, 5}
    assert tracker.update("/a/x.png", "T_A_NM_01.png") == set()


def test_change_tracker_clear_forgets_paths():
    tracker = NameChangeTracker()
    tracker.update("/a/x.png", "T_A_BC_01.png")
    tracker.update("/a/y.png", "T_A_N_01.png")
    assert len(tracker) == 2
    tracker.clear()
    assert len(tracker) == 0
    assert tracker.update("/a/x.png", "SM_A_BC_01.png") == set()

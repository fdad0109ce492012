import pytest

from asset_renamer.errors import (
    DuplicateTargetName,
    EmptyAssetName,
    EmptySelection,
    MissingOutputPath,
)
from asset_renamer.executor import BatchResult, execute, plan_operations
from asset_renamer.fs import RenameOutcome
from asset_renamer.overrides import OverrideStore
from asset_renamer.preview import GlobalToggles, OutputConfig, generate_preview

from .helpers import FakeRenamer, entries

TOGGLES = GlobalToggles()
ORIGINAL = OutputConfig()


def _preview(rule, *names, store=None, output=ORIGINAL):
    store = store or OverrideStore()
    return generate_preview(entries(*names), rule, store, TOGGLES, output), store


def test_renames_selected_rows_in_order(rock_rule, renamer):
    rows, store = _preview(rock_rule, "a_normal.png", "b_height.png", "c_ambient.png")
    store.set_selected("/assets/b_height.png", False)

    result = execute(rows, rock_rule, store, TOGGLES, ORIGINAL, renamer)

    assert [op.old_path for op in renamer.calls] == ["/assets/a_normal.png", "/assets/c_ambient.png"]
    assert [op.new_path for op in renamer.calls] == ["/assets/SM_Rock_N_01.png", "/assets/SM_Rock_AO_01.png"]
    assert result.success_count == 2
    assert result.ok


def test_empty_selection(rock_rule, renamer):
    rows, store = _preview(rock_rule, "a.png")
    store.set_selected("/assets/a.png", False)
    with pytest.raises(EmptySelection):
        execute(rows, rock_rule, store, TOGGLES, ORIGINAL, renamer)
    assert renamer.calls == []


def test_empty_row_list(rock_rule, renamer):
    with pytest.raises(EmptySelection):
        execute([], rock_rule, OverrideStore(), TOGGLES, ORIGINAL, renamer)


def test_empty_asset_name_refused(renamer, rock_rule):
    rule = rock_rule.with_changes(asset_name="")
    rows, store = _preview(rule, "a_normal.png")
    with pytest.raises(EmptyAssetName):
        execute(rows, rule, store, TOGGLES, ORIGINAL, renamer)
    assert renamer.calls == []


def test_custom_mode_requires_output_path(rock_rule, renamer):
    output = OutputConfig(mode="custom", path="")
    rows, store = _preview(rock_rule, "a_normal.png", output=output)
    with pytest.raises(MissingOutputPath):
        execute(rows, rock_rule, store, TOGGLES, output, renamer)
    assert renamer.calls == []


def test_duplicate_names_block_whole_batch(rock_rule, renamer):
    rows, store = _preview(rock_rule, "a_normal.png", "b_normal.png", "c_height.png")
    with pytest.raises(DuplicateTargetName) as info:
        execute(rows, rock_rule, store, TOGGLES, ORIGINAL, renamer)
    assert info.value.names == ["SM_Rock_N_01.png"]
    assert renamer.calls == []


def test_duplicates_only_counted_among_selected(rock_rule, renamer):
    rows, store = _preview(rock_rule, "a_normal.png", "b_normal.png")
    store.set_selected("/assets/b_normal.png", False)
    result = execute(rows, rock_rule, store, TOGGLES, ORIGINAL, renamer)
    assert result.success_count == 1


def test_names_are_rederived_from_latest_overrides(rock_rule, renamer):
    rows, store = _preview(rock_rule, "a_normal.png", "b_normal.png")
    # rows still show two identical names, the store no longer does
    store.set_descriptor("/assets/b_normal.png", "Dsp")
    result = execute(rows, rock_rule, store, TOGGLES, ORIGINAL, renamer)
    assert result.ok
    assert renamer.calls[1].new_path == "/assets/SM_Rock_Dsp_01.png"


def test_partial_failure_is_aggregated(rock_rule):
    renamer = FakeRenamer(failing=["/assets/b_height.png"])
    rows, store = _preview(rock_rule, "a_normal.png", "b_height.png", "c_ambient.png")

    result = execute(rows, rock_rule, store, TOGGLES, ORIGINAL, renamer)

    assert len(renamer.calls) == 3
    assert result.success_count == 2
    assert result.failure_count == 1
    assert result.failures[0].old_path == "/assets/b_height.png"
    assert not result.ok
    assert result.summary() == "Renamed 2 file(s), 1 failed."


def test_plan_operations_custom_output(rock_rule):
    output = OutputConfig(mode="custom", path="/export")
    rows, store = _preview(rock_rule, "a_normal.png", output=output)
    ops = plan_operations(rows, rock_rule, store, TOGGLES, output)
    assert [(op.old_path, op.new_path) for op in ops] == [("/assets/a_normal.png", "/export/SM_Rock_N_01.png")]


def test_batch_result_counts():
    result = BatchResult([
        RenameOutcome(True, "a", "b"),
        RenameOutcome(False, "c", "d", "boom"),
    ])
    assert (result.success_count, result.failure_count) == (1, 1)
    assert BatchResult().ok

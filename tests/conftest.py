import logging

import pytest

from asset_renamer.naming import NamingRule

from .helpers import FakeRenamer


@pytest.fixture
def rock_rule() -> NamingRule:
    return NamingRule(asset_type_prefix="SM", asset_name="Rock", variant="01")


@pytest.fixture
def renamer() -> FakeRenamer:
    return FakeRenamer()


@pytest.fixture(autouse=True)
def _drop_cli_log_handlers():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_asset_renamer", False):
            root.removeHandler(handler)

"""Shared fixtures for the dropfour test suite."""

import pytest

from dropfour.debug import debug, DebugLevel
from dropfour.game.grid import Grid
from dropfour.game.rules import MatchController


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep log output at WARNING and reset filters between tests."""
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def grid():
    return Grid()


@pytest.fixture
def match():
    return MatchController()

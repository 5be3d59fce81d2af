"""Pytest configuration and fixtures for gridsearch tests."""

from typing import Callable, List

import pytest

from gridsearch.core.grid import from_layout
from gridsearch.core.types import Grid


class FakeClock:
    """Manually advanced stand-in for time.monotonic (seconds)."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        # tiny epsilon so an event due exactly at the boundary is included
        self.now += ms / 1000.0 + 1e-9


@pytest.fixture
def make_grid() -> Callable[[List[str]], Grid]:
    """Build a grid from text rows ('.', '#', 'S', 'E')."""
    return from_layout


@pytest.fixture
def open_3x3() -> Grid:
    """3x3 open grid, start (0,0), end (2,2)."""
    return from_layout([
        "S..",
        "...",
        "..E",
    ])


@pytest.fixture
def walled_grid() -> Grid:
    """Forces a detour along the bottom row; shortest path has 6 nodes."""
    return from_layout([
        "S.#.",
        ".##.",
        "...E",
    ])


@pytest.fixture
def isolated_start() -> Grid:
    """Every neighbour of the start is a wall."""
    return from_layout([
        "S#..",
        "#...",
        "...E",
    ])


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()

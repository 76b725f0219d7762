"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from pathlib import Path

import pytest

from pathviz.grid import Grid, parse_grid
from pathviz.replay import ManualScheduler
from pathviz.storage import LayoutStore


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def open_grid() -> Grid:
    """3x3 grid with no walls, start top-left and end bottom-right."""
    return parse_grid(
        """
        S..
        ...
        ..E
        """
    )


@pytest.fixture
def walled_grid() -> Grid:
    """5x5 grid split by a full wall column at col 2."""
    return parse_grid(
        """
        S.#.E
        ..#..
        ..#..
        ..#..
        ..#..
        """
    )


@pytest.fixture
def maze_grid() -> Grid:
    """Small maze with several dead ends and one shortest route."""
    return parse_grid(
        """
        S..#......
        .#.#.####.
        .#...#....
        .#####.##.
        ...#...#E.
        .#.#.#.##.
        .#...#....
        """
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Fresh virtual-clock scheduler."""
    return ManualScheduler()


@pytest.fixture
def layout_store(tmp_path: Path) -> LayoutStore:
    """Layout store backed by a temporary file."""
    return LayoutStore(tmp_path / "layouts.msgpack")

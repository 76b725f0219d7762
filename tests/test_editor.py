"""
Unit tests for the click-driven grid editor.
"""

import pytest

from pathviz.config import DEFAULT_GRID_SIZE, MAX_GRID_SIZE, MIN_GRID_SIZE
from pathviz.errors import InvalidGrid
from pathviz.grid import CellType, GridEditor, parse_grid


@pytest.fixture
def editor() -> GridEditor:
    """Smallest allowed editor."""
    return GridEditor(MIN_GRID_SIZE)


class TestClickSemantics:
    """Test what a single click does."""

    def test_default_size(self):
        """The editor should default to the configured size."""
        assert GridEditor().size == DEFAULT_GRID_SIZE

    def test_first_click_places_start(self, editor):
        """With no start, a click places START."""
        assert editor.click(0, 0) == CellType.START
        assert editor.start == (0, 0)
        assert editor.end is None

    def test_second_click_places_end(self, editor):
        """With a start but no end, a click places END."""
        editor.click(0, 0)
        assert editor.click(4, 4) == CellType.END
        assert editor.end == (4, 4)
        assert editor.ready

    def test_later_clicks_toggle_walls(self, editor):
        """Once both endpoints exist, clicks toggle WALL/EMPTY."""
        editor.click(0, 0)
        editor.click(4, 4)
        assert editor.click(2, 2) == CellType.WALL
        assert editor.click(2, 2) == CellType.EMPTY

    def test_clicking_start_removes_it(self, editor):
        """Clicking the start cell clears it; the next click places it again."""
        editor.click(0, 0)
        editor.click(4, 4)
        assert editor.click(0, 0) == CellType.EMPTY
        assert editor.start is None
        assert editor.click(1, 1) == CellType.START
        assert editor.start == (1, 1)

    def test_clicking_end_removes_it(self, editor):
        """Clicking the end cell clears it."""
        editor.click(0, 0)
        editor.click(4, 4)
        assert editor.click(4, 4) == CellType.EMPTY
        assert editor.end is None
        assert not editor.ready

    def test_start_can_replace_wall(self, editor):
        """A missing start is placed even on a wall cell."""
        editor.click(0, 0)
        editor.click(4, 4)
        editor.click(2, 2)
        editor.click(0, 0)
        assert editor.click(2, 2) == CellType.START

    def test_click_out_of_bounds(self, editor):
        """Clicks outside the grid should raise InvalidGrid."""
        with pytest.raises(InvalidGrid):
            editor.click(MIN_GRID_SIZE, 0)

    def test_snapshot_is_independent(self, editor):
        """Snapshots should not change when the editor does."""
        editor.click(0, 0)
        snapshot = editor.snapshot()
        editor.click(0, 0)
        assert snapshot[0, 0] == CellType.START
        assert editor.snapshot()[0, 0] == CellType.EMPTY


class TestEditorLifecycle:
    """Test reset, resize, load and listeners."""

    def test_reset_clears_everything(self, editor):
        """reset() should empty the grid and forget endpoints."""
        editor.click(0, 0)
        editor.click(1, 1)
        editor.reset()
        assert editor.start is None
        assert editor.end is None
        assert editor.snapshot().find(CellType.EMPTY) == [
            (r, c) for r in range(MIN_GRID_SIZE) for c in range(MIN_GRID_SIZE)
        ]

    def test_resize(self, editor):
        """resize() should change the size and clear the grid."""
        editor.click(0, 0)
        editor.resize(8)
        assert editor.size == 8
        assert editor.start is None

    def test_resize_out_of_range(self, editor):
        """Sizes outside the configured range should raise InvalidGrid."""
        with pytest.raises(InvalidGrid):
            editor.resize(MIN_GRID_SIZE - 1)
        with pytest.raises(InvalidGrid):
            editor.resize(MAX_GRID_SIZE + 1)

    def test_load_layout(self, editor):
        """load() should adopt the grid, its endpoints, and drop search marks."""
        grid = parse_grid(
            """
            S.o..
            .#*..
            .....
            ...#.
            ....E
            """
        )
        editor.load(grid)
        assert editor.start == (0, 0)
        assert editor.end == (4, 4)
        snapshot = editor.snapshot()
        assert snapshot[0, 2] == CellType.EMPTY
        assert snapshot[1, 2] == CellType.EMPTY
        assert snapshot[1, 1] == CellType.WALL

    def test_load_rejects_non_square(self, editor):
        """Editor grids are square."""
        with pytest.raises(InvalidGrid):
            editor.load(parse_grid("S....\n....E"))

    def test_listeners_get_snapshots(self, editor):
        """Every edit should notify listeners with the new snapshot."""
        seen = []
        editor.subscribe(seen.append)
        editor.click(0, 0)
        editor.click(1, 1)
        editor.reset()
        assert len(seen) == 3
        assert seen[0][0, 0] == CellType.START
        assert seen[1][1, 1] == CellType.END
        assert seen[2].start is None

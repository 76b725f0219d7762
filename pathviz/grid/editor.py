"""
Mutable editing surface for placing the start, end and wall cells.

The editor owns the logical grid the user is drawing. Searches never see it
directly: they receive an immutable snapshot(). Every edit notifies the
registered listeners so an in-flight replay can be invalidated.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from pathviz.config import DEFAULT_GRID_SIZE, MAX_GRID_SIZE, MIN_GRID_SIZE
from pathviz.errors import InvalidGrid
from pathviz.grid.model import CellType, Coordinate, Grid

logger = logging.getLogger(__name__)

EditListener = Callable[[Grid], None]


class GridEditor:
    """
    Square grid edited one click at a time.

    Click semantics:
    - clicking the start or end cell removes it
    - otherwise the first click places the start, the second the end
    - once both exist, clicks toggle walls
    """

    def __init__(self, size: int = DEFAULT_GRID_SIZE) -> None:
        self._cells = self._blank(size)
        self._start: Coordinate | None = None
        self._end: Coordinate | None = None
        self._listeners: list[EditListener] = []

    @staticmethod
    def _blank(size: int) -> np.ndarray:
        if not MIN_GRID_SIZE <= size <= MAX_GRID_SIZE:
            raise InvalidGrid(
                f"Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}, got {size}"
            )
        return np.zeros((size, size), dtype=np.int8)

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def subscribe(self, listener: EditListener) -> None:
        """Call listener with the new snapshot after every edit."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        snapshot = self.snapshot()
        for listener in self._listeners:
            listener(snapshot)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._cells.shape[0]

    @property
    def start(self) -> Coordinate | None:
        return self._start

    @property
    def end(self) -> Coordinate | None:
        return self._end

    @property
    def ready(self) -> bool:
        """Whether both endpoints are placed."""
        return self._start is not None and self._end is not None

    def click(self, row: int, col: int) -> CellType:
        """
        Apply one click at (row, col).

        Returns:
            The cell's new type
        """
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise InvalidGrid(f"Cell ({row}, {col}) outside {self.size}x{self.size} grid")

        current = CellType(int(self._cells[row, col]))

        if current == CellType.START:
            new = CellType.EMPTY
            self._start = None
        elif current == CellType.END:
            new = CellType.EMPTY
            self._end = None
        elif self._start is None:
            new = CellType.START
            self._start = (row, col)
        elif self._end is None:
            new = CellType.END
            self._end = (row, col)
        else:
            new = CellType.EMPTY if current == CellType.WALL else CellType.WALL

        self._cells[row, col] = new
        logger.debug(f"Cell ({row}, {col}): {current.name} -> {new.name}")
        self._changed()
        return new

    def reset(self) -> None:
        """Clear every cell and both endpoints, keeping the size."""
        self._cells[:] = CellType.EMPTY
        self._start = None
        self._end = None
        self._changed()

    def resize(self, size: int) -> None:
        """Change the side length; the grid is cleared."""
        self._cells = self._blank(size)
        self._start = None
        self._end = None
        logger.info(f"Grid resized to {size}x{size}")
        self._changed()

    def load(self, grid: Grid) -> None:
        """Replace the contents with a saved layout (search markings dropped)."""
        if grid.rows != grid.cols:
            raise InvalidGrid(f"Editor grids are square, got {grid.rows}x{grid.cols}")
        cells = self._blank(grid.rows)
        cells[:] = grid.cleared().cells
        self._cells = cells
        self._start = grid.start
        self._end = grid.end
        self._changed()

    def snapshot(self) -> Grid:
        """Immutable copy of the current layout."""
        return Grid.from_rows(self._cells.tolist())

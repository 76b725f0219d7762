"""
Cell-state matrix shared by the editor, the searches and the replay driver.

A Grid is an immutable snapshot: the backing numpy array is marked
read-only, so searches can hold on to it without copying.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from pathviz.errors import InvalidGrid, MissingEndpoint

Coordinate = tuple[int, int]  # (row, col)


class CellType(IntEnum):
    """Semantic role of a single cell. Values match the stored layout format."""

    EMPTY = 0
    WALL = 1
    START = 2
    END = 3
    VISITED = 4
    PATH = 5


_VALID_VALUES = frozenset(int(c) for c in CellType)


@dataclass(frozen=True, eq=False)
class Grid:
    """
    Immutable rectangular matrix of CellType values.

    Attributes:
        cells: Read-only int8 array of shape (rows, cols)
    """

    cells: np.ndarray

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Grid:
        """
        Build a validated grid from a row-major matrix of ints.

        Raises:
            InvalidGrid: If the matrix is empty, ragged, contains values
                outside CellType, or holds more than one START or END
        """
        if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
            raise InvalidGrid(f"Grid must be a list of rows, got {type(rows).__name__}")
        if len(rows) == 0:
            raise InvalidGrid("Grid must have at least one row")
        for r, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
                raise InvalidGrid(f"Row {r} must be a list of cells, got {type(row).__name__}")

        width = len(rows[0])
        if width == 0:
            raise InvalidGrid("Grid must have at least one column")

        for r, row in enumerate(rows):
            if len(row) != width:
                raise InvalidGrid(
                    f"Grid is not rectangular: row {r} has {len(row)} cells, expected {width}"
                )
            for c, value in enumerate(row):
                if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                    raise InvalidGrid(f"Cell ({r}, {c}) is not an integer: {value!r}")
                if int(value) not in _VALID_VALUES:
                    raise InvalidGrid(f"Cell ({r}, {c}) has unknown value {value}")

        return cls.from_array(np.array(rows, dtype=np.int8))

    @classmethod
    def empty(cls, rows: int, cols: int | None = None) -> Grid:
        """Grid of EMPTY cells; square when cols is omitted."""
        cols = rows if cols is None else cols
        if rows < 1 or cols < 1:
            raise InvalidGrid(f"Grid dimensions must be positive, got {rows}x{cols}")
        return cls.from_array(np.zeros((rows, cols), dtype=np.int8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> Grid:
        """Build a validated grid from a 2D integer array (copied)."""
        array = np.asarray(array)
        if array.ndim != 2 or 0 in array.shape:
            raise InvalidGrid(f"Grid must be a non-empty 2D matrix, got shape {array.shape}")
        if not np.issubdtype(array.dtype, np.integer):
            raise InvalidGrid(f"Grid cells must be integers, got dtype {array.dtype}")
        if not np.isin(array, list(_VALID_VALUES)).all():
            raise InvalidGrid("Grid contains values outside CellType")
        array = np.array(array, dtype=np.int8, copy=True)
        for cell_type in (CellType.START, CellType.END):
            count = int(np.count_nonzero(array == cell_type))
            if count > 1:
                raise InvalidGrid(f"Grid has {count} {cell_type.name} cells, at most one allowed")
        array.setflags(write=False)
        return cls(cells=array)

    # -------------------------------------------------------------------------
    # Shape and access
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self.cells.shape[0]

    @property
    def cols(self) -> int:
        return self.cells.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def __getitem__(self, coord: Coordinate) -> CellType:
        row, col = coord
        if not self.in_bounds(row, col):
            raise IndexError(f"Coordinate {coord} outside {self.rows}x{self.cols} grid")
        return CellType(int(self.cells[row, col]))

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_wall(self, row: int, col: int) -> bool:
        return self.cells[row, col] == CellType.WALL

    def find(self, cell_type: CellType) -> list[Coordinate]:
        """All coordinates holding cell_type, in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.cells == cell_type)]

    @property
    def start(self) -> Coordinate | None:
        found = self.find(CellType.START)
        return found[0] if found else None

    @property
    def end(self) -> Coordinate | None:
        found = self.find(CellType.END)
        return found[0] if found else None

    def endpoints(self) -> tuple[Coordinate, Coordinate]:
        """
        Return (start, end).

        Raises:
            MissingEndpoint: If either endpoint is absent
        """
        start, end = self.start, self.end
        if start is None:
            raise MissingEndpoint("Grid has no start cell")
        if end is None:
            raise MissingEndpoint("Grid has no end cell")
        return start, end

    def validate_coordinate(self, coord: Coordinate, label: str = "coordinate") -> Coordinate:
        """Check coord is an in-bounds, non-wall (row, col) pair."""
        try:
            row, col = (int(v) for v in coord)
        except (TypeError, ValueError) as e:
            raise InvalidGrid(f"Invalid {label}: {coord!r}") from e
        if not self.in_bounds(row, col):
            raise InvalidGrid(f"{label.capitalize()} {(row, col)} outside {self.rows}x{self.cols} grid")
        if self.is_wall(row, col):
            raise InvalidGrid(f"{label.capitalize()} {(row, col)} is a wall")
        return (row, col)

    # -------------------------------------------------------------------------
    # Derived grids
    # -------------------------------------------------------------------------

    def with_cells(self, updates: Iterable[tuple[Coordinate, CellType]]) -> Grid:
        """Return a new grid with the given cells replaced."""
        array = self.cells.copy()
        for (row, col), cell_type in updates:
            array[row, col] = cell_type
        return Grid.from_array(array)

    def cleared(self) -> Grid:
        """Copy with VISITED and PATH cells turned back into EMPTY."""
        array = self.cells.copy()
        array[(array == CellType.VISITED) | (array == CellType.PATH)] = CellType.EMPTY
        return Grid.from_array(array)

    def to_rows(self) -> list[list[int]]:
        """Row-major list of ints, the serialized layout format."""
        return self.cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.shape, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, start={self.start}, end={self.end})"

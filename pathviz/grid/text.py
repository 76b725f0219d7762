"""
Plain-text grid format.

One character per cell, one line per row:

    S..#.
    .#.#.
    ...#E

Blank lines and leading/trailing whitespace are ignored, so layouts can be
written as indented triple-quoted strings in tests.
"""

from __future__ import annotations

from pathviz.config import CELL_CHARS
from pathviz.errors import InvalidGrid
from pathviz.grid.model import CellType, Grid

CHAR_TO_CELL: dict[str, CellType] = {char: CellType[name] for name, char in CELL_CHARS.items()}
CELL_TO_CHAR: dict[CellType, str] = {cell: char for char, cell in CHAR_TO_CELL.items()}


def parse_grid(text: str) -> Grid:
    """
    Parse a plain-text layout into a Grid.

    Raises:
        InvalidGrid: On unknown characters, ragged rows, or an empty layout
    """
    lines = [line.strip() for line in text.strip().splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise InvalidGrid("Layout text is empty")

    rows: list[list[int]] = []
    for r, line in enumerate(lines):
        row = []
        for c, char in enumerate(line):
            if char not in CHAR_TO_CELL:
                raise InvalidGrid(f"Unknown cell character {char!r} at ({r}, {c})")
            row.append(int(CHAR_TO_CELL[char]))
        rows.append(row)

    return Grid.from_rows(rows)


def render_grid(grid: Grid) -> str:
    """Render a Grid (or a display grid snapshot) back to text."""
    return "\n".join(
        "".join(CELL_TO_CHAR[CellType(int(value))] for value in row)
        for row in grid.cells
    )

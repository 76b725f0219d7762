"""
Grid module.

Provides the cell model and everything that reads or edits it:
- CellType / Grid: Immutable cell-state matrix
- neighbors: Canonical 4-directional adjacency
- GridEditor: Click-driven editing surface
- parse_grid / render_grid: Plain-text layout format
"""

from pathviz.grid.editor import GridEditor
from pathviz.grid.model import CellType, Coordinate, Grid
from pathviz.grid.neighbors import DIRECTIONS, is_adjacent, manhattan, neighbors
from pathviz.grid.text import parse_grid, render_grid

__all__ = [
    "CellType",
    "Coordinate",
    "Grid",
    "GridEditor",
    "DIRECTIONS",
    "neighbors",
    "is_adjacent",
    "manhattan",
    "parse_grid",
    "render_grid",
]

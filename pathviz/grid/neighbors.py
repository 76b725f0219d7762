"""
4-directional adjacency with bounds and wall filtering.

The order of DIRECTIONS is fixed (Up, Down, Left, Right). DFS exploration
order and every priority tie-break downstream depend on it.
"""

from __future__ import annotations

from pathviz.grid.model import Coordinate, Grid

# (d_row, d_col) in canonical order: Up, Down, Left, Right
DIRECTIONS: tuple[Coordinate, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def neighbors(grid: Grid, row: int, col: int) -> list[Coordinate]:
    """In-bounds, non-wall neighbors of (row, col) in canonical order."""
    out: list[Coordinate] = []
    for d_row, d_col in DIRECTIONS:
        r, c = row + d_row, col + d_col
        if grid.in_bounds(r, c) and not grid.is_wall(r, c):
            out.append((r, c))
    return out


def is_adjacent(a: Coordinate, b: Coordinate) -> bool:
    """Whether a and b share an edge (Manhattan distance 1)."""
    return manhattan(a, b) == 1


def manhattan(a: Coordinate, b: Coordinate) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])

"""
Depth-first search.

Uses the same skeleton as BFS with a LIFO frontier. Neighbors are pushed in
reverse canonical order (Right, Left, Down, Up) so they are popped, and
explored, as Up, Down, Left, Right. The path found is simple but not
necessarily short.
"""

from __future__ import annotations

import logging

from pathviz.grid.model import Coordinate, Grid
from pathviz.search.base import SearchResult, walk
from pathviz.search.frontier import LifoFrontier

logger = logging.getLogger(__name__)

NAME = "DFS"


def _reverse(coords: list[Coordinate]) -> list[Coordinate]:
    return coords[::-1]


def dfs(grid: Grid, start: Coordinate, end: Coordinate) -> SearchResult:
    """Depth-first path using a LIFO frontier."""
    result = walk(grid, start, end, LifoFrontier(), order=_reverse, algorithm=NAME)
    logger.debug(f"DFS {start} -> {end}: visited {len(result.visited)}, path {result.path_length}")
    return result

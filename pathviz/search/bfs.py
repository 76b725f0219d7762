"""
Breadth-first search.

FIFO order processes cells in non-decreasing edge distance from start, so
the first time end is popped its path has the fewest possible edges.
"""

from __future__ import annotations

import logging

from pathviz.grid.model import Coordinate, Grid
from pathviz.search.base import SearchResult, walk
from pathviz.search.frontier import FifoFrontier

logger = logging.getLogger(__name__)

NAME = "BFS"


def bfs(grid: Grid, start: Coordinate, end: Coordinate) -> SearchResult:
    """Shortest path by edge count using a FIFO frontier."""
    result = walk(grid, start, end, FifoFrontier(), algorithm=NAME)
    logger.debug(f"BFS {start} -> {end}: visited {len(result.visited)}, path {result.path_length}")
    return result

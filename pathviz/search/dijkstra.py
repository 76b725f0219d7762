"""
Dijkstra's algorithm with uniform unit edge cost.

Path length always matches BFS; the visited order can differ because the
priority frontier breaks ties by push order rather than pure FIFO.
"""

from __future__ import annotations

import logging

from pathviz.grid.model import Coordinate, Grid
from pathviz.search.base import SearchResult, best_first

logger = logging.getLogger(__name__)

NAME = "Dijkstra"


def dijkstra(grid: Grid, start: Coordinate, end: Coordinate) -> SearchResult:
    """Shortest path, expanding cells by cumulative distance from start."""
    result = best_first(grid, start, end, algorithm=NAME)
    logger.debug(
        f"Dijkstra {start} -> {end}: visited {len(result.visited)}, path {result.path_length}"
    )
    return result

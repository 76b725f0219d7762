"""
A* search with a Manhattan-distance heuristic.

Manhattan distance never overestimates the remaining cost of 4-directional
unit moves and drops by at most 1 per step, so the first pop of end yields
an optimal path while expanding no more cells than Dijkstra.
"""

from __future__ import annotations

import logging

from pathviz.grid.model import Coordinate, Grid
from pathviz.grid.neighbors import manhattan
from pathviz.search.base import SearchResult, best_first

logger = logging.getLogger(__name__)

NAME = "A*"


def astar(grid: Grid, start: Coordinate, end: Coordinate) -> SearchResult:
    """Shortest path, expanding cells by g + Manhattan distance to end."""
    result = best_first(grid, start, end, heuristic=lambda coord: manhattan(coord, end), algorithm=NAME)
    logger.debug(f"A* {start} -> {end}: visited {len(result.visited)}, path {result.path_length}")
    return result

"""
Search module.

Provides the four grid searches and the dispatch boundary:
- bfs / dfs: Unweighted traversal with FIFO / LIFO frontiers
- dijkstra / astar: Uniform-cost search, A* guided by Manhattan distance
- run: Dispatch by algorithm name on explicit endpoints
- solve: Dispatch using the START/END cells stored in the grid
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pathviz.errors import InvalidGrid, UnknownAlgorithm
from pathviz.grid.model import Coordinate, Grid
from pathviz.search.astar import astar
from pathviz.search.base import SearchResult
from pathviz.search.bfs import bfs
from pathviz.search.dfs import dfs
from pathviz.search.dijkstra import dijkstra
from pathviz.search.frontier import FifoFrontier, Frontier, LifoFrontier, PriorityFrontier

logger = logging.getLogger(__name__)

SearchFn = Callable[[Grid, Coordinate, Coordinate], SearchResult]


@dataclass(frozen=True)
class AlgorithmInfo:
    """
    Catalogue entry for one search algorithm.

    Attributes:
        name: Display name, also the canonical dispatch key
        search: The search function
        frontier: Data structure deciding exploration order
        shortest_path: Whether the returned path is guaranteed minimal
        description: One-line exploration strategy
        best_for: Typical use
    """

    name: str
    search: SearchFn
    frontier: str
    shortest_path: bool
    description: str
    best_for: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "frontier": self.frontier,
            "shortest_path": self.shortest_path,
            "description": self.description,
            "best_for": self.best_for,
        }


ALGORITHMS: dict[str, AlgorithmInfo] = {
    "BFS": AlgorithmInfo(
        name="BFS",
        search=bfs,
        frontier="queue",
        shortest_path=True,
        description="Explores all neighboring cells at the current depth before moving deeper",
        best_for="Finding shortest paths in uniform-cost grids",
    ),
    "DFS": AlgorithmInfo(
        name="DFS",
        search=dfs,
        frontier="stack",
        shortest_path=False,
        description="Explores as deep as possible along each branch before backtracking",
        best_for="Exploring all possible paths, maze generation",
    ),
    "Dijkstra": AlgorithmInfo(
        name="Dijkstra",
        search=dijkstra,
        frontier="priority queue",
        shortest_path=True,
        description="Expands the cell with the smallest known distance from the start",
        best_for="Finding shortest paths in uniform-cost grids",
    ),
    "A*": AlgorithmInfo(
        name="A*",
        search=astar,
        frontier="priority queue",
        shortest_path=True,
        description="Expands the cell with the lowest g-score plus Manhattan distance to the end",
        best_for="Efficient pathfinding with estimated distance to goal",
    ),
}

# Lowercase aliases accepted at the dispatch boundary
_ALIASES = {
    "bfs": "BFS",
    "dfs": "DFS",
    "dijkstra": "Dijkstra",
    "a*": "A*",
    "astar": "A*",
    "a-star": "A*",
}


def get_algorithm(name: str) -> AlgorithmInfo:
    """
    Look up an algorithm by name (case-insensitive).

    Raises:
        UnknownAlgorithm: If name is not a registered algorithm
    """
    key = _ALIASES.get(str(name).strip().lower())
    if key is None:
        available = ", ".join(ALGORITHMS)
        raise UnknownAlgorithm(f"Unknown algorithm '{name}'. Available: {available}")
    return ALGORITHMS[key]


def run(algorithm: str, grid: Grid, start: Coordinate, end: Coordinate) -> SearchResult:
    """
    Run a search on an immutable grid snapshot.

    Args:
        algorithm: BFS, DFS, Dijkstra or A*
        grid: Grid to search
        start: Start coordinate
        end: End coordinate

    Returns:
        SearchResult; an unreachable end gives an empty path, not an error

    Raises:
        UnknownAlgorithm: If algorithm is not registered
        InvalidGrid: If grid is not a Grid or an endpoint is out of bounds
            or on a wall
    """
    info = get_algorithm(algorithm)
    if not isinstance(grid, Grid):
        raise InvalidGrid(f"Expected a Grid, got {type(grid).__name__}")
    start = grid.validate_coordinate(start, "start")
    end = grid.validate_coordinate(end, "end")

    result = info.search(grid, start, end)
    if result.found:
        logger.info(
            f"{info.name}: path of {result.path_length} steps, {len(result.visited)} cells visited"
        )
    else:
        logger.info(f"{info.name}: no path, {len(result.visited)} cells visited")
    return result


def solve(algorithm: str, grid: Grid) -> SearchResult:
    """
    Run a search between the START and END cells stored in the grid.

    Raises:
        UnknownAlgorithm: If algorithm is not registered
        MissingEndpoint: If the grid lacks a START or END cell
    """
    get_algorithm(algorithm)
    start, end = grid.endpoints()
    return run(algorithm, grid, start, end)


__all__ = [
    "ALGORITHMS",
    "AlgorithmInfo",
    "SearchResult",
    "Frontier",
    "FifoFrontier",
    "LifoFrontier",
    "PriorityFrontier",
    "bfs",
    "dfs",
    "dijkstra",
    "astar",
    "get_algorithm",
    "run",
    "solve",
]

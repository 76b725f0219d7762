"""
Search result value type and the shared visited-on-pop loops.

walk() drives the unweighted searches (BFS, DFS); best_first() drives the
cost-ordered ones (Dijkstra, A*).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from pathviz.grid.model import Coordinate, Grid
from pathviz.grid.neighbors import neighbors
from pathviz.search.frontier import Frontier, PriorityFrontier

Path = tuple[Coordinate, ...]


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of one search run.

    Attributes:
        path: Start-to-end route, inclusive. Empty when end is unreachable.
        visited: Coordinates in the order the search finalized them;
            visited[0] is the start cell
        algorithm: Name of the algorithm that produced this result
    """

    path: Path
    visited: Path
    algorithm: str = field(default="", compare=False)

    @property
    def found(self) -> bool:
        """Whether the end cell was reached."""
        return len(self.path) > 0

    @property
    def path_length(self) -> int | None:
        """Number of edges on the path, None when no path exists."""
        return len(self.path) - 1 if self.path else None

    def to_dict(self) -> dict:
        return {
            "algorithm": self.algorithm,
            "found": self.found,
            "path": [list(c) for c in self.path],
            "visited": [list(c) for c in self.visited],
        }


def walk(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
    frontier: Frontier,
    order: Callable[[list[Coordinate]], list[Coordinate]] = list,
    algorithm: str = "",
) -> SearchResult:
    """
    Unweighted visited-on-pop traversal shared by BFS and DFS.

    Frontier entries are (coordinate, path-so-far). A coordinate is marked
    visited only when popped; duplicates popped later are skipped.

    Args:
        grid: Grid snapshot to search
        start: Start coordinate
        end: End coordinate
        frontier: Empty FIFO or LIFO frontier deciding exploration order
        order: Reorders the canonical neighbor list before pushing
        algorithm: Name recorded on the result
    """
    visited: set[Coordinate] = set()
    visited_order: list[Coordinate] = []

    frontier.push((start, (start,)))

    while frontier:
        current, path = frontier.pop()

        if current in visited:
            continue
        visited.add(current)
        visited_order.append(current)

        if current == end:
            return SearchResult(path=path, visited=tuple(visited_order), algorithm=algorithm)

        for nxt in order(neighbors(grid, *current)):
            if nxt not in visited:
                frontier.push((nxt, path + (nxt,)))

    return SearchResult(path=(), visited=tuple(visited_order), algorithm=algorithm)


def best_first(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
    heuristic: Callable[[Coordinate], float] | None = None,
    algorithm: str = "",
) -> SearchResult:
    """
    Uniform-cost visited-on-pop search, optionally guided by a heuristic.

    Keeps a cost table g (numpy, +inf everywhere except start) and pushes a
    neighbor only when g[current] + 1 strictly improves its entry. Priority
    is g for Dijkstra and g + heuristic for A*; equal priorities pop in
    push order.
    """
    h = heuristic or (lambda coord: 0)

    g = np.full(grid.shape, np.inf)
    g[start] = 0

    frontier: PriorityFrontier = PriorityFrontier()
    frontier.push((start, (start,)), priority=h(start))

    visited: set[Coordinate] = set()
    visited_order: list[Coordinate] = []

    while frontier:
        current, path = frontier.pop()

        if current in visited:
            continue
        visited.add(current)
        visited_order.append(current)

        if current == end:
            return SearchResult(path=path, visited=tuple(visited_order), algorithm=algorithm)

        candidate = int(g[current]) + 1  # uniform edge cost
        for nxt in neighbors(grid, *current):
            if candidate < g[nxt]:
                g[nxt] = candidate
                frontier.push((nxt, path + (nxt,)), priority=candidate + h(nxt))

    return SearchResult(path=(), visited=tuple(visited_order), algorithm=algorithm)

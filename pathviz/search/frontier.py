"""
Frontier containers: the pending-exploration set of a search.

The pop policy is what gives each algorithm its character:
- FifoFrontier: oldest first (BFS)
- LifoFrontier: newest first (DFS)
- PriorityFrontier: lowest priority first, ties in push order (Dijkstra, A*)
"""

from __future__ import annotations

import heapq
import itertools
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Frontier(ABC, Generic[T]):
    """Abstract exploration-order policy."""

    @abstractmethod
    def push(self, item: T, priority: float | None = None) -> None:
        """Add an item. Only PriorityFrontier uses priority."""
        ...

    @abstractmethod
    def pop(self) -> T:
        """
        Remove and return the next item.

        Raises:
            IndexError: If the frontier is empty
        """
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self)})"


class FifoFrontier(Frontier[T]):
    """Queue: pop returns the oldest pushed item."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()

    def push(self, item: T, priority: float | None = None) -> None:
        self._items.append(item)

    def pop(self) -> T:
        if not self._items:
            raise IndexError("pop from empty frontier")
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)


class LifoFrontier(Frontier[T]):
    """Stack: pop returns the newest pushed item."""

    def __init__(self) -> None:
        self._items: list[T] = []

    def push(self, item: T, priority: float | None = None) -> None:
        self._items.append(item)

    def pop(self) -> T:
        if not self._items:
            raise IndexError("pop from empty frontier")
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)


class PriorityFrontier(Frontier[T]):
    """
    Binary heap keyed on (priority, sequence).

    The sequence number increases with every push, so items with equal
    priority pop in the order they were pushed and the item itself is
    never compared.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, Any]] = []
        self._sequence = itertools.count()

    def push(self, item: T, priority: float | None = None) -> None:
        if priority is None:
            raise TypeError("PriorityFrontier.push() requires a priority")
        heapq.heappush(self._heap, (priority, next(self._sequence), item))

    def pop(self) -> T:
        if not self._heap:
            raise IndexError("pop from empty frontier")
        _, _, item = heapq.heappop(self._heap)
        return item

    def __len__(self) -> int:
        return len(self._heap)

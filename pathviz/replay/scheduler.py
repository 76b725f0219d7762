"""
Single-threaded schedulers the replay driver runs on.

A scheduler only needs to run a callback after a delay and report the
current time. Nothing is ever cancelled through the scheduler: stale
callbacks are discarded by the driver's run-generation check.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable

Callback = Callable[[], None]


class Scheduler(ABC):
    """Runs callbacks after a delay on a single thread."""

    @property
    @abstractmethod
    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callback) -> None:
        """Run callback once, delay_ms milliseconds from now."""
        ...


class ManualScheduler(Scheduler):
    """
    Virtual clock advanced explicitly by the caller.

    Callbacks due at the same time run in the order they were scheduled.
    Callbacks scheduled while advancing run in the same advance() call if
    they fall due inside the window.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, Callback]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of callbacks not yet run."""
        return len(self._queue)

    def call_later(self, delay_ms: float, callback: Callback) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        heapq.heappush(self._queue, (self._now + delay_ms, next(self._sequence), callback))

    def advance(self, ms: float) -> int:
        """
        Move the clock forward by ms, running every callback that falls due.

        Returns:
            Number of callbacks run
        """
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards ({ms} ms)")
        deadline = self._now + ms
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, callback = heapq.heappop(self._queue)
            self._now = due
            callback()
            ran += 1
        self._now = deadline
        return ran

    def run_until_idle(self, limit: int = 1_000_000) -> int:
        """
        Run callbacks in due order until none are left.

        Raises:
            RuntimeError: If more than limit callbacks run (runaway reschedule)
        """
        ran = 0
        while self._queue:
            if ran >= limit:
                raise RuntimeError(f"Scheduler still busy after {limit} callbacks")
            due, _, callback = heapq.heappop(self._queue)
            self._now = due
            callback()
            ran += 1
        return ran


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    @property
    def now(self) -> float:
        return self._loop.time() * 1000

    def call_later(self, delay_ms: float, callback: Callback) -> None:
        self._loop.call_later(max(0.0, delay_ms) / 1000, callback)

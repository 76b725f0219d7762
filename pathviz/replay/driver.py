"""
Replay driver: turns a SearchResult into timed cell-reveal events.

The driver owns the display grid, a mutable projection of the logical grid
used only for progressive reveal. Visited cells are revealed one per
scheduled step; once the last one is shown the whole path is revealed at
once. Each step schedules the next with the delay current at that moment,
so speed changes apply mid-run.

Cancellation is cooperative. cancel(), start() and load_grid() bump a run
generation; every scheduled step carries the generation it was created
under and does nothing if that is no longer current.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable

import numpy as np

from pathviz.config import (
    DEFAULT_SPEED,
    MAX_SPEED,
    NO_PATH_MESSAGE,
    SPEED_STEP,
    delay_to_speed,
    speed_to_delay,
)
from pathviz.grid.model import CellType, Coordinate, Grid
from pathviz.replay.scheduler import ManualScheduler, Scheduler
from pathviz.search.base import SearchResult

logger = logging.getLogger(__name__)

# Cells the replay never overwrites
_PROTECTED = (CellType.START, CellType.END)


class ReplayState(str, Enum):
    """Lifecycle of the current replay."""

    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RevealEvent:
    """
    A single display-grid update for the renderer.

    Attributes:
        row: Cell row
        col: Cell column
        cell_type: New type of the cell (VISITED or PATH)
        at_ms: Scheduler time the update happened at
    """

    row: int
    col: int
    cell_type: CellType
    at_ms: float

    @property
    def coordinate(self) -> Coordinate:
        return (self.row, self.col)

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "col": self.col,
            "cell_type": int(self.cell_type),
            "at_ms": self.at_ms,
        }


@dataclass(frozen=True)
class ReplayOutcome:
    """
    Reported once per finished replay.

    Attributes:
        found: Whether the result had a path
        visited_count: Number of visited cells replayed
        path_length: Edge count of the path, None when not found
        message: User-facing notice ("No path found!") or None
    """

    found: bool
    visited_count: int
    path_length: int | None
    message: str | None = None


RevealListener = Callable[[RevealEvent], None]
FinishListener = Callable[[ReplayOutcome], None]


class ReplayDriver:
    """
    Replays a search result onto a display grid.

    State machine: IDLE -> RUNNING -> DONE, or RUNNING -> CANCELLED.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        grid: Grid | None = None,
        on_reveal: RevealListener | None = None,
        on_finish: FinishListener | None = None,
        delay_ms: float | None = None,
    ) -> None:
        """
        Initialize the driver.

        Args:
            scheduler: Single-threaded scheduler reveal steps run on
            grid: Logical grid to project; can be set later with load_grid()
            on_reveal: Called for every display-grid cell change
            on_finish: Called once when a replay reaches DONE
            delay_ms: Initial per-cell delay (default from DEFAULT_SPEED)
        """
        self._scheduler = scheduler
        self._on_reveal = on_reveal
        self._on_finish = on_finish
        self._delay_ms = float(speed_to_delay(DEFAULT_SPEED) if delay_ms is None else delay_ms)

        self._generation = 0
        self._state = ReplayState.IDLE
        self._result: SearchResult | None = None
        self._source: Grid | None = None
        self._display: np.ndarray | None = None

        if grid is not None:
            self.load_grid(grid)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ReplayState:
        return self._state

    @property
    def generation(self) -> int:
        """Identity of the current run; bumped on start, cancel and grid edits."""
        return self._generation

    @property
    def delay_ms(self) -> float:
        return self._delay_ms

    @property
    def speed(self) -> int:
        """Delay expressed as a 1-100 speed setting."""
        return delay_to_speed(self._delay_ms)

    @property
    def display(self) -> Grid:
        """Snapshot of the display grid."""
        if self._display is None:
            raise RuntimeError("No grid loaded")
        return Grid.from_array(self._display)

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    def load_grid(self, grid: Grid) -> None:
        """
        Project a new logical grid, e.g. after the user edited it.

        Any replay in progress is invalidated and the display is reset.
        """
        self._generation += 1
        if self._state == ReplayState.RUNNING:
            logger.info("Grid changed during replay, cancelling")
            self._state = ReplayState.CANCELLED
        else:
            self._state = ReplayState.IDLE
        self._source = grid.cleared()
        self._display = self._source.cells.copy()
        self._result = None

    def start(self, result: SearchResult, base_delay_ms: float | None = None) -> int:
        """
        Begin replaying result, superseding any replay in progress.

        Args:
            result: Search output to replay
            base_delay_ms: Per-cell delay; keeps the current delay if None

        Returns:
            The generation of the new run
        """
        if self._source is None:
            raise RuntimeError("No grid loaded")
        if base_delay_ms is not None:
            self.set_delay(base_delay_ms)

        self._generation += 1
        self._display = self._source.cells.copy()
        self._result = result
        generation = self._generation

        if not result.visited:
            logger.info("Replay has no visited cells")
            self._state = ReplayState.DONE
            self._finish()
            return generation

        logger.debug(
            f"Replay {generation} started: {len(result.visited)} visited, "
            f"{len(result.path)} path cells, {self._delay_ms:g} ms/cell"
        )
        self._state = ReplayState.RUNNING
        self._scheduler.call_later(0, partial(self._step, generation, 0))
        return generation

    def cancel(self) -> bool:
        """
        Stop the current replay. Already-scheduled steps become no-ops.

        Returns:
            True if a running replay was cancelled
        """
        self._generation += 1
        if self._state != ReplayState.RUNNING:
            return False
        self._state = ReplayState.CANCELLED
        logger.info("Replay cancelled")
        return True

    def set_delay(self, delay_ms: float) -> None:
        """Change the delay used for every step scheduled from now on."""
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        self._delay_ms = float(delay_ms)

    def increase_speed(self, step: int = SPEED_STEP) -> float:
        """
        Raise the speed setting by step (capped at MAX_SPEED).

        Returns:
            The new delay in milliseconds
        """
        speed = min(self.speed + step, MAX_SPEED)
        self.set_delay(speed_to_delay(speed))
        return self._delay_ms

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _step(self, generation: int, index: int) -> None:
        if generation != self._generation:
            logger.debug(f"Dropping stale step {index} of replay {generation}")
            return

        visited = self._result.visited
        self._reveal(visited[index], CellType.VISITED)

        if index + 1 < len(visited):
            # delay read now so speed changes apply to the remaining steps
            self._scheduler.call_later(self._delay_ms, partial(self._step, generation, index + 1))
            return

        for coord in self._result.path:
            self._reveal(coord, CellType.PATH)
        self._state = ReplayState.DONE
        self._finish()

    def _reveal(self, coord: Coordinate, cell_type: CellType) -> None:
        row, col = coord
        if self._display[row, col] in _PROTECTED:
            return
        self._display[row, col] = cell_type
        if self._on_reveal is not None:
            self._on_reveal(RevealEvent(row, col, cell_type, self._scheduler.now))

    def _finish(self) -> None:
        result = self._result
        outcome = ReplayOutcome(
            found=result.found,
            visited_count=len(result.visited),
            path_length=result.path_length,
            message=None if result.found else NO_PATH_MESSAGE,
        )
        if outcome.found:
            logger.info(f"Replay finished: path of {outcome.path_length} steps")
        else:
            logger.info(f"Replay finished: {NO_PATH_MESSAGE}")
        if self._on_finish is not None:
            self._on_finish(outcome)


def record_timeline(
    grid: Grid,
    result: SearchResult,
    delay_ms: float = speed_to_delay(DEFAULT_SPEED),
) -> tuple[list[RevealEvent], ReplayOutcome]:
    """
    Replay result against a virtual clock and collect every event.

    Returns:
        (events in reveal order with virtual timestamps, outcome)
    """
    events: list[RevealEvent] = []
    outcomes: list[ReplayOutcome] = []
    scheduler = ManualScheduler()
    driver = ReplayDriver(
        scheduler,
        grid=grid,
        on_reveal=events.append,
        on_finish=outcomes.append,
        delay_ms=delay_ms,
    )
    driver.start(result)
    scheduler.run_until_idle()
    return events, outcomes[0]

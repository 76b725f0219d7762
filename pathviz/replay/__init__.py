"""
Replay module.

Turns a finished search into a time-ordered sequence of cell reveals:
- ReplayDriver: Cancellable, speed-adjustable reveal state machine
- record_timeline: Run a replay on a virtual clock and collect its events
- ManualScheduler / AsyncioScheduler: Schedulers the driver runs on
"""

from pathviz.replay.driver import (
    ReplayDriver,
    ReplayOutcome,
    ReplayState,
    RevealEvent,
    record_timeline,
)
from pathviz.replay.scheduler import AsyncioScheduler, ManualScheduler, Scheduler

__all__ = [
    "ReplayDriver",
    "ReplayOutcome",
    "ReplayState",
    "RevealEvent",
    "record_timeline",
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
]

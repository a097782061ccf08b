"""Timer package."""

from .config import (
    IntervalConfig,
    DEFAULT_ROUNDS,
    DEFAULT_WORK_SECONDS,
    DEFAULT_REST_SECONDS,
    WEARABLE_FINISHED_PULSES,
)
from .engine import IntervalEngine, EngineSnapshot, Phase, TICK_MS
from .scheduler import Scheduler, QtScheduler, ManualScheduler

__all__ = [
    "IntervalConfig",
    "DEFAULT_ROUNDS",
    "DEFAULT_WORK_SECONDS",
    "DEFAULT_REST_SECONDS",
    "WEARABLE_FINISHED_PULSES",
    "IntervalEngine",
    "EngineSnapshot",
    "Phase",
    "TICK_MS",
    "Scheduler",
    "QtScheduler",
    "ManualScheduler",
]

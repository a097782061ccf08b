"""Shared test helpers for Interval Trainer."""

from intervaltrainer.timer.engine import IntervalEngine, Phase
from intervaltrainer.timer.scheduler import ManualScheduler


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class Recorder:
    """Notifier double that records each phase together with engine state."""

    def __init__(self):
        self.calls: list[tuple[Phase, int, int]] = []
        self._engine: IntervalEngine | None = None

    def bind(self, engine: IntervalEngine) -> None:
        self._engine = engine

    def __call__(self, phase: Phase) -> None:
        if self._engine is None:
            self.calls.append((phase, -1, -1))
        else:
            self.calls.append(
                (phase, self._engine.current_round, self._engine.remaining_ms)
            )

    @property
    def phases(self) -> list[Phase]:
        return [c[0] for c in self.calls]


class FakeSounds:
    """Stands in for SoundManager."""

    def __init__(self):
        self.played: list[str] = []
        self.volume = 70

    def play(self, name: str) -> None:
        self.played.append(name)

    def set_volume(self, level: int) -> None:
        self.volume = level


def phase_ms(seconds: int, tick_ms: int = 10) -> int:
    """Simulated time one phase occupies: the countdown plus the advancing tick."""
    return seconds * 1000 + tick_ms


def run_to_finish(
    engine: IntervalEngine, scheduler: ManualScheduler, limit_ms: int = 3_600_000,
) -> None:
    """Advance the clock tick by tick until the engine finishes."""
    step = engine.tick_ms
    elapsed = 0
    while not engine.is_finished and elapsed < limit_ms:
        scheduler.advance(step)
        elapsed += step

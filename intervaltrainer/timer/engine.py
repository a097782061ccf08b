"""Interval state machine for the workout timer.

States
------
WORK       Work phase counting down.
REST       Rest phase counting down.
FINISHED   Terminal; the last rest of the last round has run out.

Running and paused are not states of their own: ``is_running`` says
whether the tick is armed, and pausing freezes the countdown in place.

Transitions
-----------
WORK → REST                            (work runs out)
REST → WORK, round + 1                 (rest runs out, rounds left)
REST → FINISHED                        (rest runs out on the last round)
Any → WORK, round 0, not running       (reset)

Every transition into a phase calls the notifier exactly once with the
destination phase.  The initial work phase of ``start()`` is not a
transition; it only notifies when ``notify_on_start`` is set.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from .config import IntervalConfig
from .scheduler import Scheduler


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    REST = "rest"
    FINISHED = "finished"


# ── constants ─────────────────────────────────────────────────────────────

TICK_MS = 10

Notifier = Callable[[Phase], None]


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the engine, published on every state change."""

    phase: Phase
    current_round: int
    rounds: int
    remaining_ms: int
    phase_total_ms: int
    is_running: bool

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        if self.phase_total_ms <= 0:
            return 1.0 if self.phase == Phase.FINISHED else 0.0
        elapsed = self.phase_total_ms - self.remaining_ms
        return max(0.0, min(1.0, elapsed / self.phase_total_ms))


# ── engine ────────────────────────────────────────────────────────────────


class IntervalEngine(QObject):
    """Work/rest countdown driven by an injected scheduler.

    Signals
    -------
    tick(remaining_ms: int)
        Emitted after every countdown step.
    state_changed(snapshot: EngineSnapshot)
        Emitted after start, pause, reset and every phase entry.
    phase_entered(phase: Phase)
        Emitted once per phase-entry transition, right before the
        notifier is called.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    phase_entered = pyqtSignal(object)

    def __init__(
        self,
        config: IntervalConfig,
        scheduler: Scheduler,
        notifier: Notifier | None = None,
        *,
        tick_ms: int = TICK_MS,
        notify_on_start: bool = False,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._config = config
        self._scheduler = scheduler
        self._notifier = notifier
        self._tick_ms = max(1, int(tick_ms))
        self._notify_on_start = notify_on_start

        # ── state ─────────────────────────────────────────────────────
        self._lock = threading.RLock()
        self._handle: int | None = None
        self._phase = Phase.WORK
        self._round = 0
        self._remaining_ms = config.work_ms
        self._running = False

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> IntervalConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def current_round(self) -> int:
        """0 before the first start, then 1..rounds."""
        return self._round

    @property
    def rounds(self) -> int:
        return self._config.rounds

    @property
    def remaining_ms(self) -> int:
        return self._remaining_ms

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_finished(self) -> bool:
        return self._phase == Phase.FINISHED

    @property
    def tick_ms(self) -> int:
        return self._tick_ms

    def phase_duration_ms(self, phase: Phase) -> int:
        if phase == Phase.WORK:
            return self._config.work_ms
        if phase == Phase.REST:
            return self._config.rest_ms
        return 0

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return EngineSnapshot(
                phase=self._phase,
                current_round=self._round,
                rounds=self._config.rounds,
                remaining_ms=self._remaining_ms,
                phase_total_ms=self.phase_duration_ms(self._phase),
                is_running=self._running,
            )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start the workout, or resume it after ``pause()``.

        From round 0 the first round begins immediately: ``current_round``
        becomes 1 before this returns.  Calling it while running re-arms
        the tick without touching the countdown.  A finished workout
        stays finished until ``reset()``.
        """
        with self._lock:
            if self._phase == Phase.FINISHED:
                return
            first_start = self._round == 0
            if first_start:
                self._round = 1
                self._phase = Phase.WORK
                self._remaining_ms = self._config.work_ms
                logger.debug("workout started: %s", self._config)
            self._running = True
            self._arm()
            self._publish()
            if first_start and self._notify_on_start:
                self._notify(Phase.WORK)

    def pause(self) -> None:
        """Freeze the countdown.  No-op when not running."""
        with self._lock:
            if not self._running:
                return
            self._disarm()
            self._running = False
            self._publish()

    def reset(self) -> None:
        """Back to round 0 with a full work phase, not running."""
        with self._lock:
            self._disarm()
            self._phase = Phase.WORK
            self._round = 0
            self._remaining_ms = self._config.work_ms
            self._running = False
            self._publish()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _arm(self) -> None:
        self._disarm()
        self._handle = self._scheduler.arm(self._tick_ms, self._on_tick)

    def _disarm(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _on_tick(self) -> None:
        with self._lock:
            if not self._running:
                # stale delivery after cancel
                return
            if self._remaining_ms > 0:
                self._remaining_ms = max(0, self._remaining_ms - self._tick_ms)
                self.tick.emit(self._remaining_ms)
                return

            self._advance()
            # zero-length phases are passed through in the same tick
            while self._running and self._remaining_ms == 0:
                self._advance()

    def _advance(self) -> None:
        if self._phase == Phase.WORK:
            self._enter(Phase.REST)
        elif self._phase == Phase.REST:
            if self._round < self._config.rounds:
                self._round += 1
                self._enter(Phase.WORK)
            else:
                self._finish()

    def _enter(self, phase: Phase) -> None:
        self._phase = phase
        self._remaining_ms = self.phase_duration_ms(phase)
        self._arm()
        logger.debug("round %d: entered %s", self._round, phase.value)
        self._publish()
        self._notify(phase)

    def _finish(self) -> None:
        self._disarm()
        self._phase = Phase.FINISHED
        self._remaining_ms = 0
        self._running = False
        logger.debug("workout finished after %d rounds", self._round)
        self._publish()
        self._notify(Phase.FINISHED)

    def _publish(self) -> None:
        self.state_changed.emit(self.snapshot())

    def _notify(self, phase: Phase) -> None:
        self.phase_entered.emit(phase)
        if self._notifier is None:
            return
        try:
            self._notifier(phase)
        except Exception:
            # Feedback is best-effort; the countdown must keep going.
            logger.exception("notifier failed for %s", phase.value)

"""Periodic callback scheduling.

The engine never owns a timer directly; it asks a scheduler to ``arm`` a
repeating callback and gets back a handle it can ``cancel``.  Two
implementations:

QtScheduler      one ``QTimer`` per handle on the Qt event loop.
ManualScheduler  simulated clock, advanced explicitly (tests, headless).
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


Callback = Callable[[], None]


class Scheduler(Protocol):
    def arm(self, period_ms: int, callback: Callback) -> int:
        """Call *callback* every *period_ms* until cancelled."""
        ...

    def cancel(self, handle: int | None) -> None:
        """Stop the registration behind *handle*.  Unknown handles are ignored."""
        ...


# ── Qt ────────────────────────────────────────────────────────────────────


class QtScheduler(QObject):
    """Scheduler backed by repeating ``QTimer`` objects.

    Callbacks are delivered on the thread owning this object, which keeps
    every engine mutation on the single Qt event loop.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._ids = itertools.count(1)
        self._timers: dict[int, QTimer] = {}

    def arm(self, period_ms: int, callback: Callback) -> int:
        handle = next(self._ids)
        timer = QTimer(self)
        timer.setInterval(max(0, int(period_ms)))
        timer.timeout.connect(callback)
        self._timers[handle] = timer
        timer.start()
        return handle

    def cancel(self, handle: int | None) -> None:
        if handle is None:
            return
        timer = self._timers.pop(handle, None)
        if timer is None:
            return
        timer.stop()
        timer.deleteLater()

    @property
    def active_count(self) -> int:
        return len(self._timers)


# ── simulated clock ───────────────────────────────────────────────────────


@dataclass
class _Registration:
    period_ms: int
    callback: Callback
    due_ms: int


class ManualScheduler:
    """Deterministic scheduler driven by :meth:`advance`.

    Due callbacks fire in time order; registrations with the same due
    time fire in arming order.  A callback may arm or cancel other
    registrations (including its own) while it runs.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._regs: dict[int, _Registration] = {}
        self._now_ms = 0

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def active_count(self) -> int:
        return len(self._regs)

    def is_active(self, handle: int | None) -> bool:
        return handle in self._regs

    def arm(self, period_ms: int, callback: Callback) -> int:
        # A zero period would spin forever inside advance().
        period = max(1, int(period_ms))
        handle = next(self._ids)
        self._regs[handle] = _Registration(period, callback, self._now_ms + period)
        return handle

    def cancel(self, handle: int | None) -> None:
        if handle is not None:
            self._regs.pop(handle, None)

    def advance(self, ms: int) -> None:
        """Move the clock forward *ms* milliseconds, firing what falls due."""
        target = self._now_ms + int(ms)
        while True:
            due = self._next_due(target)
            if due is None:
                break
            _, reg = due
            self._now_ms = reg.due_ms
            reg.due_ms += reg.period_ms
            reg.callback()
        self._now_ms = target

    def _next_due(self, target: int) -> tuple[int, _Registration] | None:
        best: tuple[int, _Registration] | None = None
        for handle, reg in self._regs.items():
            if reg.due_ms > target:
                continue
            if best is None or reg.due_ms < best[1].due_ms:
                best = (handle, reg)
        return best

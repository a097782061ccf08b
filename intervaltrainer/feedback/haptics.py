"""Repeat-count haptic pulse trains.

A train fires its first pulse immediately and the rest at a fixed
spacing on the scheduler, then cancels its own registration.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..timer.scheduler import Scheduler


logger = logging.getLogger(__name__)

PULSE_SPACING_MS = 800


class PulseTrain:
    """*count* calls to *pulse*, *spacing_ms* apart."""

    def __init__(
        self,
        scheduler: Scheduler,
        pulse: Callable[[], None],
        count: int,
        spacing_ms: int = PULSE_SPACING_MS,
    ) -> None:
        self._scheduler = scheduler
        self._pulse = pulse
        self._remaining = max(0, int(count))
        self._spacing_ms = spacing_ms
        self._handle: int | None = None

    @property
    def remaining(self) -> int:
        """Pulses not yet delivered."""
        return self._remaining

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self._remaining <= 0:
            return
        self._fire()
        if self._remaining > 0:
            self._handle = self._scheduler.arm(self._spacing_ms, self._fire)

    def cancel(self) -> None:
        self._remaining = 0
        self._stop()

    def _fire(self) -> None:
        if self._remaining <= 0:
            self._stop()
            return
        self._remaining -= 1
        try:
            self._pulse()
        except Exception:
            logger.exception("haptic pulse failed")
        if self._remaining == 0:
            self._stop()

    def _stop(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

"""Sound and haptic feedback for phase entries.

``PhaseNotifier`` is what the engine calls on every phase entry.  It
maps the destination phase to a sound and a pulse count and realizes
both without blocking: sound playback is asynchronous in Qt and pulse
trains run on the scheduler.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from ..timer.config import IntervalConfig
from ..timer.engine import Phase
from ..timer.scheduler import Scheduler
from .haptics import PulseTrain, PULSE_SPACING_MS


logger = logging.getLogger(__name__)

PHASE_SOUNDS: dict[Phase, str] = {
    Phase.WORK: "work_start",
    Phase.REST: "rest_start",
    Phase.FINISHED: "finished",
}


class SoundPlayer(Protocol):
    def play(self, name: str) -> None: ...


class PhaseNotifier:
    """Callable notifier: ``notifier(phase)``.

    ``sound_enabled`` and ``vibration_enabled`` gate the two channels
    independently.  A new phase entry cancels a pulse train that is
    still running, so trains never overlap.
    """

    def __init__(
        self,
        config: IntervalConfig,
        scheduler: Scheduler,
        *,
        sounds: SoundPlayer | None = None,
        pulse: Callable[[], None] | None = None,
        sound_enabled: bool = True,
        vibration_enabled: bool = True,
        spacing_ms: int = PULSE_SPACING_MS,
    ) -> None:
        self._config = config
        self._scheduler = scheduler
        self._sounds = sounds
        self._pulse = pulse
        self.sound_enabled = sound_enabled
        self.vibration_enabled = vibration_enabled
        self._spacing_ms = spacing_ms
        self._train: PulseTrain | None = None

    def pulse_count(self, phase: Phase) -> int:
        if phase == Phase.WORK:
            return self._config.work_vibration_pulses
        if phase == Phase.REST:
            return self._config.rest_vibration_pulses
        return self._config.finished_vibration_pulses

    def __call__(self, phase: Phase) -> None:
        logger.info("phase entered: %s", phase.value)
        if self.sound_enabled and self._sounds is not None:
            self._sounds.play(PHASE_SOUNDS[phase])
        if self.vibration_enabled and self._pulse is not None:
            self.vibrate(self.pulse_count(phase))

    def vibrate(self, count: int) -> None:
        """Start a train of *count* pulses.  ``count <= 0`` does nothing."""
        self.cancel()
        if count <= 0 or self._pulse is None:
            return
        self._train = PulseTrain(
            self._scheduler, self._pulse, count, self._spacing_ms,
        )
        self._train.start()

    def cancel(self) -> None:
        """Stop any pulse train still running."""
        if self._train is not None:
            self._train.cancel()
            self._train = None

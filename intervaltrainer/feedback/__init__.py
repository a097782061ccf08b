"""Feedback package: sounds and haptic pulses for phase entries."""

from .haptics import PulseTrain, PULSE_SPACING_MS
from .notifier import PhaseNotifier, PHASE_SOUNDS

__all__ = [
    "PulseTrain",
    "PULSE_SPACING_MS",
    "PhaseNotifier",
    "PHASE_SOUNDS",
]

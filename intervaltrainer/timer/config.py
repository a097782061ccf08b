"""Workout configuration for one engine lifetime.

The configuration never refuses a value.  Direct construction clamps to
the structural invariants (at least one round, no negative durations or
pulse counts); :meth:`IntervalConfig.from_settings` is the lenient path
used for the settings store, where ``0`` means "never set" and is
replaced by the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# ── defaults ──────────────────────────────────────────────────────────────

DEFAULT_ROUNDS = 6
DEFAULT_WORK_SECONDS = 4
DEFAULT_REST_SECONDS = 8
DEFAULT_PULSES = 1
DEFAULT_FINISHED_PULSES = 1
WEARABLE_FINISHED_PULSES = 5


@dataclass(frozen=True)
class IntervalConfig:
    """Round count, phase lengths (seconds) and haptic pulse counts."""

    rounds: int = DEFAULT_ROUNDS
    work_duration: int = DEFAULT_WORK_SECONDS
    rest_duration: int = DEFAULT_REST_SECONDS
    work_vibration_pulses: int = DEFAULT_PULSES
    rest_vibration_pulses: int = DEFAULT_PULSES
    finished_vibration_pulses: int = DEFAULT_FINISHED_PULSES

    def __post_init__(self) -> None:
        # frozen: go through object.__setattr__
        if self.rounds < 1:
            object.__setattr__(self, "rounds", DEFAULT_ROUNDS)
        if self.work_duration < 0:
            object.__setattr__(self, "work_duration", DEFAULT_WORK_SECONDS)
        if self.rest_duration < 0:
            object.__setattr__(self, "rest_duration", DEFAULT_REST_SECONDS)
        for name in (
            "work_vibration_pulses",
            "rest_vibration_pulses",
            "finished_vibration_pulses",
        ):
            if getattr(self, name) < 0:
                object.__setattr__(self, name, 0)

    @property
    def work_ms(self) -> int:
        return self.work_duration * 1000

    @property
    def rest_ms(self) -> int:
        return self.rest_duration * 1000

    @property
    def total_seconds(self) -> int:
        """Length of the whole workout."""
        return self.rounds * (self.work_duration + self.rest_duration)

    @classmethod
    def from_settings(cls, settings: Any) -> IntervalConfig:
        """Build from a settings object, treating non-positive values as unset.

        *settings* only needs the attributes of :class:`~intervaltrainer.settings.Settings`
        that matter here; missing pulse attributes fall back to defaults.
        """
        rounds = _int_attr(settings, "rounds", 0)
        work = _int_attr(settings, "work_duration", 0)
        rest = _int_attr(settings, "rest_duration", 0)
        return cls(
            rounds=rounds if rounds > 0 else DEFAULT_ROUNDS,
            work_duration=work if work > 0 else DEFAULT_WORK_SECONDS,
            rest_duration=rest if rest > 0 else DEFAULT_REST_SECONDS,
            work_vibration_pulses=_int_attr(
                settings, "work_vibration_count", DEFAULT_PULSES),
            rest_vibration_pulses=_int_attr(
                settings, "rest_vibration_count", DEFAULT_PULSES),
            finished_vibration_pulses=_int_attr(
                settings, "finished_vibration_count", DEFAULT_FINISHED_PULSES),
        )


def _int_attr(obj: Any, name: str, default: int) -> int:
    value = getattr(obj, name, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

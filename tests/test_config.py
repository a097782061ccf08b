"""Tests for IntervalConfig: defaults, clamping and the lenient settings path."""

import dataclasses
from types import SimpleNamespace

import pytest

from intervaltrainer.settings import Settings
from intervaltrainer.timer.config import (
    IntervalConfig,
    DEFAULT_ROUNDS,
    DEFAULT_WORK_SECONDS,
    DEFAULT_REST_SECONDS,
)


class TestDefaults:
    def test_defaults(self):
        c = IntervalConfig()
        assert (c.rounds, c.work_duration, c.rest_duration) == (6, 4, 8)
        assert c.work_vibration_pulses == 1
        assert c.rest_vibration_pulses == 1
        assert c.finished_vibration_pulses == 1

    def test_millisecond_helpers(self):
        c = IntervalConfig(rounds=3, work_duration=20, rest_duration=10)
        assert c.work_ms == 20_000
        assert c.rest_ms == 10_000
        assert c.total_seconds == 90

    def test_frozen(self):
        c = IntervalConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            c.rounds = 3


class TestClamping:
    @pytest.mark.parametrize("rounds", [0, -1, -100])
    def test_rounds_below_one(self, rounds):
        assert IntervalConfig(rounds=rounds).rounds == DEFAULT_ROUNDS

    def test_negative_durations(self):
        c = IntervalConfig(work_duration=-5, rest_duration=-1)
        assert c.work_duration == DEFAULT_WORK_SECONDS
        assert c.rest_duration == DEFAULT_REST_SECONDS

    def test_zero_durations_are_kept(self):
        c = IntervalConfig(rounds=1, work_duration=0, rest_duration=0)
        assert c.work_duration == 0
        assert c.rest_duration == 0

    def test_negative_pulses_become_zero(self):
        c = IntervalConfig(
            work_vibration_pulses=-2,
            rest_vibration_pulses=-1,
            finished_vibration_pulses=-9,
        )
        assert c.work_vibration_pulses == 0
        assert c.rest_vibration_pulses == 0
        assert c.finished_vibration_pulses == 0


class TestFromSettings:
    def test_values_carried_over(self):
        s = Settings(
            rounds=3, work_duration=30, rest_duration=15,
            work_vibration_count=2, rest_vibration_count=4,
            finished_vibration_count=5,
        )
        c = IntervalConfig.from_settings(s)
        assert (c.rounds, c.work_duration, c.rest_duration) == (3, 30, 15)
        assert c.work_vibration_pulses == 2
        assert c.rest_vibration_pulses == 4
        assert c.finished_vibration_pulses == 5

    @pytest.mark.parametrize("bad", [0, -3])
    def test_non_positive_values_use_defaults(self, bad):
        s = Settings(rounds=bad, work_duration=bad, rest_duration=bad)
        c = IntervalConfig.from_settings(s)
        assert (c.rounds, c.work_duration, c.rest_duration) == (6, 4, 8)

    def test_zero_pulses_allowed(self):
        s = Settings(work_vibration_count=0, rest_vibration_count=0)
        c = IntervalConfig.from_settings(s)
        assert c.work_vibration_pulses == 0
        assert c.rest_vibration_pulses == 0

    def test_partial_source(self):
        c = IntervalConfig.from_settings(SimpleNamespace(rounds=2))
        assert c.rounds == 2
        assert c.work_duration == DEFAULT_WORK_SECONDS
        assert c.rest_duration == DEFAULT_REST_SECONDS
        assert c.work_vibration_pulses == 1

    def test_garbage_values(self):
        c = IntervalConfig.from_settings(
            SimpleNamespace(rounds="many", work_duration=None, rest_duration="12"),
        )
        assert c.rounds == DEFAULT_ROUNDS
        assert c.work_duration == DEFAULT_WORK_SECONDS
        assert c.rest_duration == 12

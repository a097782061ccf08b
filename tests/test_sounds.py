"""Tests for phase sound synthesis and the SoundManager."""

import io
import wave

import pytest

from intervaltrainer.feedback.sounds import (
    GENERATORS,
    SAMPLE_RATE,
    SOUND_NAMES,
    SoundManager,
    generate_finished,
    generate_pulse,
)


def _read(data: bytes):
    with wave.open(io.BytesIO(data), "rb") as wf:
        return wf.getnchannels(), wf.getsampwidth(), wf.getframerate(), wf.getnframes()


class TestSynthesis:

    @pytest.mark.parametrize("name", SOUND_NAMES)
    def test_valid_mono_wav(self, name):
        channels, width, rate, frames = _read(GENERATORS[name]())
        assert channels == 1
        assert width == 2
        assert rate == SAMPLE_RATE
        assert frames > 0

    def test_every_name_has_a_generator(self):
        assert set(GENERATORS) == set(SOUND_NAMES)

    def test_finished_is_longest(self):
        finished = _read(generate_finished())[3]
        pulse = _read(generate_pulse())[3]
        assert finished > pulse

    def test_pulse_is_short(self):
        frames = _read(generate_pulse())[3]
        assert frames / SAMPLE_RATE < 0.25


class TestSoundManager:

    def test_writes_cache_files(self, qapp, tmp_path):
        SoundManager(sounds_dir=tmp_path)
        for name in SOUND_NAMES:
            assert (tmp_path / f"{name}.wav").exists()

    def test_existing_files_not_rewritten(self, qapp, tmp_path):
        SoundManager(sounds_dir=tmp_path)
        path = tmp_path / "pulse.wav"
        mtime = path.stat().st_mtime_ns
        SoundManager(sounds_dir=tmp_path)
        assert path.stat().st_mtime_ns == mtime

    def test_volume_is_clamped(self, qapp, tmp_path):
        mgr = SoundManager(sounds_dir=tmp_path)
        mgr.set_volume(150)
        assert mgr.volume == 100
        mgr.set_volume(-5)
        assert mgr.volume == 0
        mgr.set_volume(42)
        assert mgr.volume == 42

    def test_play_unknown_and_disabled(self, qapp, tmp_path):
        mgr = SoundManager(sounds_dir=tmp_path)
        mgr.play("does_not_exist")
        mgr.set_enabled(False)
        assert mgr.enabled is False
        mgr.play("finished")

"""Phase sounds, synthesized with numpy and played through QSoundEffect.

Every sound is built from sine tones shaped by an ADSR envelope and
written once as a 16-bit mono WAV into the cache directory.

Sound names
-----------
- ``work_start``  — bright rising triad, "go"
- ``rest_start``  — soft bell with a long tail
- ``finished``    — four-note fanfare, final note held
- ``pulse``       — low short buzz, the desktop stand-in for a haptic tap
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable, Sequence

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR


logger = logging.getLogger(__name__)

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "work_start",
    "rest_start",
    "finished",
    "pulse",
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(
    length: int,
    attack: float = 0.005,
    decay: float = 0.01,
    sustain_level: float = 0.7,
    release: float = 0.02,
) -> np.ndarray:
    """ADSR envelope; stage lengths in seconds, clipped to *length* samples."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(int(attack * SAMPLE_RATE), length)
    d = min(int(decay * SAMPLE_RATE), length - a)
    r = min(int(release * SAMPLE_RATE), length - a - d)
    if a:
        env[:a] = np.linspace(0.0, 1.0, a)
    if d:
        env[a:a + d] = np.linspace(1.0, sustain_level, d)
    if r:
        env[length - r:] = np.linspace(sustain_level, 0.0, r)
    return env


def _tone(freq: float, duration_s: float, overtone: float = 0.0) -> np.ndarray:
    """Sine at *freq* Hz, optionally mixed with its octave."""
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    wave_ = np.sin(2 * np.pi * freq * t)
    if overtone:
        wave_ = wave_ + overtone * np.sin(4 * np.pi * freq * t)
    return wave_


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _sequence(
    notes: Sequence[float],
    note_s: float,
    gap_s: float,
    gain: float,
    hold_last_s: float | None = None,
) -> np.ndarray:
    """Notes played one after another; the last may be held longer."""
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        last = i == len(notes) - 1
        dur = hold_last_s if (last and hold_last_s) else note_s
        tone = _tone(freq, dur, overtone=0.15 if last else 0.0) * gain
        release = dur * 0.6 if last else dur * 0.3
        parts.append(tone * _envelope(len(tone), sustain_level=0.5, release=release))
        if not last:
            parts.append(_silence(gap_s))
    return np.concatenate(parts)


def to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float array (-1..1) to 16-bit PCM mono WAV bytes."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def generate_work_start() -> bytes:
    """Rising triad A4→C#5→E5, short and punchy."""
    return to_wav_bytes(_sequence([440.00, 554.37, 659.25], 0.09, 0.02, 0.6))


def generate_rest_start() -> bytes:
    """Single bell at E5 with a slow decay."""
    bell = _tone(659.25, 0.9, overtone=0.2) * 0.35
    env = _envelope(len(bell), attack=0.01, decay=0.25, sustain_level=0.3, release=0.6)
    return to_wav_bytes(bell * env)


def generate_finished() -> bytes:
    """Fanfare G4→C5→E5→G5, final note held."""
    notes = [392.00, 523.25, 659.25, 783.99]
    return to_wav_bytes(_sequence(notes, 0.12, 0.03, 0.5, hold_last_s=0.5))


def generate_pulse() -> bytes:
    """150 Hz buzz, 120 ms."""
    buzz = _tone(150.0, 0.12, overtone=0.4) * 0.5
    env = _envelope(len(buzz), attack=0.003, decay=0.02, sustain_level=0.8, release=0.03)
    return to_wav_bytes(np.concatenate([buzz * env, _silence(0.03)]))


GENERATORS: dict[str, Callable[[], bytes]] = {
    "work_start": generate_work_start,
    "rest_start": generate_rest_start,
    "finished": generate_finished,
    "pulse": generate_pulse,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Synthesizes, caches and plays the phase sounds.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("rest_start")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("no sound loaded for %r", name)
            return
        effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def sounds_dir(self) -> Path:
        return self._sounds_dir

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files into the cache directory."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, generate in GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(generate())
        except OSError as exc:
            # Sound is optional; the workout runs silently.
            logger.warning("cannot write sound cache %s: %s", self._sounds_dir, exc)

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect

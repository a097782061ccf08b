"""Application settings with JSON persistence.

Settings are stored at:
    ~/.config/IntervalTrainer/settings.json

Another file can be selected with the ``INTERVALTRAINER_SETTINGS``
environment variable or ``--settings PATH`` on the command line; the
wearable companion points this at the store it shares with the phone.

Usage::

    settings = load_settings()
    settings.rounds = 8
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / ".config" / "IntervalTrainer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"
SETTINGS_ENV_VAR = "INTERVALTRAINER_SETTINGS"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── workout ───────────────────────────────────────────────────────
    rounds: int = 6
    work_duration: int = 4                 # seconds
    rest_duration: int = 8

    # ── feedback ──────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    vibration_enabled: bool = True
    work_vibration_count: int = 1
    rest_vibration_count: int = 1
    finished_vibration_count: int = 1

    # ── appearance ────────────────────────────────────────────────────
    work_color_hex: str = "#FF0000"
    rest_color_hex: str = "#00FF00"

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 560


def settings_path() -> Path:
    """The file in use: environment override, else the default location."""
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return SETTINGS_PATH


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or settings_path()
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("ignoring unreadable settings at %s: %s", path, exc)
    return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
    logger.debug("settings saved to %s", path)

"""UI package."""

from .workout_view import WorkoutView, format_remaining
from .settings_dialog import SettingsDialog, DurationPicker
from .styles import build_stylesheet, parse_hex_color, phase_color

__all__ = [
    "WorkoutView",
    "format_remaining",
    "SettingsDialog",
    "DurationPicker",
    "build_stylesheet",
    "parse_hex_color",
    "phase_color",
]

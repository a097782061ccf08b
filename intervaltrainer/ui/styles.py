"""Colours and the QSS stylesheet for Interval Trainer."""

from __future__ import annotations

import re
import string

from ..timer.engine import Phase


FALLBACK_HEX = "#FF0000"
FINISHED_HEX = "#3A3A4E"
IDLE_HEX = "#2A2A3A"

_EDGE_JUNK = re.compile(r"^[^0-9A-Za-z]+|[^0-9A-Za-z]+$")

_PALETTE: dict[str, str] = {
    "bg":         "#1A1A2E",
    "surface":    "#2A2A4A",
    "text":       "#F5F5FA",
    "text_muted": "#B0B0C8",
    "border":     "#313154",
}


def parse_hex_color(value: str | None, fallback: str = FALLBACK_HEX) -> str:
    """Normalise ``"#RRGGBB"``/``"RRGGBB"`` to ``"#RRGGBB"``.

    Only leading and trailing non-alphanumerics are trimmed; whatever is
    left must be exactly six hex digits, otherwise *fallback* is returned.
    """
    if not value:
        return fallback
    digits = _EDGE_JUNK.sub("", value)
    if len(digits) != 6 or not all(ch in string.hexdigits for ch in digits):
        return fallback
    return "#" + digits.upper()


def phase_color(
    phase: Phase,
    work_hex: str,
    rest_hex: str,
    *,
    started: bool = True,
) -> str:
    """Background colour for *phase*; neutral before the first start."""
    if phase == Phase.FINISHED:
        return FINISHED_HEX
    if not started:
        return IDLE_HEX
    if phase == Phase.REST:
        return parse_hex_color(rest_hex)
    return parse_hex_color(work_hex)


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = dict(_PALETTE)
    if palette:
        p.update(palette)
    return f"""
    QMainWindow, QDialog {{
        background-color: {p['bg']};
        color: {p['text']};
    }}
    QLabel {{
        color: {p['text']};
    }}
    QLabel#phaseLabel {{
        font-size: 28px;
        font-weight: 800;
        letter-spacing: 2px;
    }}
    QLabel#roundLabel {{
        font-size: 18px;
        color: {p['text_muted']};
    }}
    QLabel#timeLabel {{
        font-size: 56px;
        font-weight: 700;
        font-family: "Menlo", "DejaVu Sans Mono", monospace;
    }}
    QPushButton {{
        background-color: {p['surface']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 22px;
        font-size: 15px;
    }}
    QPushButton#primaryButton {{
        font-weight: 700;
    }}
    """

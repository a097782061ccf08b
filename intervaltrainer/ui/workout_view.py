"""Live workout display.

Layout (top → bottom):
    - Phase title (WORK / REST / DONE)
    - Round counter
    - Countdown ``mm:ss.cc``
    - Reset and Start/Pause buttons

The whole card takes the colour of the current phase.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)

from ..timer.engine import IntervalEngine, EngineSnapshot, Phase
from .styles import phase_color


PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK:     "WORK",
    Phase.REST:     "REST",
    Phase.FINISHED: "DONE",
}


def format_remaining(remaining_ms: float) -> str:
    """``mm:ss.cc``, truncating to whole hundredths."""
    total = max(0, int(remaining_ms))
    minutes = total // 60000
    seconds = (total // 1000) % 60
    centis = (total // 10) % 100
    return f"{minutes:02d}:{seconds:02d}.{centis:02d}"


class WorkoutView(QWidget):
    """Timer card bound to one engine; rebind with :meth:`set_engine`."""

    reset_clicked = pyqtSignal()

    def __init__(
        self,
        engine: IntervalEngine,
        parent: QWidget | None = None,
        *,
        work_hex: str = "#FF0000",
        rest_hex: str = "#00FF00",
    ) -> None:
        super().__init__(parent)
        self._engine: IntervalEngine | None = None
        self._work_hex = work_hex
        self._rest_hex = rest_hex
        self._build_ui()
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._on_reset)
        self.set_engine(engine)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self._card = QFrame(self)
        self._card.setObjectName("card")
        root.addWidget(self._card)

        layout = QVBoxLayout(self._card)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._phase_label = QLabel("", self._card)
        self._phase_label.setObjectName("phaseLabel")
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._phase_label)

        self._round_label = QLabel("", self._card)
        self._round_label.setObjectName("roundLabel")
        self._round_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._round_label)

        self._time_label = QLabel("00:00.00", self._card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        layout.addSpacing(16)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._reset_btn = QPushButton("Reset", self._card)
        self._reset_btn.setObjectName("secondaryButton")
        self._start_pause_btn = QPushButton("Start", self._card)
        self._start_pause_btn.setObjectName("primaryButton")

        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._start_pause_btn)
        layout.addLayout(btn_row)

    # ── engine binding ────────────────────────────────────────────────────

    def set_engine(self, engine: IntervalEngine) -> None:
        if self._engine is not None:
            self._engine.tick.disconnect(self._on_tick)
            self._engine.state_changed.disconnect(self._on_state_changed)
        self._engine = engine
        engine.tick.connect(self._on_tick)
        engine.state_changed.connect(self._on_state_changed)
        self._on_state_changed(engine.snapshot())

    def set_colors(self, work_hex: str, rest_hex: str) -> None:
        self._work_hex = work_hex
        self._rest_hex = rest_hex
        if self._engine is not None:
            self._on_state_changed(self._engine.snapshot())

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._engine is None:
            return
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_reset(self) -> None:
        if self._engine is not None:
            self._engine.reset()
        self.reset_clicked.emit()

    def _on_tick(self, remaining_ms: int) -> None:
        self._time_label.setText(format_remaining(remaining_ms))

    def _on_state_changed(self, snap: EngineSnapshot) -> None:
        self._phase_label.setText(PHASE_LABELS[snap.phase])
        self._round_label.setText(f"Round {snap.current_round} / {snap.rounds}")
        self._time_label.setText(format_remaining(snap.remaining_ms))

        if snap.is_running:
            self._start_pause_btn.setText("Pause")
        elif snap.current_round == 0:
            self._start_pause_btn.setText("Start")
        else:
            self._start_pause_btn.setText("Resume")
        self._start_pause_btn.setEnabled(snap.phase != Phase.FINISHED)

        bg = phase_color(
            snap.phase, self._work_hex, self._rest_hex,
            started=snap.current_round > 0,
        )
        self._card.setStyleSheet(
            f"QFrame#card {{ background-color: {bg}; border-radius: 18px; }}"
        )

    # ── read-only accessors ───────────────────────────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def phase_text(self) -> str:
        return self._phase_label.text()

    @property
    def round_text(self) -> str:
        return self._round_label.text()

    @property
    def start_pause_text(self) -> str:
        return self._start_pause_btn.text()

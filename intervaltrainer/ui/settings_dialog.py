"""Settings dialog for Interval Trainer.

A modal dialog for the workout parameters, feedback toggles and phase
colours.  Changes are saved immediately; the caller rebuilds the engine
from the returned settings once the dialog closes.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QPushButton,
    QFrame, QWidget, QLineEdit,
)
from PyQt6.QtCore import Qt

from ..settings import Settings, save_settings
from .styles import parse_hex_color


class DurationPicker(QWidget):
    """Minutes + seconds spin boxes (0–59 each) over a total in seconds."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(8)
        self.minutes = QSpinBox(self)
        self.minutes.setRange(0, 59)
        self.minutes.setSuffix(" min")
        self.seconds = QSpinBox(self)
        self.seconds.setRange(0, 59)
        self.seconds.setSuffix(" sec")
        row.addWidget(self.minutes)
        row.addWidget(self.seconds)

    def total_seconds(self) -> int:
        return self.minutes.value() * 60 + self.seconds.value()

    def set_total_seconds(self, total: int) -> None:
        total = max(0, min(int(total), 59 * 60 + 59))
        self.minutes.setValue(total // 60)
        self.seconds.setValue(total % 60)


class SettingsDialog(QDialog):
    """Modal dialog for all user preferences."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        sound_preview_callback: Callable[[], None] | None = None,
        save: Callable[[Settings], None] = save_settings,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(400)
        self.setModal(True)

        self._settings = settings
        self._sound_preview = sound_preview_callback
        self._save_fn = save
        self._populating = False

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Workout section ──────────────────────────────────────────
        root.addWidget(self._section_label("Workout"))
        workout_form = QFormLayout()
        workout_form.setHorizontalSpacing(20)
        workout_form.setVerticalSpacing(10)

        self._rounds_spin = QSpinBox()
        self._rounds_spin.setRange(1, 20)
        self._rounds_spin.valueChanged.connect(self._on_workout_changed)
        workout_form.addRow("Rounds:", self._rounds_spin)

        self._work_picker = DurationPicker()
        self._work_picker.minutes.valueChanged.connect(self._on_workout_changed)
        self._work_picker.seconds.valueChanged.connect(self._on_workout_changed)
        workout_form.addRow("Work:", self._work_picker)

        self._rest_picker = DurationPicker()
        self._rest_picker.minutes.valueChanged.connect(self._on_workout_changed)
        self._rest_picker.seconds.valueChanged.connect(self._on_workout_changed)
        workout_form.addRow("Rest:", self._rest_picker)

        root.addLayout(workout_form)
        root.addWidget(self._separator())

        # ── Feedback section ─────────────────────────────────────────
        root.addWidget(self._section_label("Sound & Vibration"))
        fb_form = QFormLayout()
        fb_form.setHorizontalSpacing(20)
        fb_form.setVerticalSpacing(10)

        self._sound_cb = QCheckBox("Sound")
        self._sound_cb.toggled.connect(self._on_feedback_changed)
        fb_form.addRow("", self._sound_cb)

        vol_row = QHBoxLayout()
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        self._vol_slider.sliderReleased.connect(self._on_volume_released)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)
        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        fb_form.addRow("Volume:", vol_wrapper)

        self._vibration_cb = QCheckBox("Vibration")
        self._vibration_cb.toggled.connect(self._on_feedback_changed)
        fb_form.addRow("", self._vibration_cb)

        self._work_pulses_spin = QSpinBox()
        self._work_pulses_spin.setRange(0, 10)
        self._work_pulses_spin.valueChanged.connect(self._on_feedback_changed)
        fb_form.addRow("Work pulses:", self._work_pulses_spin)

        self._rest_pulses_spin = QSpinBox()
        self._rest_pulses_spin.setRange(0, 10)
        self._rest_pulses_spin.valueChanged.connect(self._on_feedback_changed)
        fb_form.addRow("Rest pulses:", self._rest_pulses_spin)

        root.addLayout(fb_form)
        root.addWidget(self._separator())

        # ── Colours section ──────────────────────────────────────────
        root.addWidget(self._section_label("Colours"))
        color_form = QFormLayout()
        self._work_color_edit = QLineEdit()
        self._work_color_edit.setMaxLength(7)
        self._work_color_edit.editingFinished.connect(self._on_colors_changed)
        color_form.addRow("Work colour:", self._work_color_edit)
        self._rest_color_edit = QLineEdit()
        self._rest_color_edit.setMaxLength(7)
        self._rest_color_edit.editingFinished.connect(self._on_colors_changed)
        color_form.addRow("Rest colour:", self._rest_color_edit)
        root.addLayout(color_form)

        # ── close button ─────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.setObjectName("secondaryButton")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        line.setStyleSheet("background-color: rgba(255,255,255,0.08);")
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._settings
        self._populating = True
        try:
            self._rounds_spin.setValue(max(1, s.rounds))
            self._work_picker.set_total_seconds(s.work_duration)
            self._rest_picker.set_total_seconds(s.rest_duration)
            self._sound_cb.setChecked(s.sound_enabled)
            self._vol_slider.setValue(s.sound_volume)
            self._vol_label.setText(f"{s.sound_volume}%")
            self._vibration_cb.setChecked(s.vibration_enabled)
            self._work_pulses_spin.setValue(s.work_vibration_count)
            self._rest_pulses_spin.setValue(s.rest_vibration_count)
            self._work_color_edit.setText(parse_hex_color(s.work_color_hex))
            self._rest_color_edit.setText(parse_hex_color(s.rest_color_hex))
            self._update_pulse_visibility()
        finally:
            self._populating = False

    def _update_pulse_visibility(self) -> None:
        on = self._vibration_cb.isChecked()
        self._work_pulses_spin.setEnabled(on)
        self._rest_pulses_spin.setEnabled(on)

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS — save immediately
    # ══════════════════════════════════════════════════════════════════

    def _on_workout_changed(self) -> None:
        if self._populating:
            return
        self._settings.rounds = self._rounds_spin.value()
        self._settings.work_duration = self._work_picker.total_seconds()
        self._settings.rest_duration = self._rest_picker.total_seconds()
        self._save()

    def _on_feedback_changed(self) -> None:
        if self._populating:
            return
        self._settings.sound_enabled = self._sound_cb.isChecked()
        self._settings.vibration_enabled = self._vibration_cb.isChecked()
        self._settings.work_vibration_count = self._work_pulses_spin.value()
        self._settings.rest_vibration_count = self._rest_pulses_spin.value()
        self._update_pulse_visibility()
        self._save()

    def _on_colors_changed(self) -> None:
        if self._populating:
            return
        work = parse_hex_color(self._work_color_edit.text())
        rest = parse_hex_color(self._rest_color_edit.text())
        self._work_color_edit.setText(work)
        self._rest_color_edit.setText(rest)
        self._settings.work_color_hex = work
        self._settings.rest_color_hex = rest
        self._save()

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.sound_volume = value
        self._save()

    def _on_volume_released(self) -> None:
        """Preview the volume when the slider is released."""
        if self._sound_preview:
            self._sound_preview()

    def _save(self) -> None:
        self._save_fn(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings

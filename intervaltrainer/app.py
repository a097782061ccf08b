"""Main application window for Interval Trainer."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QWidget, QVBoxLayout

from .feedback.notifier import PhaseNotifier
from .feedback.sounds import SoundManager
from .settings import Settings, load_settings, save_settings
from .timer.config import IntervalConfig, WEARABLE_FINISHED_PULSES
from .timer.engine import IntervalEngine, EngineSnapshot, Phase
from .timer.scheduler import QtScheduler
from .ui.settings_dialog import SettingsDialog
from .ui.styles import build_stylesheet
from .ui.workout_view import WorkoutView


logger = logging.getLogger(__name__)

PROFILES = ("handheld", "wearable")


def build_config(settings: Settings, profile: str = "handheld") -> IntervalConfig:
    """Configuration for one workout; the wearable celebrates with more pulses."""
    config = IntervalConfig.from_settings(settings)
    if profile == "wearable":
        config = dataclasses.replace(
            config,
            finished_vibration_pulses=max(
                config.finished_vibration_pulses, WEARABLE_FINISHED_PULSES,
            ),
        )
    return config


class IntervalTrainerApp(QMainWindow):
    """Workout window: one engine at a time, rebuilt when settings change."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        settings_file: Path | None = None,
        profile: str = "handheld",
        notify_on_start: bool = False,
        sounds: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Interval Trainer")

        self._settings_file = settings_file
        self._settings = settings or load_settings(settings_file)
        self._profile = profile
        self._notify_on_start = notify_on_start

        self._scheduler = QtScheduler(self)
        self._sounds = sounds or SoundManager(self)
        self._sounds.set_volume(self._settings.sound_volume)

        self._notifier: PhaseNotifier | None = None
        self._engine = self._build_engine()

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        self._view = WorkoutView(
            self._engine,
            central,
            work_hex=self._settings.work_color_hex,
            rest_hex=self._settings.rest_color_hex,
        )
        layout.addWidget(self._view)
        self._view.reset_clicked.connect(self._on_reset_clicked)
        self.setCentralWidget(central)
        self.setStyleSheet(build_stylesheet())

        self._build_menu_bar()
        self._restore_geometry()

    # ══════════════════════════════════════════════════════════════════
    #  ENGINE
    # ══════════════════════════════════════════════════════════════════

    def _build_engine(self) -> IntervalEngine:
        s = self._settings
        config = build_config(s, self._profile)
        self._notifier = PhaseNotifier(
            config,
            self._scheduler,
            sounds=self._sounds,
            pulse=self._pulse,
            sound_enabled=s.sound_enabled,
            vibration_enabled=s.vibration_enabled,
        )
        engine = IntervalEngine(
            config,
            self._scheduler,
            self._notifier,
            notify_on_start=self._notify_on_start,
            parent=self,
        )
        engine.state_changed.connect(self._on_state_changed)
        logger.info(
            "workout ready: %d rounds, %ds work, %ds rest",
            config.rounds, config.work_duration, config.rest_duration,
        )
        return engine

    def _rebuild_engine(self) -> None:
        """Drop the current engine and start over with fresh settings."""
        self._engine.reset()
        self._engine.state_changed.disconnect(self._on_state_changed)
        if self._notifier is not None:
            self._notifier.cancel()
        old = self._engine
        self._engine = self._build_engine()
        self._view.set_engine(self._engine)
        old.deleteLater()

    def _pulse(self) -> None:
        # Desktop stand-in for a haptic tap.
        self._sounds.play("pulse")

    def _on_state_changed(self, snap: EngineSnapshot) -> None:
        if snap.phase == Phase.FINISHED:
            self.statusBar().showMessage("Workout complete", 5000)

    @property
    def engine(self) -> IntervalEngine:
        return self._engine

    @property
    def view(self) -> WorkoutView:
        return self._view

    @property
    def settings(self) -> Settings:
        return self._settings

    # ══════════════════════════════════════════════════════════════════
    #  MENU
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu = self.menuBar().addMenu("Workout")

        prefs_action = QAction("Settings…", self)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.triggered.connect(self._open_settings)
        menu.addAction(prefs_action)

        about_action = QAction("About Interval Trainer", self)
        about_action.triggered.connect(self._show_about)
        menu.addAction(about_action)

        menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "Interval Trainer",
            "Work/rest interval timer.\n\nSpace: start / pause\nEsc: reset",
        )

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _save_settings(self, settings: Settings) -> None:
        try:
            save_settings(settings, self._settings_file)
        except OSError as exc:
            logger.warning("could not save settings: %s", exc)

    def _open_settings(self) -> None:
        """Open the settings dialog and apply any changes."""
        def _preview() -> None:
            self._sounds.set_volume(self._settings.sound_volume)
            self._sounds.play("work_start")

        dlg = SettingsDialog(
            self._settings,
            parent=self,
            sound_preview_callback=_preview,
            save=self._save_settings,
        )
        dlg.exec()
        self._apply_settings()

    def _apply_settings(self) -> None:
        """Push current Settings into the subsystems.

        The engine is only rebuilt when the workout configuration changed;
        volume, colours and the feedback toggles leave a running workout
        alone.
        """
        s = self._settings
        self._sounds.set_volume(s.sound_volume)
        self._view.set_colors(s.work_color_hex, s.rest_color_hex)
        if build_config(s, self._profile) != self._engine.config:
            self._rebuild_engine()
        elif self._notifier is not None:
            self._notifier.sound_enabled = s.sound_enabled
            self._notifier.vibration_enabled = s.vibration_enabled

    def _reload_shared_settings(self) -> None:
        """Re-read the settings file; the wearable picks up phone edits here."""
        self._settings = load_settings(self._settings_file)
        logger.debug("settings reloaded from store")
        self._apply_settings()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        self._save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD SHORTCUTS
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start, pause, or resume the workout."""
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_escape(self) -> None:
        self._engine.reset()
        self._on_reset_clicked()

    def _on_reset_clicked(self) -> None:
        if self._profile == "wearable":
            self._reload_shared_settings()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._engine.pause()
        if self._notifier is not None:
            self._notifier.cancel()
        self._save_geometry()
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (reset) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)

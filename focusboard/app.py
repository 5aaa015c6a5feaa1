"""Main application window for FocusBoard."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QVBoxLayout, QWidget

from .audio.alarm import AlarmPlayer
from .settings import DEFAULT_SIMPLE_SECONDS, Settings, load_settings, save_settings
from .timer.engine import TimerEngine
from .timer.pomodoro import Popup
from .ui.duration_field import DurationField
from .ui.settings_dialog import SettingsDialog
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


class FocusBoardApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        persist_settings: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("FocusBoard")
        self.setMinimumSize(480, 320)
        self.resize(560, 380)

        # ── settings ──────────────────────────────────────────────────
        self._persist_settings = persist_settings
        self._settings: Settings = settings or load_settings()

        # ── alarm + engine ────────────────────────────────────────────
        self._alarm = AlarmPlayer(self)
        self._apply_alarm_settings()

        self._timer_engine = TimerEngine(
            self,
            config=self._settings.timer_configuration(),
            alarm=self._alarm,
            initial_seconds=DEFAULT_SIMPLE_SECONDS,
        )

        # ── UI ────────────────────────────────────────────────────────
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 24, 24, 24)
        self._timer_widget = TimerWidget(self._timer_engine, central)
        layout.addWidget(self._timer_widget)
        self.setCentralWidget(central)

        self._build_menu()
        self._apply_style()

    # ── menu ──────────────────────────────────────────────────────────

    def _build_menu(self) -> None:
        menu_bar = self.menuBar()
        app_menu = menu_bar.addMenu("FocusBoard")

        prefs_action = QAction("Settings…", self)
        prefs_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.triggered.connect(self._open_settings)
        app_menu.addAction(prefs_action)

        quit_action = QAction("Quit FocusBoard", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        app_menu.addAction(quit_action)

    # ── settings ──────────────────────────────────────────────────────

    def _open_settings(self) -> None:
        dialog = SettingsDialog(
            self._settings,
            self,
            alarm_preview_callback=self._alarm.play,
            persist=self._persist_settings,
        )
        dialog.settings_changed.connect(self._apply_settings)
        dialog.exec()

    def _apply_settings(self, settings: Settings) -> None:
        self._settings = settings
        self._apply_alarm_settings()
        self._apply_style()
        if self._timer_engine.configure(settings.timer_configuration()):
            logger.debug("Settings changed timer durations; timer was reset")

    def _apply_alarm_settings(self) -> None:
        self._alarm.set_source(self._settings.alarm_sound_path)
        self._alarm.set_enabled(self._settings.alarm_enabled)
        self._alarm.set_volume(self._settings.alarm_volume)

    def _apply_style(self) -> None:
        self.setStyleSheet(build_stylesheet(font_color=self._settings.font_color))

    def save(self) -> None:
        if self._persist_settings:
            save_settings(self._settings)

    # ── keyboard ──────────────────────────────────────────────────────

    def _on_space(self) -> None:
        """Pause, resume or start, whichever is available first."""
        focused = self.focusWidget()
        if isinstance(focused, DurationField) and not focused.isReadOnly():
            return
        engine = self._timer_engine
        controls = engine.controls()
        if controls.can_pause:
            engine.pause()
        elif controls.can_resume:
            engine.resume()
        elif controls.can_start:
            engine.start()

    def _on_escape(self) -> None:
        """Dismiss an open break/work announcement."""
        if self._timer_engine.popup != Popup.NONE:
            self._timer_engine.acknowledge_popup()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
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

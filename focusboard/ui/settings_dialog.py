"""Settings dialog for FocusBoard.

A modal dialog for the Pomodoro, alarm and appearance preferences.  Changes are
saved to disk immediately and announced through ``settings_changed`` so
the app can push a fresh configuration into the timer engine.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QPushButton,
    QFrame, QWidget, QColorDialog,
)

from ..settings import Settings, save_settings


class SettingsDialog(QDialog):
    """Modal dialog for timer, alarm and appearance preferences."""

    settings_changed = pyqtSignal(object)

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        alarm_preview_callback: Callable[[], None] | None = None,
        persist: bool = True,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(420)
        self.setModal(True)

        self._settings = settings
        self._alarm_preview = alarm_preview_callback
        self._persist = persist
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

        # ── Pomodoro section ─────────────────────────────────────────
        root.addWidget(self._section_label("Pomodoro timer"))
        timer_form = QFormLayout()
        timer_form.setContentsMargins(0, 0, 0, 0)
        timer_form.setHorizontalSpacing(20)
        timer_form.setVerticalSpacing(10)

        self._pomodoro_cb = QCheckBox("Use Pomodoro mode (work / break cycles)")
        self._pomodoro_cb.toggled.connect(self._on_timer_changed)
        timer_form.addRow("", self._pomodoro_cb)

        self._work_spin = self._minutes_spin()
        timer_form.addRow("Work:", self._work_spin)

        self._short_spin = self._minutes_spin()
        timer_form.addRow("Short break:", self._short_spin)

        self._long_spin = self._minutes_spin()
        timer_form.addRow("Long break:", self._long_spin)

        self._cycles_spin = QSpinBox()
        self._cycles_spin.setRange(1, 20)
        self._cycles_spin.valueChanged.connect(self._on_timer_changed)
        timer_form.addRow("Cycles before long break:", self._cycles_spin)

        root.addLayout(timer_form)
        root.addWidget(self._separator())

        # ── Alarm section ────────────────────────────────────────────
        root.addWidget(self._section_label("Alarm"))
        alarm_form = QFormLayout()
        alarm_form.setContentsMargins(0, 0, 0, 0)
        alarm_form.setHorizontalSpacing(20)
        alarm_form.setVerticalSpacing(10)

        self._alarm_cb = QCheckBox("Play alarm when time is up")
        self._alarm_cb.toggled.connect(self._on_alarm_changed)
        alarm_form.addRow("", self._alarm_cb)

        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.setTickInterval(10)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        self._vol_slider.sliderReleased.connect(self._on_volume_released)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)

        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        alarm_form.addRow("Volume:", vol_wrapper)

        root.addLayout(alarm_form)
        root.addWidget(self._separator())

        # ── Appearance section ───────────────────────────────────────
        root.addWidget(self._section_label("Appearance"))
        look_form = QFormLayout()
        look_form.setContentsMargins(0, 0, 0, 0)
        look_form.setHorizontalSpacing(20)

        self._color_btn = QPushButton()
        self._color_btn.setFixedWidth(96)
        self._color_btn.clicked.connect(self._pick_font_color)
        look_form.addRow("Font colour:", self._color_btn)

        root.addLayout(look_form)

        # ── close button ─────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    def _minutes_spin(self) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(1, 999)
        spin.setSuffix(" min")
        spin.valueChanged.connect(self._on_timer_changed)
        return spin

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
            self._pomodoro_cb.setChecked(s.use_pomodoro)
            self._work_spin.setValue(s.pomodoro_work_minutes)
            self._short_spin.setValue(s.pomodoro_short_break_minutes)
            self._long_spin.setValue(s.pomodoro_long_break_minutes)
            self._cycles_spin.setValue(s.pomodoro_cycles_before_long_break)
            self._alarm_cb.setChecked(s.alarm_enabled)
            self._vol_slider.setValue(s.alarm_volume)
            self._vol_label.setText(f"{s.alarm_volume}%")
            self._show_font_color(s.font_color)
        finally:
            self._populating = False
        self._update_enabled()

    def _update_enabled(self) -> None:
        on = self._pomodoro_cb.isChecked()
        for spin in (
            self._work_spin, self._short_spin, self._long_spin, self._cycles_spin,
        ):
            spin.setEnabled(on)

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS — save immediately
    # ══════════════════════════════════════════════════════════════════

    def _on_timer_changed(self) -> None:
        if self._populating:
            return
        self._settings.use_pomodoro = self._pomodoro_cb.isChecked()
        self._settings.pomodoro_work_minutes = self._work_spin.value()
        self._settings.pomodoro_short_break_minutes = self._short_spin.value()
        self._settings.pomodoro_long_break_minutes = self._long_spin.value()
        self._settings.pomodoro_cycles_before_long_break = self._cycles_spin.value()
        self._update_enabled()
        self._save()

    def _on_alarm_changed(self) -> None:
        if self._populating:
            return
        self._settings.alarm_enabled = self._alarm_cb.isChecked()
        self._save()

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.alarm_volume = value
        self._save()

    def _on_volume_released(self) -> None:
        """Preview the alarm when the user releases the volume slider."""
        if self._alarm_preview:
            self._alarm_preview()

    def _pick_font_color(self) -> None:
        color = QColorDialog.getColor(
            QColor(self._settings.font_color), self, "Choose Font Colour",
        )
        if not color.isValid():
            return
        self._set_font_color(color.name())

    def _set_font_color(self, name: str) -> None:
        self._settings.font_color = name
        self._show_font_color(name)
        self._save()

    def _show_font_color(self, name: str) -> None:
        self._color_btn.setText(name)
        self._color_btn.setStyleSheet(
            f"background-color: {name}; color: #111; border-radius: 6px;"
        )

    def _save(self) -> None:
        if self._persist:
            save_settings(self._settings)
        self.settings_changed.emit(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings

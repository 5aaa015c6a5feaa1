"""Timer card — HH:MM:SS display plus the four controls.

Layout (top → bottom):
    - Phase label (Pomodoro only)
    - HH : MM : SS, editable in Simple mode while stopped
    - Start/Restart · Pause · Resume · Reset
    - Announcement overlay (break / work popups)

The widget never decides what is allowed; it mirrors
``TimerEngine.controls()`` and ``TimerEngine.display()``.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QResizeEvent
from PyQt6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget,
)

from ..timer.duration import EditResult
from ..timer.engine import TimerEngine
from ..timer.pomodoro import Phase
from .announcement_popup import AnnouncementPopup
from .duration_field import DurationField


PHASE_LABELS: dict[Phase, str] = {
    Phase.IDLE:        "READY",
    Phase.WORK:        "FOCUS",
    Phase.SHORT_BREAK: "SHORT BREAK",
    Phase.LONG_BREAK:  "LONG BREAK",
}


class TimerWidget(QWidget):
    """The timer card shown on the dashboard."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self._card = QFrame(self)
        self._card.setObjectName("card")
        root.addWidget(self._card)

        layout = QVBoxLayout(self._card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._phase_label = QLabel("", self._card)
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._phase_label)

        # ── HH:MM:SS ─────────────────────────────────────────────────
        time_row = QHBoxLayout()
        time_row.setSpacing(4)
        time_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._hours = DurationField(self._card)
        self._minutes = DurationField(self._card)
        self._seconds = DurationField(self._card)
        for i, field in enumerate(self.fields):
            if i:
                colon = QLabel(":", self._card)
                colon.setObjectName("timeColon")
                time_row.addWidget(colon)
            time_row.addWidget(field)
        layout.addLayout(time_row)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_btn = QPushButton("Start", self._card)
        self._start_btn.setObjectName("primaryButton")
        self._pause_btn = QPushButton("Pause", self._card)
        self._resume_btn = QPushButton("Resume", self._card)
        self._reset_btn = QPushButton("Reset", self._card)
        for btn in (
            self._start_btn, self._pause_btn, self._resume_btn, self._reset_btn,
        ):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        self._popup = AnnouncementPopup(self)

    @property
    def fields(self) -> tuple[DurationField, DurationField, DurationField]:
        return (self._hours, self._minutes, self._seconds)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self._engine.start)
        self._pause_btn.clicked.connect(self._engine.pause)
        self._resume_btn.clicked.connect(self._engine.resume)
        self._reset_btn.clicked.connect(self._engine.reset)

        for field in self.fields:
            field.commit_requested.connect(self._commit_edit)
            field.cancel_requested.connect(self._cancel_edit)

        self._popup.acknowledged.connect(self._engine.acknowledge_popup)

        self._engine.tick.connect(lambda _remaining: self._refresh_time())
        self._engine.state_changed.connect(self._refresh)
        self._engine.popup_changed.connect(self._popup.show_popup)

    # ── slots ─────────────────────────────────────────────────────────────

    def _commit_edit(self) -> None:
        result = self._engine.commit_edit(
            self._hours.text(), self._minutes.text(), self._seconds.text(),
        )
        self._show_fields(result)

    def _cancel_edit(self) -> None:
        self._show_fields(self._engine.cancel_edit())

    def _show_fields(self, result: EditResult) -> None:
        for field, text in zip(self.fields, result.fields):
            field.setText(text)

    # ── refresh ───────────────────────────────────────────────────────────

    def _refresh(self) -> None:
        engine = self._engine
        controls = engine.controls()

        self._start_btn.setText(engine.start_label)
        self._start_btn.setEnabled(controls.can_start)
        self._pause_btn.setEnabled(controls.can_pause)
        self._resume_btn.setEnabled(controls.can_resume)
        self._reset_btn.setEnabled(controls.can_reset)

        for field in self.fields:
            field.set_editable(controls.can_edit)

        self._phase_label.setVisible(engine.is_pomodoro)
        self._phase_label.setText(PHASE_LABELS[engine.phase])

        self._card.setProperty("phase", "break" if engine.is_break else "")
        self._card.style().unpolish(self._card)
        self._card.style().polish(self._card)

        if engine.popup != self._popup.kind:
            self._popup.show_popup(engine.popup)

        self._refresh_time()

    def _refresh_time(self) -> None:
        display = self._engine.display()
        for field, text in zip(self.fields, display):
            # Leave a field alone while the user is typing into it
            if field.hasFocus() and not field.isReadOnly():
                continue
            field.setText(text)

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._popup.isVisible():
            self._popup.setGeometry(self.rect())

    @property
    def popup(self) -> AnnouncementPopup:
        return self._popup

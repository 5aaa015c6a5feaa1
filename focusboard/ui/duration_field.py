"""Single HH, MM or SS input of the inline duration editor."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFocusEvent, QKeyEvent
from PyQt6.QtWidgets import QLineEdit, QWidget


class DurationField(QLineEdit):
    """Two-digit field that reports commit and cancel gestures.

    Enter and focus-out both emit ``commit_requested``.  Escape emits
    ``cancel_requested``.  The focus-out that follows either key does
    not commit a second time.
    """

    commit_requested = pyqtSignal()
    cancel_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("00", parent)
        self.setObjectName("timeField")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setMaxLength(6)
        self.setFixedWidth(96)
        self._skip_focus_commit = False

    def set_editable(self, editable: bool) -> None:
        self.setReadOnly(not editable)
        self.setFocusPolicy(
            Qt.FocusPolicy.StrongFocus if editable else Qt.FocusPolicy.NoFocus
        )
        self.setProperty("editable", "true" if editable else "false")
        self.style().unpolish(self)
        self.style().polish(self)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if self.isReadOnly():
            super().keyPressEvent(event)
            return
        key = event.key()
        if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            event.accept()
            self._skip_focus_commit = self.hasFocus()
            self.commit_requested.emit()
            self.clearFocus()
        elif key == Qt.Key.Key_Escape:
            event.accept()
            self._skip_focus_commit = self.hasFocus()
            self.cancel_requested.emit()
            self.clearFocus()
        else:
            super().keyPressEvent(event)

    def focusOutEvent(self, event: QFocusEvent) -> None:
        super().focusOutEvent(event)
        if self._skip_focus_commit:
            self._skip_focus_commit = False
            return
        if not self.isReadOnly():
            self.commit_requested.emit()

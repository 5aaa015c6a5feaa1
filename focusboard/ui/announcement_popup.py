"""Break / work announcement overlay.

Covers its parent with a dimmed backdrop and a small card.  "Got it",
or a click on the backdrop, acknowledges the announcement.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget,
)

from ..timer.pomodoro import Popup

POPUP_TEXT: dict[Popup, str] = {
    Popup.BREAK_ANNOUNCED: "Break time!",
    Popup.WORK_ANNOUNCED:  "Time to Work...",
}


class AnnouncementPopup(QFrame):
    """Overlay shown while the engine has an unacknowledged popup."""

    acknowledged = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("popupBackdrop")
        self._kind: Popup = Popup.NONE

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._card = QFrame(self)
        self._card.setObjectName("popupCard")
        card_layout = QVBoxLayout(self._card)
        card_layout.setContentsMargins(28, 20, 28, 20)
        card_layout.setSpacing(14)

        self._text = QLabel("", self._card)
        self._text.setObjectName("popupText")
        self._text.setAlignment(Qt.AlignmentFlag.AlignCenter)
        card_layout.addWidget(self._text)

        btn_row = QHBoxLayout()
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ok_btn = QPushButton("Got it", self._card)
        self._ok_btn.setObjectName("primaryButton")
        self._ok_btn.clicked.connect(self.acknowledged.emit)
        btn_row.addWidget(self._ok_btn)
        card_layout.addLayout(btn_row)

        root.addWidget(self._card)
        self.hide()

    @property
    def kind(self) -> Popup:
        return self._kind

    @property
    def text(self) -> str:
        return self._text.text()

    def show_popup(self, popup: Popup) -> None:
        """Show the overlay for *popup*; ``Popup.NONE`` hides it."""
        self._kind = popup
        if popup == Popup.NONE:
            self.hide()
            return
        self._text.setText(POPUP_TEXT[popup])
        if self.parentWidget() is not None:
            self.setGeometry(self.parentWidget().rect())
        self.raise_()
        self.show()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        # Only the backdrop dismisses; clicks on the card do not.
        if not self._card.geometry().contains(event.position().toPoint()):
            self.acknowledged.emit()
        event.accept()

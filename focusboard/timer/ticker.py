"""One-second tick source with at most one armed callback."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, Qt, QTimer


class Ticker(QObject):
    """Cancelable periodic callback backed by a single ``QTimer``.

    Re-arming replaces the previous callback.  A timeout that slips in
    after :meth:`disarm` finds no callback and is dropped.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._callback: Callable[[], None] | None = None
        self._qt_timer = QTimer(self)
        self._qt_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._qt_timer.timeout.connect(self._fire)

    @property
    def is_armed(self) -> bool:
        return self._callback is not None

    @property
    def interval_seconds(self) -> float:
        return self._qt_timer.interval() / 1000

    def arm(
        self,
        interval_seconds: float = 1,
        on_tick: Callable[[], None] | None = None,
    ) -> None:
        """Start calling *on_tick* every *interval_seconds*."""
        if on_tick is None:
            raise TypeError("arm() requires an on_tick callback")
        self.disarm()
        self._callback = on_tick
        self._qt_timer.setInterval(max(1, round(interval_seconds * 1000)))
        self._qt_timer.start()

    def disarm(self) -> None:
        """Stop ticking.  No-op when not armed."""
        if self._callback is None:
            return
        self._qt_timer.stop()
        self._callback = None

    def _fire(self) -> None:
        if self._callback is not None:
            self._callback()

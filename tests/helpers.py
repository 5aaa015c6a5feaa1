"""Shared test helpers for FocusBoard."""

from focusboard.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeAlarm:
    """Stand-in audio handle that counts ``play()`` calls."""

    def __init__(self, error: Exception | None = None):
        self.plays = 0
        self._error = error

    def play(self):
        self.plays += 1
        if self._error is not None:
            raise self._error


def run_ticks(engine: TimerEngine, count: int) -> None:
    """Deliver *count* ticks without waiting for real time to pass."""
    for _ in range(count):
        engine._on_tick()


def finish_phase(engine: TimerEngine) -> None:
    """Tick until the current phase expires."""
    run_ticks(engine, max(1, engine.remaining))

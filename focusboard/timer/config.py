"""Timer configuration.

A ``TimerConfiguration`` is immutable for the lifetime of a session and
is replaced wholesale whenever the user changes their settings.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping


class TimerMode(Enum):
    SIMPLE = "simple"
    POMODORO = "pomodoro"


# ── defaults ──────────────────────────────────────────────────────────────

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_SHORT_BREAK_SECONDS = 5 * 60
DEFAULT_LONG_BREAK_SECONDS = 15 * 60
DEFAULT_CYCLES_BEFORE_LONG_BREAK = 4

# Options-record names → dataclass fields
_OPTION_ALIASES: dict[str, str] = {
    "mode": "mode",
    "workSeconds": "work_seconds",
    "shortBreakSeconds": "short_break_seconds",
    "longBreakSeconds": "long_break_seconds",
    "cyclesBeforeLongBreak": "cycles_before_long_break",
}


@dataclass(frozen=True)
class TimerConfiguration:
    """Durations (seconds) and mode consumed by the timer engine.

    ``mode`` also accepts the mode name as a string, in any case.
    ``cycles_before_long_break <= 0`` means long breaks never trigger.
    """

    mode: TimerMode = TimerMode.SIMPLE
    work_seconds: int = DEFAULT_WORK_SECONDS
    short_break_seconds: int = DEFAULT_SHORT_BREAK_SECONDS
    long_break_seconds: int = DEFAULT_LONG_BREAK_SECONDS
    cycles_before_long_break: int = DEFAULT_CYCLES_BEFORE_LONG_BREAK

    def __post_init__(self) -> None:
        if not isinstance(self.mode, TimerMode):
            object.__setattr__(self, "mode", TimerMode(str(self.mode).lower()))
        for name in ("work_seconds", "short_break_seconds", "long_break_seconds"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @property
    def is_pomodoro(self) -> bool:
        return self.mode == TimerMode.POMODORO

    def durations(self) -> tuple[int, int, int]:
        """``(work, short_break, long_break)`` in seconds."""
        return (
            self.work_seconds,
            self.short_break_seconds,
            self.long_break_seconds,
        )

    def merged(self, options: Mapping[str, Any] | None) -> TimerConfiguration:
        """Return a copy with *options* applied on top of this one.

        Accepts either the options-record names (``workSeconds``) or the
        attribute names (``work_seconds``).  Missing keys and ``None``
        values keep the current value; an explicit ``0`` is honoured.
        """
        if not options:
            return self
        valid = {f.name for f in fields(self)}
        changes: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in valid or value is None:
                continue
            changes[name] = value
        return replace(self, **changes) if changes else self

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> TimerConfiguration:
        return cls().merged(options)

"""Pomodoro phase transitions.

Phases
------
IDLE          Nothing scheduled — waiting for Start.
WORK          Work segment counting down.
SHORT_BREAK   Short break counting down.
LONG_BREAK    Long break counting down.

Transitions (only when the current phase reaches zero)
------------------------------------------------------
IDLE → WORK
WORK → LONG_BREAK   when the post-increment session count is a multiple
                    of ``cycles_before_long_break`` (and that is > 0)
WORK → SHORT_BREAK  otherwise
SHORT_BREAK | LONG_BREAK → WORK

Every transition raises the alarm exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import TimerConfiguration


class Phase(Enum):
    IDLE = "idle"
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self in (Phase.SHORT_BREAK, Phase.LONG_BREAK)


class Popup(Enum):
    NONE = "none"
    BREAK_ANNOUNCED = "break_announced"
    WORK_ANNOUNCED = "work_announced"


@dataclass(frozen=True)
class Transition:
    phase: Phase
    duration: int
    completed_work_sessions: int
    popup: Popup
    alarm: bool = True


def is_long_break_due(completed_work_sessions: int, cycles_before_long_break: int) -> bool:
    if cycles_before_long_break <= 0:
        return False
    return completed_work_sessions % cycles_before_long_break == 0


def next_transition(
    phase: Phase,
    completed_work_sessions: int,
    config: TimerConfiguration,
) -> Transition:
    """Return the state that follows *phase* reaching zero."""
    if phase == Phase.WORK:
        count = completed_work_sessions + 1
        if is_long_break_due(count, config.cycles_before_long_break):
            return Transition(
                Phase.LONG_BREAK, config.long_break_seconds, count,
                Popup.BREAK_ANNOUNCED,
            )
        return Transition(
            Phase.SHORT_BREAK, config.short_break_seconds, count,
            Popup.BREAK_ANNOUNCED,
        )

    if phase.is_break:
        return Transition(
            Phase.WORK, config.work_seconds, completed_work_sessions,
            Popup.WORK_ANNOUNCED,
        )

    # IDLE → fresh work session, no announcement
    return Transition(
        Phase.WORK, config.work_seconds, completed_work_sessions,
        Popup.NONE,
    )

"""Timer package."""

from .config import TimerConfiguration, TimerMode
from .duration import EditResult, commit_edit, cancel_edit, split_hms
from .engine import TimerEngine, DisplayTime, Controls, TICK_INTERVAL_SECONDS
from .pomodoro import Phase, Popup, Transition, next_transition
from .ticker import Ticker

__all__ = [
    "TimerConfiguration",
    "TimerMode",
    "EditResult",
    "commit_edit",
    "cancel_edit",
    "split_hms",
    "TimerEngine",
    "DisplayTime",
    "Controls",
    "TICK_INTERVAL_SECONDS",
    "Phase",
    "Popup",
    "Transition",
    "next_transition",
    "Ticker",
]

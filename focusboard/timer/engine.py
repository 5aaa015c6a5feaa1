"""Countdown / Pomodoro timer engine for FocusBoard.

Modes
-----
SIMPLE     A single user-set countdown.  The HH:MM:SS display is
           editable whenever the timer is not running.
POMODORO   Work → break → work cycles driven by the configured
           durations.  The display is never editable.

Controls
--------
start()    Begin (or restart) a run.
pause()    Freeze the countdown.
resume()   Continue a paused run.
reset()    Drop the run and return to a fresh idle state.

Every control returns ``True`` when applied and ``False`` when its
preconditions are not met; refused calls change nothing.  Expiry fires
the alarm exactly once.  Alarm failures are logged and never interrupt
the countdown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from .config import TimerConfiguration
from . import duration
from .duration import EditResult, pad2, split_hms
from .pomodoro import Phase, Popup, next_transition
from .ticker import Ticker

logger = logging.getLogger(__name__)

TICK_INTERVAL_SECONDS = 1


class AlarmHandle(Protocol):
    def play(self) -> None: ...


class DisplayTime(NamedTuple):
    """Zero-padded ``HH``, ``MM``, ``SS`` strings for the display."""

    hours: str
    minutes: str
    seconds: str

    @property
    def text(self) -> str:
        return f"{self.hours}:{self.minutes}:{self.seconds}"


@dataclass(frozen=True)
class Controls:
    """Which user actions are currently available."""

    can_start: bool
    can_pause: bool
    can_resume: bool
    can_reset: bool
    can_edit: bool


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Stateful timer: owns the countdown, drives the ticker, applies
    Pomodoro transitions on expiry and accepts duration edits when idle.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every one-second decrement.
    state_changed()
        Emitted after any state mutation.
    phase_changed(phase: Phase)
        Emitted when the Pomodoro phase changes.
    popup_changed(popup: Popup)
        Emitted when the break/work announcement changes.
    expired(phase: Phase)
        Emitted once per expiry with the phase that just ended
        (``Phase.IDLE`` for a Simple-mode run).
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal()
    phase_changed = pyqtSignal(object)
    popup_changed = pyqtSignal(object)
    expired = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: TimerConfiguration | None = None,
        alarm: AlarmHandle | None = None,
        ticker: Ticker | None = None,
        initial_seconds: int = 0,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._config: TimerConfiguration = config or TimerConfiguration()
        self._alarm: AlarmHandle | None = alarm
        self._ticker: Ticker = ticker or Ticker(self)
        self._initial_seconds: int = max(0, initial_seconds)

        # ── state ─────────────────────────────────────────────────────
        self._phase: Phase = Phase.IDLE
        self._remaining: int = 0
        self._configured: int = self._initial_seconds
        self._running: bool = False
        self._has_started_once: bool = False
        self._completed_work_sessions: int = 0
        self._popup: Popup = Popup.NONE

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def configuration(self) -> TimerConfiguration:
        return self._config

    @property
    def is_pomodoro(self) -> bool:
        return self._config.is_pomodoro

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def configured_seconds(self) -> int:
        """User-set Simple-mode duration."""
        return self._configured

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def has_started_once(self) -> bool:
        return self._has_started_once

    @property
    def completed_work_sessions(self) -> int:
        return self._completed_work_sessions

    @property
    def popup(self) -> Popup:
        return self._popup

    @property
    def is_break(self) -> bool:
        return self._phase.is_break

    @property
    def start_label(self) -> str:
        return "Restart" if self._has_started_once else "Start"

    @property
    def display_seconds(self) -> int:
        """Seconds the HH:MM:SS display should show right now."""
        if self._remaining > 0:
            return self._remaining
        if self.is_pomodoro:
            return self._config.work_seconds  # preview of the next session
        if not self._has_started_once:
            return self._configured
        return 0

    def display(self) -> DisplayTime:
        hms = split_hms(self.display_seconds)
        return DisplayTime(pad2(hms.hours), pad2(hms.minutes), pad2(hms.seconds))

    def controls(self) -> Controls:
        return Controls(
            can_start=self._can_start(),
            can_pause=self._can_pause(),
            can_resume=self._can_resume(),
            can_reset=self._can_reset(),
            can_edit=self._can_edit(),
        )

    def set_alarm(self, alarm: AlarmHandle | None) -> None:
        self._alarm = alarm

    # ══════════════════════════════════════════════════════════════════
    #  CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    def configure(
        self, config: TimerConfiguration | Mapping[str, Any]
    ) -> bool:
        """Replace the configuration.

        A mapping is applied on top of the current configuration, so
        missing fields keep their prior value.  Changing the mode or any
        duration resets the engine to its freshly constructed state.
        Returns ``True`` when that reset happened.
        """
        if not isinstance(config, TimerConfiguration):
            config = self._config.merged(config)
        previous = self._config
        self._config = config
        if (
            previous.mode == config.mode
            and previous.durations() == config.durations()
        ):
            if previous != config:
                self.state_changed.emit()
            return False

        logger.info("Timer reconfigured (%s); resetting", config.mode.value)
        self._ticker.disarm()
        self._running = False
        self._has_started_once = False
        self._remaining = 0
        self._configured = self._initial_seconds
        self._completed_work_sessions = 0
        self._move_to(Phase.IDLE, Popup.NONE)
        self.state_changed.emit()
        return True

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> bool:
        """Start a run, or restart one that has already begun."""
        if not self._can_start():
            logger.debug("start() refused")
            return False

        self._running = True
        self._has_started_once = True
        if self.is_pomodoro:
            self._completed_work_sessions = 0
            self._remaining = self._config.work_seconds
            self._move_to(Phase.WORK, Popup.NONE)
        else:
            self._remaining = self._configured
        self._ticker.arm(TICK_INTERVAL_SECONDS, self._on_tick)
        self.state_changed.emit()
        return True

    def pause(self) -> bool:
        if not self._can_pause():
            logger.debug("pause() refused")
            return False
        self._ticker.disarm()
        self._running = False
        self.state_changed.emit()
        return True

    def resume(self) -> bool:
        if not self._can_resume():
            logger.debug("resume() refused")
            return False
        self._ticker.arm(TICK_INTERVAL_SECONDS, self._on_tick)
        self._running = True
        self.state_changed.emit()
        return True

    def reset(self) -> bool:
        """Drop the current run.  Simple mode also clears the set duration."""
        if not self._can_reset():
            logger.debug("reset() refused")
            return False
        self._ticker.disarm()
        self._running = False
        self._has_started_once = False
        self._remaining = 0
        if self.is_pomodoro:
            self._completed_work_sessions = 0
            self._move_to(Phase.IDLE, Popup.NONE)
        else:
            self._configured = 0
        self.state_changed.emit()
        return True

    def acknowledge_popup(self) -> None:
        self._set_popup(Popup.NONE)

    # ══════════════════════════════════════════════════════════════════
    #  EDITING
    # ══════════════════════════════════════════════════════════════════

    def commit_edit(
        self,
        hours: str | int | None,
        minutes: str | int | None,
        seconds: str | int | None,
    ) -> EditResult:
        """Apply an edited HH:MM:SS triple (Enter or focus-out).

        Refused without validation while running or in Pomodoro mode.
        The returned result carries the text the fields should show.
        """
        previous = self.display_seconds
        if not self._can_edit():
            logger.debug("commit_edit() refused")
            return duration.cancel_edit(previous)

        result = duration.commit_edit(hours, minutes, seconds, previous)
        if not result.accepted:
            logger.debug(
                "Rejected duration edit %r:%r:%r", hours, minutes, seconds,
            )
            return result

        self._configured = result.total_seconds
        self._remaining = result.total_seconds
        self._has_started_once = False
        self.state_changed.emit()
        return result

    def cancel_edit(self) -> EditResult:
        """Escape: revert the fields to what the display shows."""
        return duration.cancel_edit(self.display_seconds)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — preconditions
    # ══════════════════════════════════════════════════════════════════

    def _can_start(self) -> bool:
        if self._running:
            return False
        if self.is_pomodoro:
            return self._config.work_seconds > 0
        return self._configured > 0

    def _can_pause(self) -> bool:
        return self._running and self._remaining > 0

    def _can_resume(self) -> bool:
        return (
            not self._running
            and self._remaining > 0
            and self._has_started_once
        )

    def _can_reset(self) -> bool:
        if self.is_pomodoro:
            return self._remaining > 0 or self._has_started_once
        return self._remaining > 0 or self._configured > 0

    def _can_edit(self) -> bool:
        return not self._running and not self.is_pomodoro

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if not self._running:
            return
        if self._remaining > 1:
            self._remaining -= 1
            self.tick.emit(self._remaining)
            return
        self._expire()

    def _expire(self) -> None:
        ended = self._phase

        if not self.is_pomodoro:
            self._play_alarm()
            self._ticker.disarm()
            self._running = False
            self._remaining = 0
            logger.info("Countdown finished")
        else:
            transition = next_transition(
                self._phase, self._completed_work_sessions, self._config,
            )
            if transition.alarm:
                self._play_alarm()
            self._completed_work_sessions = transition.completed_work_sessions
            self._remaining = transition.duration
            self._move_to(transition.phase, transition.popup)
            logger.info(
                "%s finished → %s (%d s, %d work sessions done)",
                ended.value, transition.phase.value,
                transition.duration, transition.completed_work_sessions,
            )

        self.expired.emit(ended)
        self.tick.emit(self._remaining)
        self.state_changed.emit()

    def _play_alarm(self) -> None:
        if self._alarm is None:
            return
        try:
            self._alarm.play()
        except Exception:
            logger.exception("Alarm playback failed")

    def _move_to(self, phase: Phase, popup: Popup) -> None:
        # Assign both before emitting either signal
        phase_changed = phase != self._phase
        popup_changed = popup != self._popup
        self._phase = phase
        self._popup = popup
        if phase_changed:
            self.phase_changed.emit(phase)
        if popup_changed:
            self.popup_changed.emit(popup)

    def _set_popup(self, popup: Popup) -> None:
        if popup == self._popup:
            return
        self._popup = popup
        self.popup_changed.emit(popup)

"""Tests for the FocusBoard timer engine.

Covers: Simple-mode countdown, Pomodoro cycles and long-break
tie-break, pause/resume/reset preconditions, inline edits,
reconfiguration, display/controls derivation, popups, and alarm
robustness.
"""

import logging

import pytest

from focusboard.timer.config import TimerConfiguration, TimerMode
from focusboard.timer.engine import Controls, DisplayTime, TimerEngine
from focusboard.timer.pomodoro import Phase, Popup

from helpers import FakeAlarm, SignalCollector, finish_phase, run_ticks


def _snapshot(engine: TimerEngine) -> tuple:
    return (
        engine.phase, engine.remaining, engine.configured_seconds,
        engine.is_running, engine.has_started_once,
        engine.completed_work_sessions, engine.popup,
    )


# ═══════════════════════════════════════════════════════════════════════════
#  INITIAL STATE
# ═══════════════════════════════════════════════════════════════════════════


class TestInitialState:

    def test_idle_and_zeroed(self, engine):
        assert engine.phase == Phase.IDLE
        assert engine.remaining == 0
        assert engine.configured_seconds == 0
        assert engine.is_running is False
        assert engine.has_started_once is False
        assert engine.completed_work_sessions == 0
        assert engine.popup == Popup.NONE

    def test_initial_seconds(self, qapp):
        eng = TimerEngine(initial_seconds=3600)
        assert eng.configured_seconds == 3600
        assert eng.display() == DisplayTime("01", "00", "00")

    def test_start_label(self, engine):
        assert engine.start_label == "Start"


# ═══════════════════════════════════════════════════════════════════════════
#  SIMPLE MODE
# ═══════════════════════════════════════════════════════════════════════════


class TestSimpleCountdown:

    def test_start_requires_duration(self, engine, alarm):
        assert engine.start() is False
        assert engine.is_running is False
        assert engine._ticker.is_armed is False

    def test_five_second_run(self, engine, alarm):
        engine.commit_edit("0", "0", "5")
        assert engine.start() is True
        assert engine.is_running
        assert engine.remaining == 5

        run_ticks(engine, 4)
        assert engine.remaining == 1
        assert alarm.plays == 0

        run_ticks(engine, 1)
        assert engine.is_running is False
        assert engine.remaining == 0
        assert alarm.plays == 1
        assert engine._ticker.is_armed is False

    def test_no_alarm_after_finish(self, engine, alarm):
        engine.commit_edit("0", "0", "2")
        engine.start()
        run_ticks(engine, 10)
        assert alarm.plays == 1

    def test_start_arms_ticker(self, engine):
        engine.commit_edit("0", "1", "0")
        engine.start()
        assert engine._ticker.is_armed
        assert engine._ticker.interval_seconds == 1

    def test_display_after_finish_is_zero(self, engine):
        engine.commit_edit("0", "0", "2")
        engine.start()
        finish_phase(engine)
        assert engine.display() == DisplayTime("00", "00", "00")

    def test_restart_uses_configured_duration(self, engine):
        engine.commit_edit("0", "0", "30")
        engine.start()
        run_ticks(engine, 10)
        engine.pause()
        assert engine.start_label == "Restart"
        assert engine.start() is True
        assert engine.remaining == 30

    def test_start_refused_while_running(self, engine):
        engine.commit_edit("0", "0", "30")
        engine.start()
        run_ticks(engine, 3)
        assert engine.start() is False
        assert engine.remaining == 27

    def test_tick_signal(self, engine):
        c = SignalCollector()
        engine.tick.connect(c)
        engine.commit_edit("0", "0", "10")
        engine.start()
        run_ticks(engine, 2)
        assert c.items == [9, 8]

    def test_expired_signal_once(self, engine):
        c = SignalCollector()
        engine.expired.connect(c)
        engine.commit_edit("0", "0", "3")
        engine.start()
        run_ticks(engine, 8)
        assert c.items == [Phase.IDLE]

    def test_tick_ignored_when_not_running(self, engine):
        engine.commit_edit("0", "0", "10")
        run_ticks(engine, 3)
        assert engine.remaining == 10


# ═══════════════════════════════════════════════════════════════════════════
#  POMODORO
# ═══════════════════════════════════════════════════════════════════════════


class TestPomodoroCycle:

    def test_start_enters_work(self, pomodoro):
        assert pomodoro.start() is True
        assert pomodoro.phase == Phase.WORK
        assert pomodoro.remaining == 2
        assert pomodoro.completed_work_sessions == 0

    def test_scenario_work_short_work_long(self, pomodoro, alarm):
        pomodoro.start()

        run_ticks(pomodoro, 2)
        assert pomodoro.phase == Phase.SHORT_BREAK
        assert pomodoro.remaining == 1
        assert pomodoro.completed_work_sessions == 1

        run_ticks(pomodoro, 1)
        assert pomodoro.phase == Phase.WORK
        assert pomodoro.remaining == 2

        run_ticks(pomodoro, 2)
        assert pomodoro.phase == Phase.LONG_BREAK
        assert pomodoro.completed_work_sessions == 2
        assert pomodoro.remaining == 3

        assert alarm.plays == 3
        assert pomodoro.is_running
        assert pomodoro._ticker.is_armed

    def test_long_break_every_fourth(self, qapp, alarm):
        eng = TimerEngine(
            config=TimerConfiguration(
                mode=TimerMode.POMODORO, work_seconds=3,
                short_break_seconds=2, long_break_seconds=4,
                cycles_before_long_break=4,
            ),
            alarm=alarm,
        )
        eng.start()
        breaks = []
        for _ in range(12):
            finish_phase(eng)              # work → break
            breaks.append(eng.phase)
            finish_phase(eng)              # break → work
            assert eng.phase == Phase.WORK
        long_at = [i + 1 for i, p in enumerate(breaks) if p == Phase.LONG_BREAK]
        assert long_at == [4, 8, 12]
        assert eng.completed_work_sessions == 12
        assert alarm.plays == 24

    def test_sessions_count_only_work_expiry(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        assert pomodoro.completed_work_sessions == 1
        finish_phase(pomodoro)  # short break ends
        assert pomodoro.completed_work_sessions == 1
        finish_phase(pomodoro)
        assert pomodoro.completed_work_sessions == 2
        finish_phase(pomodoro)  # long break ends
        assert pomodoro.completed_work_sessions == 2

    def test_no_long_break_when_cycles_not_positive(self, qapp, alarm):
        eng = TimerEngine(
            config=TimerConfiguration(
                mode=TimerMode.POMODORO, work_seconds=1,
                short_break_seconds=1, long_break_seconds=1,
                cycles_before_long_break=0,
            ),
            alarm=alarm,
        )
        eng.start()
        for _ in range(6):
            finish_phase(eng)
            assert eng.phase == Phase.SHORT_BREAK
            finish_phase(eng)

    def test_restart_clears_session_count(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        pomodoro.pause()
        pomodoro.start()
        assert pomodoro.phase == Phase.WORK
        assert pomodoro.completed_work_sessions == 0
        assert pomodoro.popup == Popup.NONE

    def test_start_refused_with_zero_work(self, qapp):
        eng = TimerEngine(config=TimerConfiguration(
            mode=TimerMode.POMODORO, work_seconds=0,
        ))
        assert eng.start() is False
        assert eng.phase == Phase.IDLE

    def test_zero_length_break_passes_on_next_tick(self, qapp, alarm):
        eng = TimerEngine(
            config=TimerConfiguration(
                mode=TimerMode.POMODORO, work_seconds=2,
                short_break_seconds=0, cycles_before_long_break=4,
            ),
            alarm=alarm,
        )
        eng.start()
        run_ticks(eng, 2)
        assert eng.phase == Phase.SHORT_BREAK
        assert eng.remaining == 0
        run_ticks(eng, 1)
        assert eng.phase == Phase.WORK
        assert eng.remaining == 2

    def test_phase_changed_signal(self, pomodoro):
        c = SignalCollector()
        pomodoro.phase_changed.connect(c)
        pomodoro.start()
        finish_phase(pomodoro)
        finish_phase(pomodoro)
        assert c.items == [Phase.WORK, Phase.SHORT_BREAK, Phase.WORK]

    def test_expired_reports_ended_phase(self, pomodoro):
        c = SignalCollector()
        pomodoro.expired.connect(c)
        pomodoro.start()
        finish_phase(pomodoro)
        finish_phase(pomodoro)
        assert c.items == [Phase.WORK, Phase.SHORT_BREAK]


class TestPopups:

    def test_break_announced_after_work(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        assert pomodoro.popup == Popup.BREAK_ANNOUNCED
        assert pomodoro.phase.is_break

    def test_work_announced_after_break(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        finish_phase(pomodoro)
        assert pomodoro.popup == Popup.WORK_ANNOUNCED
        assert pomodoro.phase == Phase.WORK

    def test_acknowledge_clears_only_popup(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        before = _snapshot(pomodoro)
        pomodoro.acknowledge_popup()
        assert pomodoro.popup == Popup.NONE
        assert _snapshot(pomodoro)[:-1] == before[:-1]

    def test_popup_signal(self, pomodoro):
        c = SignalCollector()
        pomodoro.popup_changed.connect(c)
        pomodoro.start()
        finish_phase(pomodoro)
        pomodoro.acknowledge_popup()
        assert c.items == [Popup.BREAK_ANNOUNCED, Popup.NONE]

    def test_reset_clears_popup(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        pomodoro.reset()
        assert pomodoro.popup == Popup.NONE

    def test_popup_matches_phase_through_cycle(self, pomodoro):
        pomodoro.start()
        for _ in range(8):
            finish_phase(pomodoro)
            if pomodoro.popup == Popup.BREAK_ANNOUNCED:
                assert pomodoro.phase.is_break
            elif pomodoro.popup == Popup.WORK_ANNOUNCED:
                assert pomodoro.phase == Phase.WORK


# ═══════════════════════════════════════════════════════════════════════════
#  PAUSE / RESUME / RESET
# ═══════════════════════════════════════════════════════════════════════════


class TestPauseResume:

    def test_pause_and_resume_keep_remaining(self, engine):
        engine.commit_edit("0", "1", "0")
        engine.start()
        run_ticks(engine, 30)
        assert engine.remaining == 30

        assert engine.pause() is True
        assert engine.is_running is False
        assert engine._ticker.is_armed is False
        run_ticks(engine, 5)  # stray ticks while paused do nothing
        assert engine.remaining == 30

        assert engine.resume() is True
        assert engine.is_running
        assert engine._ticker.is_armed
        assert engine.remaining == 30
        run_ticks(engine, 1)
        assert engine.remaining == 29

    def test_pause_twice_same_as_once(self, engine):
        engine.commit_edit("0", "0", "20")
        engine.start()
        engine.pause()
        snapshot = _snapshot(engine)
        assert engine.pause() is False
        assert _snapshot(engine) == snapshot

    def test_pause_refused_when_idle(self, engine):
        assert engine.pause() is False

    def test_resume_refused_while_running(self, engine):
        engine.commit_edit("0", "0", "20")
        engine.start()
        assert engine.resume() is False

    def test_resume_refused_before_first_start(self, engine):
        engine.commit_edit("0", "0", "20")
        assert engine.remaining == 20
        assert engine.resume() is False

    def test_resume_refused_after_finish(self, engine):
        engine.commit_edit("0", "0", "2")
        engine.start()
        finish_phase(engine)
        assert engine.resume() is False

    def test_pause_during_break(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        assert pomodoro.pause() is True
        assert pomodoro.phase == Phase.SHORT_BREAK
        assert pomodoro.resume() is True
        assert pomodoro.phase == Phase.SHORT_BREAK


class TestReset:

    def test_reset_from_zero_is_noop(self, engine):
        snapshot = _snapshot(engine)
        assert engine.reset() is False
        assert _snapshot(engine) == snapshot

    def test_simple_reset_clears_configured(self, engine):
        engine.commit_edit("0", "5", "0")
        engine.start()
        run_ticks(engine, 3)
        assert engine.reset() is True
        assert engine.is_running is False
        assert engine.has_started_once is False
        assert engine.remaining == 0
        assert engine.configured_seconds == 0
        assert engine._ticker.is_armed is False
        assert engine.display() == DisplayTime("00", "00", "00")

    def test_simple_reset_when_only_configured(self, engine):
        engine.commit_edit("0", "5", "0")
        engine._remaining = 0
        assert engine.reset() is True
        assert engine.configured_seconds == 0

    def test_pomodoro_reset(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        assert pomodoro.reset() is True
        assert pomodoro.phase == Phase.IDLE
        assert pomodoro.completed_work_sessions == 0
        assert pomodoro.remaining == 0
        assert pomodoro.is_running is False
        assert pomodoro.has_started_once is False
        assert pomodoro._ticker.is_armed is False

    def test_pomodoro_reset_refused_before_start(self, pomodoro):
        assert pomodoro.reset() is False

    def test_reset_then_reset_is_noop(self, pomodoro):
        pomodoro.start()
        pomodoro.reset()
        assert pomodoro.reset() is False


# ═══════════════════════════════════════════════════════════════════════════
#  EDITING
# ═══════════════════════════════════════════════════════════════════════════


class TestEditing:

    @pytest.mark.parametrize("h, m, s", [(0, 0, 1), (0, 25, 0), (1, 59, 59), (48, 0, 7)])
    def test_commit_reproduces_display(self, engine, h, m, s):
        result = engine.commit_edit(str(h), str(m), str(s))
        assert result.accepted
        assert engine.display() == DisplayTime(f"{h:02d}", f"{m:02d}", f"{s:02d}")
        assert engine.configured_seconds == h * 3600 + m * 60 + s
        assert engine.remaining == engine.configured_seconds

    def test_commit_zero(self, engine):
        engine.commit_edit("0", "1", "0")
        result = engine.commit_edit("0", "0", "0")
        assert result.accepted
        assert engine.display() == DisplayTime("00", "00", "00")

    @pytest.mark.parametrize("h, m, s", [("0", "60", "0"), ("x", "0", "0"), ("0", "0", "-1")])
    def test_invalid_edit_leaves_state(self, engine, h, m, s):
        engine.commit_edit("1", "2", "3")
        snapshot = _snapshot(engine)
        result = engine.commit_edit(h, m, s)
        assert not result.accepted
        assert result.fields == ("01", "02", "03")
        assert _snapshot(engine) == snapshot

    def test_edit_refused_while_running(self, engine):
        engine.commit_edit("0", "0", "30")
        engine.start()
        run_ticks(engine, 2)
        snapshot = _snapshot(engine)
        result = engine.commit_edit("0", "5", "0")
        assert not result.accepted
        assert result.fields == ("00", "00", "28")
        assert _snapshot(engine) == snapshot

    def test_edit_refused_in_pomodoro(self, pomodoro):
        snapshot = _snapshot(pomodoro)
        result = pomodoro.commit_edit("0", "1", "0")
        assert not result.accepted
        assert _snapshot(pomodoro) == snapshot

    def test_edit_while_paused_invalidates_run(self, engine):
        engine.commit_edit("0", "0", "30")
        engine.start()
        run_ticks(engine, 5)
        engine.pause()
        result = engine.commit_edit("0", "0", "45")
        assert result.accepted
        assert engine.has_started_once is False
        assert engine.remaining == 45
        assert engine.resume() is False
        assert engine.start_label == "Start"

    def test_blank_fields_inherit_display(self, engine):
        engine.commit_edit("2", "30", "0")
        result = engine.commit_edit("", "", "15")
        assert result.fields == ("02", "30", "15")

    def test_cancel_edit_returns_display(self, engine):
        engine.commit_edit("0", "10", "0")
        snapshot = _snapshot(engine)
        assert engine.cancel_edit().fields == ("00", "10", "00")
        assert _snapshot(engine) == snapshot

    def test_commit_emits_state_changed(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)
        engine.commit_edit("0", "1", "0")
        assert len(c) == 1
        engine.commit_edit("0", "61", "0")
        assert len(c) == 1


# ═══════════════════════════════════════════════════════════════════════════
#  DISPLAY / CONTROLS
# ═══════════════════════════════════════════════════════════════════════════


class TestDisplay:

    def test_pomodoro_idle_previews_work(self, qapp):
        eng = TimerEngine(config=TimerConfiguration(
            mode=TimerMode.POMODORO, work_seconds=25 * 60,
        ))
        assert eng.display() == DisplayTime("00", "25", "00")
        assert eng.display().text == "00:25:00"

    def test_pomodoro_shows_remaining(self, pomodoro):
        pomodoro.start()
        run_ticks(pomodoro, 1)
        assert pomodoro.display() == DisplayTime("00", "00", "01")

    def test_simple_paused_shows_remaining(self, engine):
        engine.commit_edit("1", "0", "0")
        engine.start()
        run_ticks(engine, 61)
        engine.pause()
        assert engine.display() == DisplayTime("00", "58", "59")


class TestControls:

    def test_fresh_engine(self, engine):
        assert engine.controls() == Controls(
            can_start=False, can_pause=False, can_resume=False,
            can_reset=False, can_edit=True,
        )

    def test_configured(self, engine):
        engine.commit_edit("0", "1", "0")
        assert engine.controls() == Controls(
            can_start=True, can_pause=False, can_resume=False,
            can_reset=True, can_edit=True,
        )

    def test_running(self, engine):
        engine.commit_edit("0", "1", "0")
        engine.start()
        assert engine.controls() == Controls(
            can_start=False, can_pause=True, can_resume=False,
            can_reset=True, can_edit=False,
        )

    def test_paused(self, engine):
        engine.commit_edit("0", "1", "0")
        engine.start()
        engine.pause()
        assert engine.controls() == Controls(
            can_start=True, can_pause=False, can_resume=True,
            can_reset=True, can_edit=True,
        )

    def test_pomodoro_never_editable(self, pomodoro):
        assert pomodoro.controls().can_edit is False
        pomodoro.start()
        pomodoro.pause()
        assert pomodoro.controls().can_edit is False

    def test_controls_agree_with_operations(self, engine):
        engine.commit_edit("0", "0", "3")
        for action in ("start", "pause", "resume", "pause", "reset"):
            allowed = getattr(engine.controls(), f"can_{action}")
            assert getattr(engine, action)() is allowed


# ═══════════════════════════════════════════════════════════════════════════
#  CONFIGURE
# ═══════════════════════════════════════════════════════════════════════════


class TestConfigure:

    def test_mode_change_resets(self, engine):
        engine.commit_edit("0", "0", "30")
        engine.start()
        changed = engine.configure(TimerConfiguration(mode=TimerMode.POMODORO))
        assert changed is True
        assert engine.is_pomodoro
        assert engine.is_running is False
        assert engine.remaining == 0
        assert engine.has_started_once is False
        assert engine._ticker.is_armed is False

    def test_duration_change_resets(self, pomodoro):
        pomodoro.start()
        finish_phase(pomodoro)
        assert pomodoro.configure({"workSeconds": 10}) is True
        assert pomodoro.phase == Phase.IDLE
        assert pomodoro.completed_work_sessions == 0
        assert pomodoro.popup == Popup.NONE
        assert pomodoro.configuration.work_seconds == 10
        assert pomodoro.configuration.short_break_seconds == 1

    def test_same_configuration_keeps_state(self, pomodoro, pomodoro_config):
        pomodoro.start()
        run_ticks(pomodoro, 1)
        assert pomodoro.configure(pomodoro_config) is False
        assert pomodoro.is_running
        assert pomodoro.remaining == 1

    def test_cycles_change_keeps_state(self, pomodoro):
        pomodoro.start()
        assert pomodoro.configure({"cyclesBeforeLongBreak": 3}) is False
        assert pomodoro.is_running
        assert pomodoro.configuration.cycles_before_long_break == 3

    def test_reset_restores_initial_seconds(self, qapp):
        eng = TimerEngine(initial_seconds=3600)
        eng.commit_edit("0", "5", "0")
        eng.configure({"mode": TimerMode.POMODORO})
        eng.configure({"mode": TimerMode.SIMPLE})
        assert eng.configured_seconds == 3600

    def test_mode_option_capitalised(self, engine):
        assert engine.configure({"mode": "Pomodoro"}) is True
        assert engine.is_pomodoro

    def test_configure_mid_run_stops_alarm_path(self, pomodoro, alarm):
        pomodoro.start()
        pomodoro.configure({"mode": "simple"})
        run_ticks(pomodoro, 5)
        assert alarm.plays == 0


# ═══════════════════════════════════════════════════════════════════════════
#  ALARM
# ═══════════════════════════════════════════════════════════════════════════


class TestAlarm:

    def test_no_alarm_handle_is_silent(self, qapp):
        eng = TimerEngine()
        eng.commit_edit("0", "0", "1")
        eng.start()
        run_ticks(eng, 1)
        assert eng.remaining == 0
        assert eng.is_running is False

    def test_failing_alarm_does_not_stop_cycle(self, qapp, pomodoro_config, caplog):
        bad = FakeAlarm(error=RuntimeError("playback rejected"))
        eng = TimerEngine(config=pomodoro_config, alarm=bad)
        eng.start()
        with caplog.at_level(logging.ERROR, logger="focusboard.timer.engine"):
            finish_phase(eng)
        assert eng.phase == Phase.SHORT_BREAK
        assert eng.completed_work_sessions == 1
        assert eng.is_running
        assert bad.plays == 1
        assert "Alarm playback failed" in caplog.text

    def test_failing_alarm_simple_mode(self, qapp):
        bad = FakeAlarm(error=OSError("no device"))
        eng = TimerEngine(alarm=bad)
        eng.commit_edit("0", "0", "2")
        eng.start()
        finish_phase(eng)
        assert eng.is_running is False
        assert eng.remaining == 0

    def test_set_alarm(self, engine):
        other = FakeAlarm()
        engine.set_alarm(other)
        engine.commit_edit("0", "0", "1")
        engine.start()
        run_ticks(engine, 1)
        assert other.plays == 1

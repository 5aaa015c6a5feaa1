"""Shared pytest fixtures for FocusBoard tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from focusboard.timer.config import TimerConfiguration, TimerMode
from focusboard.timer.engine import TimerEngine

from helpers import FakeAlarm


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep settings and cached sounds out of the real home directory."""
    monkeypatch.setattr("focusboard.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("focusboard.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("focusboard.audio.alarm.SOUNDS_DIR", tmp_path / "sounds")
    yield


@pytest.fixture
def alarm():
    return FakeAlarm()


@pytest.fixture
def engine(qapp, alarm):
    """Simple-mode engine with nothing configured yet."""
    return TimerEngine(parent=None, alarm=alarm)


@pytest.fixture
def pomodoro_config():
    return TimerConfiguration(
        mode=TimerMode.POMODORO,
        work_seconds=2,
        short_break_seconds=1,
        long_break_seconds=3,
        cycles_before_long_break=2,
    )


@pytest.fixture
def pomodoro(qapp, alarm, pomodoro_config):
    """Pomodoro engine with tiny durations (work 2 s, breaks 1 s / 3 s)."""
    return TimerEngine(parent=None, config=pomodoro_config, alarm=alarm)

"""Application settings with JSON persistence.

Settings are stored at:
    ~/.focusboard/settings.json

Timer durations are kept in minutes, the unit the settings dialog
edits; :meth:`Settings.timer_configuration` converts them to seconds.

Usage::

    settings = load_settings()
    settings.use_pomodoro = True
    save_settings(settings)
    engine.configure(settings.timer_configuration())
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.config import TimerConfiguration, TimerMode

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / ".focusboard"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

DEFAULT_SIMPLE_SECONDS = 60 * 60


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    use_pomodoro: bool = False
    pomodoro_work_minutes: int = 25
    pomodoro_short_break_minutes: int = 5
    pomodoro_long_break_minutes: int = 15
    pomodoro_cycles_before_long_break: int = 4

    # ── alarm ─────────────────────────────────────────────────────────
    alarm_sound_path: str | None = None    # None = built-in tone
    alarm_enabled: bool = True
    alarm_volume: int = 70                 # 0-100

    # ── appearance ────────────────────────────────────────────────────
    font_color: str = "#ffffff"

    def timer_configuration(self) -> TimerConfiguration:
        return TimerConfiguration(
            mode=TimerMode.POMODORO if self.use_pomodoro else TimerMode.SIMPLE,
            work_seconds=max(0, self.pomodoro_work_minutes) * 60,
            short_break_seconds=max(0, self.pomodoro_short_break_minutes) * 60,
            long_break_seconds=max(0, self.pomodoro_long_break_minutes) * 60,
            cycles_before_long_break=self.pomodoro_cycles_before_long_break,
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("Could not read %s; using defaults", SETTINGS_PATH, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )

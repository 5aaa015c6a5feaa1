"""UI package."""

from .timer_widget import TimerWidget
from .duration_field import DurationField
from .announcement_popup import AnnouncementPopup
from .settings_dialog import SettingsDialog

__all__ = [
    "TimerWidget",
    "DurationField",
    "AnnouncementPopup",
    "SettingsDialog",
]

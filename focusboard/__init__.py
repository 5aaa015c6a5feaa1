"""FocusBoard — project dashboard with a countdown / Pomodoro timer."""

__version__ = "0.1.0"

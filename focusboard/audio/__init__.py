"""Audio package."""

from .alarm import AlarmPlayer

__all__ = ["AlarmPlayer"]

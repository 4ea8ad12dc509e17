"""Route group exports."""

from . import dispatch, health, reports

__all__ = ["dispatch", "health", "reports"]

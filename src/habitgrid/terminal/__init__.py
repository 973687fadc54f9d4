"""Terminal presentation helpers."""

from .display import DisplayConfig, detect_display

__all__ = ["DisplayConfig", "detect_display"]

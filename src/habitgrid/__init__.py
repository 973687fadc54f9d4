"""habitgrid: daily habit tracking with streaks and terminal heat-maps."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .context import create_app_context
from .services.grid import GridDay, ViewMode, ViewRange, build_grid, start_date_for
from .services.habits import StreakMode, completion_rate, streak
from .services.stats import HabitStats, aggregate_stats

__version__ = "0.1.0"

__all__ = [
    "BaseConfig",
    "DevConfig",
    "GridDay",
    "HabitStats",
    "StreakMode",
    "ViewMode",
    "ViewRange",
    "aggregate_stats",
    "build_grid",
    "completion_rate",
    "create_app_context",
    "start_date_for",
    "streak",
]

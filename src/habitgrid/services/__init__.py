"""Service module exports."""

from . import catalog, dates, grid, habits, stats

__all__ = [
    "catalog",
    "dates",
    "grid",
    "habits",
    "stats",
]

"""Concrete repository implementations."""

from .habit import JSONHabitRepository

__all__ = [
    "JSONHabitRepository",
]

"""Persisted model exports."""

from .habit import Habit, HabitData

__all__ = [
    "Habit",
    "HabitData",
]

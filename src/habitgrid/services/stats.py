"""Per-habit statistics bundles for the stats views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..models.habit import Habit
from .dates import to_date_set
from .habits import completed_days, current_streak, longest_streak

WEEK_WINDOW = 7
MONTH_WINDOW = 30
YEAR_WINDOW = 365


@dataclass(frozen=True, slots=True)
class HabitStats:
    """Derived metrics for one habit; built on demand and never persisted.

    The ``*_days`` fields hold the completed-day counts behind each rate and
    feed the "n/7 days" labels.
    """

    name: str
    current_streak: int
    longest_streak: int
    weekly_rate: float
    monthly_rate: float
    yearly_rate: float
    total_completions: int = 0
    weekly_days: int = 0
    monthly_days: int = 0
    yearly_days: int = 0


def habit_stats(habit: Habit, *, today: date | None = None) -> HabitStats:
    today = today or date.today()
    days = to_date_set(habit.dates_tracked)
    weekly = completed_days(days, WEEK_WINDOW, today=today)
    monthly = completed_days(days, MONTH_WINDOW, today=today)
    yearly = completed_days(days, YEAR_WINDOW, today=today)
    return HabitStats(
        name=habit.name,
        current_streak=current_streak(days, today=today),
        longest_streak=longest_streak(days),
        weekly_rate=weekly / WEEK_WINDOW * 100,
        monthly_rate=monthly / MONTH_WINDOW * 100,
        yearly_rate=yearly / YEAR_WINDOW * 100,
        total_completions=len(days),
        weekly_days=weekly,
        monthly_days=monthly,
        yearly_days=yearly,
    )


def aggregate_stats(habits: Iterable[Habit], *, today: date | None = None) -> list[HabitStats]:
    """Return stats for every habit, highest current streak first.

    Ties keep their input order.
    """

    today = today or date.today()
    bundles = [habit_stats(habit, today=today) for habit in habits]
    return sorted(bundles, key=lambda s: s.current_streak, reverse=True)


__all__ = [
    "HabitStats",
    "MONTH_WINDOW",
    "WEEK_WINDOW",
    "YEAR_WINDOW",
    "aggregate_stats",
    "habit_stats",
]

"""Habit calculators for streaks and completion rates."""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from .dates import DateLike, to_date_set


class StreakMode(str, Enum):
    """Which streak ``streak`` measures."""

    CURRENT = "current"
    LONGEST = "longest"


def streak(dates: Iterable[DateLike], mode: StreakMode | str, *, today: date | None = None) -> int:
    """Return the current or longest run of consecutive completed days.

    ``dates`` may be unsorted and contain duplicates or unparsable entries;
    the latter are skipped. A current streak stays alive through yesterday,
    so today's completion is not yet required.
    """

    mode = StreakMode(mode)
    days = sorted(to_date_set(dates))
    if not days:
        return 0

    if mode is StreakMode.CURRENT:
        today = today or date.today()
        most_recent = days[-1]
        if most_recent < today - timedelta(days=1):
            return 0

        completed = set(days)
        current = 0
        cursor = most_recent
        while cursor in completed:
            current += 1
            cursor -= timedelta(days=1)
        return current

    longest = 1
    run = 1
    for previous, day in zip(days, days[1:]):
        if day == previous + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
    return longest


def current_streak(dates: Iterable[DateLike], *, today: date | None = None) -> int:
    return streak(dates, StreakMode.CURRENT, today=today)


def longest_streak(dates: Iterable[DateLike]) -> int:
    return streak(dates, StreakMode.LONGEST)


def compute_streaks(dates: Iterable[DateLike], *, today: date | None = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from a collection of dates."""

    days = to_date_set(dates)
    return current_streak(days, today=today), longest_streak(days)


def completed_days(dates: Iterable[DateLike], window_days: int, *, today: date | None = None) -> int:
    """Count completed days in the trailing window ending today (inclusive)."""

    if window_days <= 0:
        return 0
    today = today or date.today()
    completed = to_date_set(dates)
    if not completed:
        return 0
    # windows reaching past date.min start there
    if window_days - 1 < (today - date.min).days:
        start = today - timedelta(days=window_days - 1)
    else:
        start = date.min
    return sum(1 for day in completed if start <= day <= today)


def completion_rate(dates: Iterable[DateLike], window_days: int, *, today: date | None = None) -> float:
    """Return the percentage (0.0-100.0) of days completed in the trailing window.

    The window runs from ``today - (window_days - 1)`` through ``today``. The
    value is not rounded; display code decides on precision. Non-positive
    windows and empty inputs yield 0.0.
    """

    if window_days <= 0:
        return 0.0
    hits = completed_days(dates, window_days, today=today)
    return hits / window_days * 100


__all__ = [
    "StreakMode",
    "completed_days",
    "completion_rate",
    "compute_streaks",
    "current_streak",
    "longest_streak",
    "streak",
]

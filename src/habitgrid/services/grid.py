"""Calendar grid generation for the heat-map views."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Mapping, Optional, Union

from ..models.habit import Habit
from .dates import DateLike, to_date_set, week_start


class ViewMode(str, Enum):
    """Single-habit done/not-done cells versus per-day counts across habits."""

    SINGLE = "single"
    AGGREGATE = "aggregate"


class ViewRange(str, Enum):
    """Time windows the tracker can show."""

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    LAST30 = "last30"
    DAY = "day"


GRID_RANGES = (ViewRange.YEAR, ViewRange.MONTH, ViewRange.WEEK, ViewRange.LAST30)

_WEEKS = {
    ViewRange.YEAR: 52,
    ViewRange.MONTH: 5,
    ViewRange.WEEK: 1,
    ViewRange.LAST30: 5,
}


@dataclass(frozen=True, slots=True)
class GridDay:
    """One cell of the heat-map grid."""

    day: date
    in_future: bool
    done: bool = False
    completed_count: int = 0


def _grid_range(view_range: ViewRange | str) -> ViewRange:
    value = ViewRange(view_range)
    if value not in _WEEKS:
        raise ValueError(f"'{value.value}' is a summary view, not a grid range.")
    return value


def weeks_for(view_range: ViewRange | str) -> int:
    """Number of grid weeks generated for a range."""

    return _WEEKS[_grid_range(view_range)]


def start_date_for(view_range: ViewRange | str, *, today: date | None = None) -> date:
    """Return the first grid day for a range; depends only on today's date.

    ``year`` starts on a Sunday 51 weeks before the week containing today, so
    the 52-week grid always ends in today's week.
    """

    value = _grid_range(view_range)
    today = today or date.today()
    if value is ViewRange.YEAR:
        return week_start(today) - timedelta(weeks=_WEEKS[ViewRange.YEAR] - 1)
    if value is ViewRange.MONTH:
        return today.replace(day=1)
    if value is ViewRange.WEEK:
        return week_start(today)
    return today - timedelta(days=29)


def daily_counts(habits: Iterable[Habit]) -> dict[date, int]:
    """Map each date to the number of distinct habits completed on it."""

    counts: Counter[date] = Counter()
    for habit in habits:
        counts.update(to_date_set(habit.dates_tracked))
    return dict(counts)


def build_grid(
    start_date: date,
    num_weeks: int,
    mode: ViewMode | str,
    data: Union[Iterable[DateLike], Mapping[date, int]],
    *,
    today: date | None = None,
) -> list[GridDay]:
    """Return ``num_weeks * 7`` chronological cells starting at ``start_date``.

    In single mode ``data`` holds one habit's completion dates; in aggregate
    mode it maps dates to completion counts (see ``daily_counts``).
    """

    mode = ViewMode(mode)
    today = today or date.today()
    total = max(num_weeks, 0) * 7

    if mode is ViewMode.SINGLE:
        completed = to_date_set(data)  # type: ignore[arg-type]
        counts: Mapping[date, int] = {}
    else:
        completed = set()
        counts = data if isinstance(data, Mapping) else Counter(to_date_set(data))

    cells: list[GridDay] = []
    for offset in range(total):
        day = start_date + timedelta(days=offset)
        cells.append(
            GridDay(
                day=day,
                in_future=day > today,
                done=day in completed,
                completed_count=counts.get(day, 0),
            )
        )
    return cells


def build_range_grid(
    view_range: ViewRange | str,
    habits: Iterable[Habit],
    *,
    habit: Optional[Habit] = None,
    today: date | None = None,
) -> list[GridDay]:
    """Build the grid for a named range: one habit when given, else all habits."""

    today = today or date.today()
    start = start_date_for(view_range, today=today)
    weeks = weeks_for(view_range)
    if habit is not None:
        return build_grid(start, weeks, ViewMode.SINGLE, habit.dates_tracked, today=today)
    return build_grid(start, weeks, ViewMode.AGGREGATE, daily_counts(habits), today=today)


def day_summary(
    habits: Iterable[Habit], *, habit: Optional[Habit] = None, today: date | None = None
) -> list[tuple[str, bool]]:
    """Return (name, done today) for one habit or for every habit."""

    today = today or date.today()
    selected = [habit] if habit is not None else list(habits)
    return [(h.name, today in to_date_set(h.dates_tracked)) for h in selected]


__all__ = [
    "GRID_RANGES",
    "GridDay",
    "ViewMode",
    "ViewRange",
    "build_grid",
    "build_range_grid",
    "daily_counts",
    "day_summary",
    "start_date_for",
    "weeks_for",
]

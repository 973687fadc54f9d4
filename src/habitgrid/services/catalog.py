"""Habit management operations on the in-memory document.

These helpers mutate the ``HabitData`` they are given and raise ``ValueError``
with messages meant for the user. Saving is left to the caller.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from ..logging_config import get_logger
from ..models.habit import Habit, HabitData
from .dates import format_date, parse_date, parse_iso_date, to_date_set

SHORT_NAME_PATTERN = re.compile(r"^[a-z0-9_-]+$")

logger = get_logger(__name__)


def find_habit(data: HabitData, identifier: str) -> tuple[Optional[Habit], int]:
    """Resolve a 1-based index, a name (any case) or an exact short name."""

    identifier = identifier.strip()
    try:
        index = int(identifier) - 1
    except ValueError:
        index = -1
    else:
        if 0 <= index < len(data.habits):
            return data.habits[index], index

    for position, habit in enumerate(data.habits):
        if habit.name.lower() == identifier.lower() or (
            habit.short_name and habit.short_name == identifier
        ):
            return habit, position
    return None, -1


def require_habit(data: HabitData, identifier: str) -> tuple[Habit, int]:
    habit, index = find_habit(data, identifier)
    if habit is None:
        raise ValueError(
            f"No habit found matching '{identifier}'. Use 'habits list' to see available habits."
        )
    return habit, index


def _ensure_unique_name(data: HabitData, name: str, *, skip: int = -1) -> None:
    for position, habit in enumerate(data.habits):
        if position != skip and habit.name.lower() == name.lower():
            raise ValueError(f"Habit with name '{name}' already exists.")


def _validate_short_name(data: HabitData, short_name: str, *, skip: int = -1) -> None:
    if not SHORT_NAME_PATTERN.match(short_name):
        raise ValueError(
            "Short name must only contain lowercase letters, numbers, underscores and hyphens."
        )
    for position, habit in enumerate(data.habits):
        if position != skip and habit.short_name == short_name:
            raise ValueError(f"Habit with short name '{short_name}' already exists.")


def add_habit(data: HabitData, name: str, short_name: str = "") -> Habit:
    """Append a new habit with no completions."""

    name = name.strip()
    if not name:
        raise ValueError("No habit name provided.")
    _ensure_unique_name(data, name)
    if short_name:
        _validate_short_name(data, short_name)

    habit = Habit(name=name, short_name=short_name)
    data.habits.append(habit)
    logger.info("Habit added", extra={"habit": name})
    return habit


def rename_habit(data: HabitData, index: int, new_name: str) -> str:
    """Rename the habit at ``index`` and return its previous name."""

    new_name = new_name.strip()
    if not new_name:
        raise ValueError("No habit name provided.")
    _ensure_unique_name(data, new_name, skip=index)
    habit = data.habits[index]
    old_name, habit.name = habit.name, new_name
    return old_name


def set_short_name(data: HabitData, index: int, short_name: str) -> str:
    """Change the short alias of the habit at ``index``; returns the old one."""

    _validate_short_name(data, short_name, skip=index)
    habit = data.habits[index]
    old_short, habit.short_name = habit.short_name, short_name
    return old_short


def delete_habit(data: HabitData, index: int) -> Habit:
    removed = data.habits.pop(index)
    logger.info("Habit deleted", extra={"habit": removed.name})
    return removed


def parse_date_arg(raw: str | None, *, today: date | None = None) -> date:
    """Parse a ``--date`` value; blank means today and future dates are refused."""

    today = today or date.today()
    if not raw:
        return today
    try:
        day = parse_iso_date(raw)
    except ValueError:
        raise ValueError(f"Invalid date format '{raw}'. Use YYYY-MM-DD format.") from None
    if day > today:
        raise ValueError(f"Cannot use future date '{raw}'.")
    return day


def mark_done(habit: Habit, day: date) -> bool:
    """Record a completion; returns False when the day was already recorded."""

    value = format_date(day)
    if day in to_date_set(habit.dates_tracked):
        return False
    habit.dates_tracked.append(value)
    habit.dates_tracked.sort()
    logger.info("Completion recorded", extra={"habit": habit.name, "day": value})
    return True


def remove_completion(habit: Habit, day: date) -> bool:
    """Drop a completion; returns False when there was nothing to remove."""

    remaining = [d for d in habit.dates_tracked if parse_date(d) != day]
    if len(remaining) == len(habit.dates_tracked):
        return False
    habit.dates_tracked = remaining
    logger.info(
        "Completion removed", extra={"habit": habit.name, "day": format_date(day)}
    )
    return True


def habits_due_today(data: HabitData, *, today: date | None = None) -> list[tuple[int, Habit]]:
    """Return (1-based index, habit) for every habit not completed today."""

    today = today or date.today()
    return [
        (position + 1, habit)
        for position, habit in enumerate(data.habits)
        if today not in to_date_set(habit.dates_tracked)
    ]


def import_habits(data: HabitData, incoming: HabitData, *, merge: bool) -> int:
    """Replace the document or merge in habits whose names are new.

    Returns the number of habits taken from ``incoming``.
    """

    if not merge:
        data.habits = list(incoming.habits)
        logger.info("Habits replaced from import", extra={"count": len(incoming.habits)})
        return len(incoming.habits)

    existing = {habit.name for habit in data.habits}
    added = 0
    for habit in incoming.habits:
        if habit.name in existing:
            continue
        data.habits.append(habit)
        existing.add(habit.name)
        added += 1
    logger.info(
        "Habits merged from import",
        extra={"offered": len(incoming.habits), "added": added},
    )
    return added


__all__ = [
    "add_habit",
    "delete_habit",
    "find_habit",
    "habits_due_today",
    "import_habits",
    "mark_done",
    "parse_date_arg",
    "remove_completion",
    "rename_habit",
    "require_habit",
    "set_short_name",
]

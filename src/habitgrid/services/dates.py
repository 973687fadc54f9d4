"""Calendar-date parsing shared by the calculators."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Iterable, Union

from ..logging_config import get_logger

DATE_FORMAT = "%Y-%m-%d"
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateLike = Union[str, date]

logger = get_logger(__name__)


def parse_iso_date(value: str) -> date:
    """Parse a zero-padded ``YYYY-MM-DD`` string; raises ValueError otherwise."""

    value = value.strip()
    if not ISO_DATE_PATTERN.match(value):
        raise ValueError(f"not a YYYY-MM-DD date: {value!r}")
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_date(value: DateLike) -> date | None:
    """Return the calendar date for ``value`` or None when it cannot be parsed."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        return None


def to_date_set(values: Iterable[DateLike]) -> set[date]:
    """Parse completion entries into a set, skipping anything unparsable."""

    parsed: set[date] = set()
    skipped = 0
    for value in values:
        day = parse_date(value)
        if day is None:
            skipped += 1
            continue
        parsed.add(day)
    if skipped:
        logger.debug("Skipped unparsable completion dates", extra={"skipped": skipped})
    return parsed


def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def week_start(day: date) -> date:
    """Return the Sunday that opens the week containing ``day``."""

    # date.weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)

"""Habits tracking data structures."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from sqlmodel import Field, SQLModel


class Habit(SQLModel):
    """A user-defined habit and the calendar days it was completed."""

    name: str
    short_name: str = Field(default="")
    dates_tracked: list[str] = Field(default_factory=list)
    reminder_info: dict[str, Any] = Field(default_factory=dict)

    @field_validator("short_name", mode="before")
    @classmethod
    def _none_short_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("dates_tracked", mode="before")
    @classmethod
    def _none_dates(cls, value: Any) -> Any:
        # Older files wrote null once the last completion was removed.
        return [] if value is None else value

    @field_validator("reminder_info", mode="before")
    @classmethod
    def _none_reminders(cls, value: Any) -> Any:
        return {} if value is None else value


class HabitData(SQLModel):
    """The whole persisted document: every habit the user tracks."""

    habits: list[Habit] = Field(default_factory=list)

    @field_validator("habits", mode="before")
    @classmethod
    def _none_habits(cls, value: Any) -> Any:
        return [] if value is None else value

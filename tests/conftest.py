"""Pytest configuration and shared fixtures for habitgrid tests.

This module provides a pinned evaluation date, habit factories, an isolated
data file and a CLI runner so tests never touch the real ~/.habits_tracker.json.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from pathlib import Path

import pytest
from click.testing import CliRunner

from habitgrid.logging_config import ROOT_LOGGER_NAME
from habitgrid.models import Habit, HabitData
from habitgrid.terminal.display import DisplayConfig

# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Point every configurable path at the test's temporary directory."""

    monkeypatch.setenv("HABITS_DATA_FILE", str(tmp_path / "habits.json"))
    monkeypatch.setenv("HABITS_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("HABITS_FILE_LOGGING", "0")
    monkeypatch.setenv("HABITS_COLOR", "never")
    monkeypatch.delenv("HABITS_DEV_MODE", raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so they never outlive a test."""

    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def today() -> date:
    """A fixed Wednesday used as the evaluation date."""
    return date(2024, 3, 13)


@pytest.fixture
def data_file(tmp_path) -> Path:
    return tmp_path / "habits.json"


@pytest.fixture
def plain_display() -> DisplayConfig:
    return DisplayConfig.plain(width=80)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# =============================================================================
# Data Factories
# =============================================================================


def consecutive_days(end: date, count: int) -> list[str]:
    """ISO strings for ``count`` consecutive days ending on ``end``."""
    return [(end - timedelta(days=i)).isoformat() for i in range(count)]


@pytest.fixture
def days_ending():
    """Expose ``consecutive_days`` to tests."""
    return consecutive_days


@pytest.fixture
def habit_factory():
    """Factory for Habit records.

    Usage:
        habit = habit_factory(name="Exercise", dates=["2024-01-01"])
    """

    def _create(name: str = "Exercise", dates=None, short_name: str = "") -> Habit:
        return Habit(name=name, short_name=short_name, dates_tracked=list(dates or []))

    return _create


@pytest.fixture
def habit_data(habit_factory, today) -> HabitData:
    """Three habits with different recent histories."""

    return HabitData(
        habits=[
            habit_factory("Exercise", consecutive_days(today, 5), short_name="ex"),
            habit_factory("Reading", consecutive_days(today - timedelta(days=1), 2)),
            habit_factory("Meditation", []),
        ]
    )


@pytest.fixture
def write_data(data_file):
    """Persist a HabitData document to the isolated data file."""

    def _write(data: HabitData) -> Path:
        data_file.write_text(data.model_dump_json(indent=2), encoding="utf-8")
        return data_file

    return _write

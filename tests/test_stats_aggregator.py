"""Tests for per-habit statistics bundles and their ordering."""

from __future__ import annotations

from datetime import timedelta

import pytest

from habitgrid.models import Habit
from habitgrid.services.stats import (
    HabitStats,
    aggregate_stats,
    habit_stats,
)


class TestHabitStats:
    def test_bundle_fields(self, habit_factory, today, days_ending):
        habit = habit_factory("Exercise", days_ending(today, 7) + ["2023-01-01", "junk"])
        stats = habit_stats(habit, today=today)

        assert isinstance(stats, HabitStats)
        assert stats.name == "Exercise"
        assert stats.current_streak == 7
        assert stats.longest_streak == 7
        assert stats.weekly_rate == 100.0
        assert stats.monthly_rate == pytest.approx(7 / 30 * 100)
        assert stats.yearly_rate == pytest.approx(7 / 365 * 100)
        assert stats.total_completions == 8

    def test_empty_habit(self, habit_factory, today):
        stats = habit_stats(habit_factory("Nothing"), today=today)
        assert (stats.current_streak, stats.longest_streak) == (0, 0)
        assert stats.weekly_rate == stats.monthly_rate == stats.yearly_rate == 0.0

    def test_does_not_mutate_habit(self, habit_factory, today):
        dates = ["2024-03-12", "2024-03-10", "2024-03-12"]
        habit = habit_factory("Unsorted", dates)
        habit_stats(habit, today=today)
        assert habit.dates_tracked == dates


class TestAggregateStats:
    def test_sorted_by_current_streak_descending(self, habit_factory, today, days_ending):
        short = habit_factory("Short", days_ending(today, 2))
        long = habit_factory("Long", days_ending(today, 5))

        result = aggregate_stats([short, long], today=today)

        assert [s.name for s in result] == ["Long", "Short"]
        assert [s.current_streak for s in result] == [5, 2]

    def test_ties_keep_input_order(self, habit_factory, today, days_ending):
        habits = [
            habit_factory("B", days_ending(today, 3)),
            habit_factory("A", days_ending(today, 3)),
            habit_factory("Z", []),
            habit_factory("C", days_ending(today, 3)),
            habit_factory("Y", []),
        ]
        result = aggregate_stats(habits, today=today)
        assert [s.name for s in result] == ["B", "A", "C", "Z", "Y"]

    def test_empty_input(self, today):
        assert aggregate_stats([], today=today) == []

    def test_fixture_habits(self, habit_data, today):
        names = [s.name for s in aggregate_stats(habit_data.habits, today=today)]
        assert names == ["Exercise", "Reading", "Meditation"]

    def test_accepts_generator(self, today):
        habits = (Habit(name=str(i), dates_tracked=[(today - timedelta(days=i)).isoformat()]) for i in range(3))
        result = aggregate_stats(habits, today=today)
        assert [s.name for s in result] == ["0", "1", "2"]
        assert [s.current_streak for s in result] == [1, 1, 0]


class TestDayCounts:
    """Completed-day counts travel with the rates they come from."""

    def test_counts_match_windows(self, habit_factory, today, days_ending):
        habit = habit_factory("Reading", days_ending(today, 3) + days_ending(today - timedelta(days=20), 8))
        stats = habit_stats(habit, today=today)

        assert (stats.weekly_days, stats.monthly_days, stats.yearly_days) == (3, 11, 11)
        assert stats.weekly_rate == 3 / 7 * 100
        assert stats.monthly_rate == 11 / 30 * 100

    def test_counts_ignore_days_outside_window(self, habit_factory, today):
        habit = habit_factory("Old", ["2020-01-01", (today + timedelta(days=1)).isoformat()])
        stats = habit_stats(habit, today=today)
        assert (stats.weekly_days, stats.monthly_days, stats.yearly_days) == (0, 0, 0)
        assert stats.total_completions == 2

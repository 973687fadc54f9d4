"""Tests for terminal rendering helpers."""

from __future__ import annotations

from datetime import date, timedelta

import click
import pytest

from habitgrid.services.grid import GridDay, ViewMode, build_grid
from habitgrid.services.stats import HabitStats
from habitgrid.terminal import render
from habitgrid.terminal.display import DisplayConfig


def _stats(name: str = "Exercise", **overrides) -> HabitStats:
    values = dict(
        name=name,
        current_streak=3,
        longest_streak=10,
        weekly_rate=3 / 7 * 100,
        monthly_rate=11 / 30 * 100,
        yearly_rate=200 / 365 * 100,
        total_completions=200,
        weekly_days=3,
        monthly_days=11,
        yearly_days=200,
    )
    values.update(overrides)
    return HabitStats(**values)


class TestCells:
    def test_plain_glyphs(self, plain_display):
        assert render.done_cell(plain_display) == "##"
        assert render.empty_cell(plain_display) == "--"
        assert [render.level_cell(plain_display, n) for n in range(5)] == ["--", "1 ", "2 ", "3+", "3+"]

    def test_colored_cells_use_background_styles(self):
        display = DisplayConfig(use_color=True)
        assert render.done_cell(display) == click.style("  ", bg=display.done_bg)
        assert render.level_cell(display, 7) == click.style("  ", bg=display.level_backgrounds[2])

    def test_future_cell_has_no_escape_sequences(self):
        day = GridDay(day=date(2030, 1, 1), in_future=True, done=True)
        assert render.render_cell(day, ViewMode.SINGLE, DisplayConfig(use_color=True)) == render.FUTURE_CELL

    def test_emphasize_respects_color(self, plain_display):
        assert render.emphasize("x", plain_display, bold=True) == "x"
        assert render.emphasize("x", DisplayConfig(), bold=True) == click.style("x", bold=True)


class TestLayout:
    @pytest.mark.parametrize("width, expected", [(80, 26), (3, 1), (2, 10), (0, 10)])
    def test_columns_for_width(self, width, expected):
        assert render.columns_for_width(width) == expected

    def test_grid_rows_wrap(self, today):
        days = build_grid(today, 5, ViewMode.SINGLE, [], today=today)
        rows = render.grid_rows(days, 26)
        assert [len(row) for row in rows] == [26, 9]
        assert [day for row in rows for day in row] == days

    def test_grid_rows_zero_columns_falls_back(self, today):
        days = build_grid(today, 2, ViewMode.SINGLE, [], today=today)
        assert [len(row) for row in render.grid_rows(days, 0)] == [10, 4]


class TestRenderGrid:
    def test_empty_grid(self, plain_display):
        assert render.render_grid([], ViewMode.SINGLE, plain_display) == ["No tracking data found."]

    def test_single_week(self, today):
        start = today - timedelta(days=3)
        dates = [start.isoformat(), today.isoformat()]
        days = build_grid(start, 1, ViewMode.SINGLE, dates, today=today)

        lines = render.render_grid(days, "single", DisplayConfig.plain(width=80))

        assert lines == [
            "",
            "## -- -- ## ·· ·· ·· ",
            "",
            "",
            "Legend: -- Not Done    ## Done",
        ]

    def test_aggregate_legend(self, plain_display, today):
        days = build_grid(today, 1, ViewMode.AGGREGATE, {today: 2}, today=today)
        lines = render.render_grid(days, ViewMode.AGGREGATE, plain_display)
        assert lines[1].startswith("2  ··")
        assert lines[-1] == "Legend: -- None    1  1 habit    2  2 habits    3+ 3+ habits"

    def test_narrow_terminal_wraps(self, today):
        days = build_grid(today, 1, ViewMode.SINGLE, [], today=today)
        lines = render.render_grid(days, ViewMode.SINGLE, DisplayConfig.plain(width=9))
        rows = [line for line in lines[:-1] if line]
        assert len(rows) == 3


class TestDaySummary:
    def test_lists_each_habit(self, plain_display, today):
        lines = render.render_day_summary([("A", True), ("B", False)], plain_display, today=today)
        assert lines == [
            "Today: 2024-03-13",
            "",
            "  ## A",
            "",
            "  -- B",
            "",
            "Legend: -- Not Done    ## Done",
        ]


class TestStats:
    def test_table_header_and_rule(self):
        header, rule = render.stats_table_header()
        assert header.split() == ["HABIT", "STREAK", "LONGEST", "WEEK", "MONTH", "YEAR"]
        assert rule == "  " + "─" * 85

    def test_table_row(self):
        row = render.stats_table_row(_stats())
        assert row.startswith("  Exercise ")
        assert "3/7 days" in row
        assert "11/30 days" in row
        assert "200/365 days" in row
        assert row.split()[1:3] == ["3", "10"]

    def test_long_names_are_truncated(self):
        row = render.stats_table_row(_stats("A habit with a very long descriptive name"))
        assert "A habit with a very..." in row
        assert "descriptive" not in row

    def test_habit_stats_block(self, plain_display):
        lines = render.render_habit_stats(_stats(), plain_display)
        assert lines == [
            "  Current Streak: 3 day(s)",
            "  Longest Streak: 10 day(s)",
            "  Total Completions: 200 time(s)",
            "  Completion Rate:",
            "    • Last 7 days: 42.9% (3 of 7 days)",
            "    • Last 30 days: 36.7% (11 of 30 days)",
            "    • Last 365 days: 54.8% (200 of 365 days)",
        ]

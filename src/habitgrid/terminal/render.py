"""Text rendering for grids, legends and statistics.

Every helper returns lines; the CLI decides where they are echoed.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

import click

from ..services.grid import GridDay, ViewMode
from ..services.stats import MONTH_WINDOW, WEEK_WINDOW, YEAR_WINDOW, HabitStats
from .display import DisplayConfig

CELL_WIDTH = 3  # two-character square plus one space
FALLBACK_COLUMNS = 10
FUTURE_CELL = "··"
NAME_WIDTH = 22

# Glyphs used when escape sequences are disabled.
_PLAIN_DONE = "##"
_PLAIN_EMPTY = "--"
_PLAIN_LEVELS = ("1 ", "2 ", "3+")


def emphasize(text: str, display: DisplayConfig, **styles) -> str:
    """Apply click styles (bold, italic, fg...) only when color is enabled."""

    if not display.use_color:
        return text
    return click.style(text, **styles)


def _square(display: DisplayConfig, bg: int, plain: str) -> str:
    if not display.use_color:
        return plain
    return click.style("  ", bg=bg)


def done_cell(display: DisplayConfig) -> str:
    return _square(display, display.done_bg, _PLAIN_DONE)


def empty_cell(display: DisplayConfig) -> str:
    return _square(display, display.empty_bg, _PLAIN_EMPTY)


def level_cell(display: DisplayConfig, count: int) -> str:
    """Shade a day by how many habits were completed (0, 1, 2, 3+)."""

    if count <= 0:
        return empty_cell(display)
    level = min(count, 3) - 1
    return _square(display, display.level_backgrounds[level], _PLAIN_LEVELS[level])


def columns_for_width(width: int) -> int:
    columns = width // CELL_WIDTH
    return columns if columns > 0 else FALLBACK_COLUMNS


def grid_rows(days: Sequence[GridDay], columns: int) -> list[list[GridDay]]:
    """Reshape the flat grid into rows of at most ``columns`` cells."""

    columns = columns if columns > 0 else FALLBACK_COLUMNS
    return [list(days[i : i + columns]) for i in range(0, len(days), columns)]


def render_cell(day: GridDay, mode: ViewMode, display: DisplayConfig) -> str:
    if day.in_future:
        return FUTURE_CELL
    if mode is ViewMode.SINGLE:
        return done_cell(display) if day.done else empty_cell(display)
    return level_cell(display, day.completed_count)


def render_legend(mode: ViewMode, display: DisplayConfig) -> str:
    if mode is ViewMode.SINGLE:
        return f"Legend: {empty_cell(display)} Not Done    {done_cell(display)} Done"
    return (
        f"Legend: {empty_cell(display)} None    "
        f"{level_cell(display, 1)} 1 habit    "
        f"{level_cell(display, 2)} 2 habits    "
        f"{level_cell(display, 3)} 3+ habits"
    )


def render_grid(days: Sequence[GridDay], mode: ViewMode | str, display: DisplayConfig) -> list[str]:
    """Render grid rows separated by blank lines, followed by the legend."""

    if not days:
        return ["No tracking data found."]

    mode = ViewMode(mode)
    lines: list[str] = [""]
    for row in grid_rows(days, columns_for_width(display.width)):
        lines.append(" ".join(render_cell(day, mode, display) for day in row) + " ")
        lines.append("")
    lines.append("")
    lines.append(render_legend(mode, display))
    return lines


def render_day_summary(
    summary: Iterable[tuple[str, bool]], display: DisplayConfig, *, today: date
) -> list[str]:
    """Today's done/not-done list used by the ``day`` range."""

    lines = [f"Today: {today.isoformat()}", ""]
    entries = list(summary)
    for position, (name, done) in enumerate(entries):
        cell = done_cell(display) if done else empty_cell(display)
        lines.append(f"  {cell} {name}")
        if position < len(entries) - 1:
            lines.append("")
    lines.append("")
    lines.append(render_legend(ViewMode.SINGLE, display))
    return lines


def _truncate(name: str) -> str:
    if len(name) > NAME_WIDTH:
        return name[: NAME_WIDTH - 3] + "..."
    return name


def stats_table_header() -> list[str]:
    return [
        f"  {'HABIT':<25} {'STREAK':>10} {'LONGEST':>10} {'WEEK':>12} {'MONTH':>12} {'YEAR':>12}",
        "  " + "─" * 85,
    ]


def stats_table_row(stats: HabitStats) -> str:
    week = f"{stats.weekly_days}/{WEEK_WINDOW} days"
    month = f"{stats.monthly_days}/{MONTH_WINDOW} days"
    year = f"{stats.yearly_days}/{YEAR_WINDOW} days"
    return (
        f"  {_truncate(stats.name):<25} {stats.current_streak:>10} {stats.longest_streak:>10} "
        f"{week:>12} {month:>12} {year:>12}"
    )


def render_habit_stats(stats: HabitStats, display: DisplayConfig) -> list[str]:
    """Detailed statistics block for a single habit."""

    def label(text: str) -> str:
        return emphasize(text, display, bold=True)

    def rate_line(title: str, rate: float, hits: int, window: int) -> str:
        return f"    • {title}: {rate:.1f}% ({hits} of {window} days)"

    return [
        f"  {label('Current Streak:')} {stats.current_streak} day(s)",
        f"  {label('Longest Streak:')} {stats.longest_streak} day(s)",
        f"  {label('Total Completions:')} {stats.total_completions} time(s)",
        f"  {label('Completion Rate:')}",
        rate_line("Last 7 days", stats.weekly_rate, stats.weekly_days, WEEK_WINDOW),
        rate_line("Last 30 days", stats.monthly_rate, stats.monthly_days, MONTH_WINDOW),
        rate_line("Last 365 days", stats.yearly_rate, stats.yearly_days, YEAR_WINDOW),
    ]

"""Command-line interface for the habits tracker."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence, TypeVar

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .logging_config import get_logger, setup_logging
from .models.habit import Habit, HabitData
from .services import catalog
from .services.dates import format_date
from .services.grid import ViewMode, ViewRange, build_range_grid, daily_counts, day_summary
from .services.habits import current_streak
from .services.stats import aggregate_stats, habit_stats
from .terminal import render

PAGE_SIZE = 10

T = TypeVar("T")

logger = get_logger(__name__)

pass_app = click.make_pass_decorator(AppContext)


def _echo(app: AppContext, message: str = "") -> None:
    click.echo(message, color=True if app.display.force_color else None)


def _echo_lines(app: AppContext, lines: Sequence[str]) -> None:
    for line in lines:
        _echo(app, line)


def _title(app: AppContext, text: str) -> str:
    return render.emphasize(text, app.display, bold=True)


def _load(app: AppContext) -> HabitData:
    try:
        return app.habit_repo.load()
    except (OSError, ValueError) as exc:
        logger.error("Could not load habits", extra={"path": str(app.config.DATA_FILE)})
        raise click.ClickException(
            f"Error loading data file ({app.config.DATA_FILE}): {exc}\n"
            "There might be an issue with the file format or permissions."
        ) from exc


def _save(app: AppContext, data: HabitData) -> None:
    try:
        app.habit_repo.save(data)
    except OSError as exc:
        logger.error("Could not save habits", extra={"path": str(app.config.DATA_FILE)})
        raise click.ClickException(f"Error saving data: {exc}") from exc


def _require(data: HabitData, identifier: str) -> tuple[Habit, int]:
    try:
        return catalog.require_habit(data, identifier)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def _date_arg(app: AppContext, raw: Optional[str]):
    try:
        return catalog.parse_date_arg(raw, today=app.today)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def _page_through(
    app: AppContext,
    items: Sequence[T],
    render_page: Callable[[Sequence[T], int], list[str]],
    *,
    on_new_page: Optional[Callable[[], None]] = None,
) -> None:
    """Show ``items`` PAGE_SIZE at a time, waiting for Enter between pages."""

    pages = [items[i : i + PAGE_SIZE] for i in range(0, len(items), PAGE_SIZE)] or [items]
    for number, chunk in enumerate(pages):
        _echo_lines(app, render_page(chunk, number * PAGE_SIZE))
        if len(pages) == 1:
            return
        _echo(app, "")
        _echo(app, _title(app, f"Page {number + 1} of {len(pages)}"))
        if number < len(pages) - 1:
            click.pause(info="")
            click.clear()
            if on_new_page:
                on_new_page()


def _show_grid(
    app: AppContext,
    data: HabitData,
    view_range: ViewRange,
    *,
    habit: Optional[Habit] = None,
) -> None:
    if view_range is ViewRange.DAY:
        summary = day_summary(data.habits, habit=habit, today=app.today)
        _echo_lines(app, render.render_day_summary(summary, app.display, today=app.today))
        return

    days = build_range_grid(view_range, data.habits, habit=habit, today=app.today)
    mode = ViewMode.SINGLE if habit is not None else ViewMode.AGGREGATE
    _echo_lines(app, render.render_grid(days, mode, app.display))


def _show_aggregate(app: AppContext, data: HabitData, view_range: ViewRange) -> None:
    if not data.habits:
        _echo(app, "No habits to view.")
        return

    click.clear()
    _echo(app, _title(app, "Tracker"))
    _echo(app, "")
    if view_range is not ViewRange.DAY:
        completed_today = daily_counts(data.habits).get(app.today, 0)
        _echo(
            app,
            f"Today is {format_date(app.today)} - Completed: "
            f"{completed_today}/{len(data.habits)} habits",
        )
        _echo(app, "")
    _show_grid(app, data, view_range)


def _show_reminders(app: AppContext, data: HabitData) -> None:
    due = catalog.habits_due_today(data, today=app.today)
    if not due:
        return
    _echo(app, "Habits due today:")
    for _, habit in due:
        _echo(app, f"  • {habit.name}")
    _echo(app, "")


class _TodayType(click.ParamType):
    name = "date"

    def convert(self, value, param, ctx):
        if not isinstance(value, str):
            return value
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            self.fail(f"{value!r} is not a valid YYYY-MM-DD date.", param, ctx)


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file holding your habits (defaults to HABITS_DATA_FILE or ~/.habits_tracker.json).",
)
@click.option("--today", type=_TodayType(), default=None, hidden=True)
@click.pass_context
def cli(ctx: click.Context, data_file: Optional[Path], today) -> None:
    """Track daily habits, streaks and completion heat-maps."""

    try:
        config = BaseConfig(data_file)
        setup_logging(config)
    except (OSError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    app = create_app_context(config, today=today)
    ctx.obj = app

    if ctx.invoked_subcommand is not None:
        return

    if not app.habit_repo.exists():
        _echo(app, "No data file found. Creating an empty one.")
        _save(app, HabitData())
        return

    data = _load(app)
    _show_reminders(app, data)
    _show_aggregate(app, data, ViewRange.LAST30)
    _echo(app, "")
    _echo(app, "Use 'habits help' for more information.")


@cli.command("add")
@click.argument("name", nargs=-1)
@click.option("--short", "-s", "short_name", default="", help="Optional short name for the habit.")
@pass_app
def add_command(app: AppContext, name: tuple[str, ...], short_name: str) -> None:
    """Add a new habit."""

    data = _load(app)
    habit_name = " ".join(name).strip()
    if not habit_name:
        raise click.ClickException('No habit name provided.\nUsage: habits add "Habit Name"')
    try:
        catalog.add_habit(data, habit_name, short_name)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    _save(app, data)
    _echo(app, f"Habit added: '{habit_name}'")


@cli.command("list")
@pass_app
def list_command(app: AppContext) -> None:
    """List all habits with index and short name."""

    data = _load(app)
    if not data.habits:
        _echo(app, "No habits found. Add one using 'habits add \"My Habit\"'")
        return

    def header() -> None:
        _echo(app, _title(app, "Your Habits"))
        _echo(app, "")

    def page(chunk: Sequence[Habit], offset: int) -> list[str]:
        lines = []
        for position, habit in enumerate(chunk, start=offset + 1):
            number = render.emphasize(f"{position}.", app.display, bold=True)
            short = render.emphasize(habit.short_name, app.display, italic=True)
            lines.append(f"  {number} {habit.name} ({short})")
        return lines

    header()
    _page_through(app, data.habits, page, on_new_page=header)


@cli.command("done")
@click.argument("identifier")
@click.option("--date", "-d", "date_value", default=None, help="Date (YYYY-MM-DD). Defaults to today.")
@pass_app
def done_command(app: AppContext, identifier: str, date_value: Optional[str]) -> None:
    """Mark a habit as done for today or a given date."""

    data = _load(app)
    habit, _ = _require(data, identifier)
    day = _date_arg(app, date_value)
    if not catalog.mark_done(habit, day):
        _echo(app, f"'{habit.name}' was already marked as done for {format_date(day)}.")
        return

    _save(app, data)
    _echo(app, f"Marked '{habit.name}' as done for {format_date(day)}!")
    streak = current_streak(habit.dates_tracked, today=app.today)
    if streak > 1:
        _echo(app, f"Current streak: {streak} days!")


@cli.command("remove")
@click.argument("identifier")
@click.option("--date", "-d", "date_value", default=None, help="Date (YYYY-MM-DD). Defaults to today.")
@pass_app
def remove_command(app: AppContext, identifier: str, date_value: Optional[str]) -> None:
    """Remove a completion for today or a given date."""

    data = _load(app)
    habit, _ = _require(data, identifier)
    day = _date_arg(app, date_value)
    if not catalog.remove_completion(habit, day):
        _echo(app, f"'{habit.name}' was not marked as done for {format_date(day)}.")
        return

    _save(app, data)
    _echo(app, f"Removed completion for '{habit.name}' on {format_date(day)}.")


@cli.command("undone")
@pass_app
def undone_command(app: AppContext) -> None:
    """List all habits not completed today."""

    data = _load(app)
    if not data.habits:
        _echo(app, "No habits to track.")
        return

    due = catalog.habits_due_today(data, today=app.today)
    if not due:
        _echo(app, "All habits completed for today!")
        return

    _echo(app, "Habits not yet completed today:")
    for position, habit in due:
        _echo(app, f"  {render.emphasize(f'{position}.', app.display, bold=True)} {habit.name}")


@cli.command("tracker")
@click.argument("identifier", required=False)
@click.option(
    "--range",
    "-r",
    "view_range",
    type=click.Choice([r.value for r in ViewRange]),
    default=ViewRange.LAST30.value,
    show_default=True,
    help="View range.",
)
@pass_app
def tracker_command(app: AppContext, identifier: Optional[str], view_range: str) -> None:
    """View the habit tracker (aggregate when no habit is given)."""

    data = _load(app)
    selected = ViewRange(view_range)
    if not identifier:
        _show_aggregate(app, data, selected)
        return

    habit, _ = _require(data, identifier)
    click.clear()
    italic_short = render.emphasize(habit.short_name, app.display, italic=True)
    _echo(app, f"{_title(app, f'Tracker: {habit.name}')} ({italic_short})")
    _echo(app, "")
    _show_grid(app, data, selected, habit=habit)


@cli.command("stats")
@click.argument("identifier", nargs=-1)
@pass_app
def stats_command(app: AppContext, identifier: tuple[str, ...]) -> None:
    """Show statistics (all habits when no habit is given)."""

    data = _load(app)
    if identifier:
        habit, _ = _require(data, " ".join(identifier))
        _echo(app, _title(app, f"Statistics for '{habit.name}'"))
        _echo(app, "")
        _echo_lines(app, render.render_habit_stats(habit_stats(habit, today=app.today), app.display))
        _echo(app, "")
        _echo(app, "")
        _echo(app, _title(app, f"Tracker: {habit.name}"))
        _echo(app, "")
        _show_grid(app, data, ViewRange.LAST30, habit=habit)
        return

    _echo(app, _title(app, "Habit Statistics"))
    if not data.habits:
        _echo(app, "")
        _echo(app, "No habits found. Add one using 'habits add \"My Habit\"'")
        return

    def header() -> None:
        _echo(app, "")
        _echo(app, f"  {_title(app, 'Habit Summary:')}")
        _echo(app, "")

    def page(chunk, _offset: int) -> list[str]:
        return render.stats_table_header() + [render.stats_table_row(s) for s in chunk]

    header()
    _page_through(
        app,
        aggregate_stats(data.habits, today=app.today),
        page,
        on_new_page=lambda: (_echo(app, _title(app, "Habit Statistics")), header()),
    )
    _echo(app, "")
    _echo(app, "Use 'habits tracker' to see the aggregate habit view.")


@cli.command("edit")
@click.argument("identifier", nargs=-1, required=True)
@click.option("--name", "-n", "new_name", default="", help="New name for the habit.")
@click.option("--short", "-s", "new_short", default="", help="New short name for the habit.")
@pass_app
def edit_command(app: AppContext, identifier: tuple[str, ...], new_name: str, new_short: str) -> None:
    """Change a habit's name or short name."""

    if not new_name and not new_short:
        raise click.ClickException("Specify at least one change (--name/--short or -n/-s).")

    data = _load(app)
    habit, index = _require(data, " ".join(identifier))
    messages = []
    try:
        if new_name:
            old_name = catalog.rename_habit(data, index, new_name)
            messages.append(f"Habit name changed from '{old_name}' to '{habit.name}'")
        if new_short:
            old_short = catalog.set_short_name(data, index, new_short)
            messages.append(f"Habit short name changed from '{old_short}' to '{new_short}'")
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    _save(app, data)
    _echo_lines(app, messages)


@cli.command("delete")
@click.argument("identifier", nargs=-1, required=True)
@pass_app
def delete_command(app: AppContext, identifier: tuple[str, ...]) -> None:
    """Delete a habit (asks for confirmation)."""

    data = _load(app)
    habit, index = _require(data, " ".join(identifier))
    if not click.confirm(f"Are you sure you want to delete habit '{habit.name}'?", default=False):
        _echo(app, "Deletion canceled.")
        return

    catalog.delete_habit(data, index)
    _save(app, data)
    _echo(app, f"Habit '{habit.name}' deleted.")


@cli.command("export")
@click.option(
    "--file",
    "-f",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file path (defaults to habits_export_<date>.json).",
)
@pass_app
def export_command(app: AppContext, output_file: Optional[Path]) -> None:
    """Export habits data to a file."""

    data = _load(app)
    if not data.habits:
        _echo(app, "No habits to export.")
        return

    target = output_file or Path(f"habits_export_{format_date(app.today)}.json")
    try:
        path = app.habit_repo.export_to(target, data)
    except OSError as exc:
        raise click.ClickException(f"Error creating export file: {exc}") from exc
    _echo(app, f"Data exported to {path}")


@cli.command("import")
@click.option(
    "--file",
    "-f",
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Input file path.",
)
@click.option("--merge", "-m", is_flag=True, default=False, help="Merge with existing habits instead of replacing.")
@pass_app
def import_command(app: AppContext, input_file: Path, merge: bool) -> None:
    """Import habits from a file."""

    data = _load(app)
    try:
        incoming = app.habit_repo.read_import(input_file)
    except (OSError, ValueError) as exc:
        raise click.ClickException(f"Error reading import file: {exc}") from exc

    count = catalog.import_habits(data, incoming, merge=merge)
    _save(app, data)
    if merge:
        _echo(app, f"Merged {count} new habit(s) from {input_file}")
    else:
        _echo(app, f"Imported {count} habits from {input_file}")


EXAMPLES = (
    ('habits add "Morning Exercise"', "Add a new habit to track."),
    ("habits done 1", "Mark habit #1 as done for today."),
    ("habits tracker 2 -r month", "View month tracker for habit #2."),
    ("habits stats", "Show statistics for all habits."),
    ("habits export -f backup.json", "Export your habit data."),
)


@cli.command("help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Show this help message."""

    app: AppContext = ctx.obj
    parent = ctx.parent or ctx
    _echo(app, parent.get_help())
    _echo(app, "")
    _echo(app, _title(app, "Examples:"))
    for command, description in EXAMPLES:
        accent = render.emphasize(f"{command:<30}", app.display, fg="cyan")
        _echo(app, f"  {accent} {description}")


def main() -> None:
    cli(prog_name="habits")


if __name__ == "__main__":  # pragma: no cover
    main()

"""Daybook CLI - goals, affirmations and gratitude journal."""

import asyncio
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

import click

from . import stats
from .adapters.sqlite_store import SqliteEntryStore
from .config import load_config
from .core.entry import Goal, JournalEntry
from .ports.entry_store import StoreError
from .session import JournalSession

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def _day(value: datetime | None) -> date:
    return value.date() if value else date.today()


def _store(ctx: click.Context) -> SqliteEntryStore:
    try:
        return SqliteEntryStore(ctx.obj["db_path"])
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _run(coro):
    """Run a coroutine, turning storage failures into a CLI error."""
    try:
        return asyncio.run(coro)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
@click.version_option(package_name="daybook")
@click.option("--db", "db_path", type=click.Path(path_type=Path), help="Database file")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, db_path: Path | None, debug: bool):
    """Daybook - daily goals, affirmations and gratitude."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level),
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["db_path"] = db_path or config.db_path


# ============== Entries ==============


@main.command()
@click.option("--date", "day", type=DATE_TYPE, help="Entry date (default: today)")
@click.option("--goal", "goals", multiple=True, help="A goal (repeatable)")
@click.option("--completed", "completed", multiple=True, type=int, help="1-based goal number that is done")
@click.option("--affirmation", "affirmations", multiple=True, help="An affirmation (repeatable)")
@click.option("--gratitude", "gratitude", multiple=True, help="Something you're grateful for (repeatable)")
@click.pass_context
def write(ctx, day, goals, completed, affirmations, gratitude):
    """Write or update an entry."""
    target = _day(day)

    async def run() -> bool:
        session = JournalSession(_store(ctx), target)
        entry = await session.load()
        if entry is None:
            raise StoreError(session.error or "could not load entry")
        if goals:
            session.update_goals(
                [Goal(text, i + 1 in completed) for i, text in enumerate(goals)]
            )
        elif completed:
            session.update_goals(
                [Goal(g.text, g.completed or i + 1 in completed) for i, g in enumerate(entry.goals)]
            )
        if affirmations:
            session.update_affirmations(list(affirmations))
        if gratitude:
            session.update_gratitude(list(gratitude))
        if await session.save():
            return True
        if session.error:
            raise StoreError(session.error)
        return False

    if _run(run()):
        click.echo(f"Saved entry for {target.isoformat()}.")
    else:
        click.echo("Nothing to save.")


@main.command()
@click.argument("index", type=int)
@click.option("--date", "day", type=DATE_TYPE, help="Entry date (default: today)")
@click.pass_context
def done(ctx, index: int, day):
    """Toggle goal INDEX (1-based) as done/not done."""
    target = _day(day)

    async def run() -> Goal:
        session = JournalSession(_store(ctx), target)
        await session.load()
        session.toggle_goal(index - 1)
        if not await session.save():
            raise StoreError(session.error or "could not save entry")
        return session.current_entry.goals[index - 1]

    try:
        goal = _run(run())
    except IndexError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    mark = "x" if goal.completed else " "
    click.echo(f"[{mark}] {goal.text}")


def _show_entry(entry: JournalEntry) -> None:
    click.echo(f"### {entry.date.strftime('%A, %B %d, %Y')}")
    click.echo("\nGoals:")
    for goal in entry.goals:
        mark = "x" if goal.completed else " "
        click.echo(f"  [{mark}] {goal.text}")
    click.echo("\nAffirmations:")
    for item in entry.affirmations:
        click.echo(f"  • {item}")
    click.echo("\nGratitude:")
    for item in entry.gratitude:
        click.echo(f"  • {item}")


@main.command()
@click.option("--date", "day", type=DATE_TYPE, help="Entry date (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx, day, as_json: bool):
    """Show one day's entry."""
    target = _day(day)
    entry = _run(_store(ctx).get_entry(target))

    if entry is None:
        if as_json:
            _echo_json(None)
        else:
            click.echo(f"No entry for {target.isoformat()}.")
        return

    if as_json:
        _echo_json(entry.to_dict())
    else:
        _show_entry(entry)


@main.command("list")
@click.option("--limit", type=int, default=None, help="Maximum entries to list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_entries(ctx, limit: int | None, as_json: bool):
    """List recent entries, newest first."""
    if limit is None:
        limit = ctx.obj["config"].recent_entries_limit
    entries = _run(_store(ctx).get_all_entries(limit))

    if as_json:
        _echo_json([e.to_dict() for e in entries])
        return

    if not entries:
        click.echo("No entries yet.")
        return

    for entry in entries:
        click.echo(f"{entry.date.isoformat()}  {entry.goals_completed_count}/{entry.goals_set_count} goals")


@main.command()
@click.option("--date", "day", type=DATE_TYPE, help="Entry date (default: today)")
@click.pass_context
def delete(ctx, day):
    """Delete one day's entry."""
    target = _day(day)
    if _run(_store(ctx).delete_entry(target)):
        click.echo(f"Deleted entry for {target.isoformat()}.")
    else:
        click.echo(f"No entry for {target.isoformat()}.")


# ============== Statistics ==============


PERIODS = {
    "week": stats.weekly_stats,
    "month": stats.monthly_stats,
    "year": stats.yearly_stats,
}


@main.command("stats")
@click.argument("period", type=click.Choice(list(PERIODS)), default="week")
@click.option("--date", "day", type=DATE_TYPE, help="Any date in the period (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats_command(ctx, period: str, day, as_json: bool):
    """Show weekly, monthly or yearly stats."""
    result = _run(PERIODS[period](_store(ctx), _day(day)))

    if as_json:
        _echo_json(result.to_dict())
        return

    click.echo(f"Entries:          {result.total_entries}")
    click.echo(f"Goals completed:  {result.total_goals_completed}/{result.total_goals_set}")
    click.echo(f"Completion rate:  {result.pooled_completion_rate}%")
    if result.streak is not None:
        click.echo(f"Current streak:   {result.streak} days")
    if result.average_goals_per_day is not None:
        click.echo(f"Goals per day:    {result.average_goals_per_day}")
    for month in result.monthly_breakdown or []:
        click.echo(
            f"  {month.month_name:10} {month.total_entries:3} entries  {month.completion_rate:3}%"
        )


@main.command()
@click.option("--date", "day", type=DATE_TYPE, help="Anchor date (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def streak(ctx, day, as_json: bool):
    """Show current and longest streaks."""
    store = _store(ctx)

    async def run() -> list[int]:
        return await asyncio.gather(
            stats.current_streak(store, _day(day)),
            stats.longest_streak(store),
        )

    current, longest = _run(run())

    if as_json:
        _echo_json({"current": current, "longest": longest})
    else:
        click.echo(f"Current streak: {current} days")
        click.echo(f"Longest streak: {longest} days")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def sections(ctx, as_json: bool):
    """Show how often each section is filled in."""
    result = _run(stats.section_completion_stats(_store(ctx)))

    if as_json:
        _echo_json(result.to_dict())
        return

    click.echo(f"Entries: {result.total_entries}")
    for name in ("goals", "affirmations", "gratitude"):
        section = getattr(result, name)
        click.echo(f"  {name:13} {section.completed_entries:4}  {section.completion_rate:3}%")


def _show_trend(points) -> None:
    for point in points:
        bar = "█" * (point.completion_rate // 10) if point.has_entry else "·"
        click.echo(f"  {point.day_name} {point.date.isoformat()}  {point.completion_rate:3}%  {bar}")


@main.command()
@click.option("--date", "day", type=DATE_TYPE, help="Last day of the trend (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def trend(ctx, day, as_json: bool):
    """Show the last seven days."""
    points = _run(stats.trend_data(_store(ctx), _day(day)))

    if as_json:
        _echo_json([p.to_dict() for p in points])
    else:
        _show_trend(points)


@main.command()
@click.option("--date", "day", type=DATE_TYPE, help="Dashboard date (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def dashboard(ctx, day, as_json: bool):
    """Show the full stats dashboard."""
    result = _run(stats.dashboard_stats(_store(ctx), _day(day)))

    if as_json:
        _echo_json(result.to_dict())
        return

    current, overview, recent = result.current, result.overview, result.recent
    click.echo(f"Current streak:   {current.streak} days")
    click.echo(
        f"Completion:       week {current.weekly_completion_rate}%  "
        f"month {current.monthly_completion_rate}%  year {current.yearly_completion_rate}%"
    )
    click.echo(f"This week:        {recent.this_week.entries} entries, {recent.this_week.goals_completed} goals done")
    click.echo(f"This month:       {recent.this_month.entries} entries, {recent.this_month.goals_completed} goals done")
    click.echo(f"All time:         {overview.total_entries} entries, {overview.total_goals_completed} goals done")
    click.echo(f"Average per day:  {overview.average_per_entry_completion_rate}%")
    click.echo(f"Longest streak:   {overview.longest_streak} days")
    click.echo()
    _show_trend(result.trends)

"""Journal statistics.

Stateless async functions over an EntryStore. Each takes the store as its
first argument and only reads from it. Dates may be passed as date,
datetime or ISO strings; a value that cannot be read as a calendar date
gives the operation's empty result instead of an error.
"""

import asyncio
import logging
from datetime import date, timedelta

from .core.aggregates import (
    CurrentStats,
    DashboardStats,
    MonthSummary,
    OverallStats,
    PeriodSummary,
    RangeStats,
    RecentStats,
    SectionCompletionStats,
    TrendPoint,
    average_goals_per_day,
    section_completion,
    summarize_month,
    summarize_range,
    round_half_up,
    trend_point,
)
from .core.dates import day_name, month_bounds, normalize_date, week_bounds, year_bounds
from .core.entry import JournalEntry
from .core.streaks import MAX_CURRENT_STREAK, longest_run
from .ports.entry_store import EntryStore, StoreError

logger = logging.getLogger(__name__)

TREND_DAYS = 7

DateLike = date | str | None


def _anchor(value: DateLike, operation: str) -> date | None:
    """Normalize an anchor date, defaulting to today. Logs when unusable."""
    if value is None:
        return date.today()
    day = normalize_date(value)
    if day is None:
        logger.warning(f"{operation}: invalid date {value!r}, returning empty result")
    return day


# ============== Range aggregates ==============


async def entries_in_range(store: EntryStore, start: DateLike, end: DateLike) -> list[JournalEntry]:
    """Entries in [start, end], newest first. Empty on bad dates or storage errors."""
    safe_start = normalize_date(start)
    safe_end = normalize_date(end)
    if safe_start is None or safe_end is None:
        logger.warning(f"Invalid date range: {start!r} - {end!r}")
        return []

    try:
        return await store.get_entries_by_date_range(safe_start, safe_end)
    except StoreError as e:
        logger.error(f"Error getting entries in range: {e}")
        return []


async def range_stats(store: EntryStore, start: DateLike, end: DateLike) -> RangeStats:
    """Totals and pooled completion rate for an inclusive date range."""
    entries = await entries_in_range(store, start, end)
    return summarize_range(entries)


async def weekly_stats(store: EntryStore, day: DateLike = None) -> RangeStats:
    """Stats for the Monday-Sunday week containing day, plus the current streak."""
    anchor = _anchor(day, "weekly_stats")
    if anchor is None:
        return RangeStats(streak=0)

    start, end = week_bounds(anchor)
    stats = await range_stats(store, start, end)
    stats.streak = await current_streak(store, anchor)
    return stats


async def monthly_stats(store: EntryStore, day: DateLike = None) -> RangeStats:
    """Stats for the calendar month containing day."""
    anchor = _anchor(day, "monthly_stats")
    if anchor is None:
        return RangeStats(average_goals_per_day=0)

    start, end = month_bounds(anchor)
    entries = await entries_in_range(store, start, end)
    stats = summarize_range(entries)
    stats.average_goals_per_day = average_goals_per_day(entries)
    return stats


async def yearly_stats(store: EntryStore, day: DateLike = None) -> RangeStats:
    """Stats for the calendar year containing day, with a per-month breakdown."""
    anchor = _anchor(day, "yearly_stats")
    if anchor is None:
        return RangeStats(average_goals_per_day=0, monthly_breakdown=[])

    start, end = year_bounds(anchor)
    entries = await entries_in_range(store, start, end)
    stats = summarize_range(entries)
    stats.average_goals_per_day = average_goals_per_day(entries)
    stats.monthly_breakdown = await monthly_breakdown(store, anchor.year)
    return stats


async def monthly_breakdown(store: EntryStore, year: int) -> list[MonthSummary]:
    """Twelve month summaries for a year, each from its own range query."""
    breakdown = []
    for month in range(1, 13):
        start, end = month_bounds(date(year, month, 1))
        entries = await entries_in_range(store, start, end)
        breakdown.append(summarize_month(month, entries))
    return breakdown


# ============== Streaks ==============


async def current_streak(store: EntryStore, anchor: DateLike = None) -> int:
    """
    Consecutive days with an entry, walking back from anchor.

    Only existence counts, so an entry with no goals or one whose stored
    sections cannot be decoded still extends the streak. Capped at
    MAX_CURRENT_STREAK. Returns 0 for an invalid anchor or when storage
    fails.
    """
    day = _anchor(anchor, "current_streak")
    if day is None:
        return 0

    streak = 0
    try:
        while streak < MAX_CURRENT_STREAK:
            if not await store.entry_exists(day):
                break
            streak += 1
            day -= timedelta(days=1)
    except StoreError as e:
        logger.error(f"Error calculating streak: {e}")
        return 0

    return streak


async def longest_streak(store: EntryStore) -> int:
    """Longest run of consecutive days with entries, over all time."""
    try:
        dates = await store.get_all_entry_dates()
    except StoreError as e:
        logger.error(f"Error calculating longest streak: {e}")
        raise
    return longest_run(dates)


# ============== Sections and trends ==============


async def section_completion_stats(store: EntryStore) -> SectionCompletionStats:
    """Per-section fill rates across every entry. All zeros on storage errors."""
    try:
        entries = await store.get_all_entries(limit=None)
    except StoreError as e:
        logger.error(f"Error getting section completion stats: {e}")
        return SectionCompletionStats()
    return section_completion(entries)


async def trend_data(store: EntryStore, today: DateLike = None) -> list[TrendPoint]:
    """
    Seven daily points ending at today, oldest first.

    A stored entry that cannot be decoded shows as an entry with zero
    goals. Returns [] for an invalid anchor or when storage fails.
    """
    end = _anchor(today, "trend_data")
    if end is None:
        return []

    trends = []
    try:
        for i in range(TREND_DAYS - 1, -1, -1):
            day = end - timedelta(days=i)
            trends.append(await _trend_day(store, day))
    except StoreError as e:
        logger.error(f"Error getting trend data: {e}")
        return []

    return trends


async def _trend_day(store: EntryStore, day: date) -> TrendPoint:
    try:
        entry = await store.get_entry(day)
    except StoreError as e:
        if not await store.entry_exists(day):
            raise
        logger.warning(f"Unreadable entry for {day} in trend: {e}")
        return TrendPoint(date=day, day_name=day_name(day), has_entry=True)
    return trend_point(day, entry)


# ============== Overall and dashboard ==============


async def overall_stats(store: EntryStore) -> OverallStats:
    """Lifetime totals. All zeros when storage fails."""
    try:
        totals = await store.get_totals()
        longest = await longest_streak(store)
    except StoreError as e:
        logger.error(f"Error getting overall stats: {e}")
        return OverallStats()

    return OverallStats(
        total_entries=totals.total_entries,
        total_goals_completed=totals.total_goals_completed,
        average_per_entry_completion_rate=round_half_up(totals.average_per_entry_completion_rate),
        longest_streak=longest,
    )


async def dashboard_stats(store: EntryStore, today: DateLike = None) -> DashboardStats:
    """
    Compose the dashboard from independent aggregates run concurrently.

    Any failure not absorbed by a constituent propagates; no partial
    dashboard is returned.
    """
    today = today if today is not None else date.today()
    try:
        weekly, monthly, yearly, overall, trends = await asyncio.gather(
            weekly_stats(store, today),
            monthly_stats(store, today),
            yearly_stats(store, today),
            overall_stats(store),
            trend_data(store, today),
        )
    except StoreError as e:
        logger.error(f"Error getting dashboard stats: {e}")
        raise

    return DashboardStats(
        current=CurrentStats(
            streak=weekly.streak or 0,
            weekly_completion_rate=weekly.pooled_completion_rate,
            monthly_completion_rate=monthly.pooled_completion_rate,
            yearly_completion_rate=yearly.pooled_completion_rate,
        ),
        overview=overall,
        recent=RecentStats(
            this_week=PeriodSummary(
                entries=weekly.total_entries,
                goals_completed=weekly.total_goals_completed,
                completion_rate=weekly.pooled_completion_rate,
            ),
            this_month=PeriodSummary(
                entries=monthly.total_entries,
                goals_completed=monthly.total_goals_completed,
                completion_rate=monthly.pooled_completion_rate,
            ),
        ),
        trends=trends,
    )

"""Functional core - pure business logic with no I/O."""

from .entry import Goal, JournalEntry, EntryDecodeError, empty_entry, count_completed_goals
from .dates import normalize_date, week_bounds, month_bounds, year_bounds
from .aggregates import (
    DashboardStats,
    EntryTotals,
    MonthSummary,
    OverallStats,
    RangeStats,
    SectionCompletionStats,
    TrendPoint,
    summarize_range,
    section_completion,
)
from .streaks import MAX_CURRENT_STREAK, longest_run

__all__ = [
    # Entries
    "Goal",
    "JournalEntry",
    "EntryDecodeError",
    "empty_entry",
    "count_completed_goals",
    # Dates
    "normalize_date",
    "week_bounds",
    "month_bounds",
    "year_bounds",
    # Aggregates
    "DashboardStats",
    "EntryTotals",
    "MonthSummary",
    "OverallStats",
    "RangeStats",
    "SectionCompletionStats",
    "TrendPoint",
    "summarize_range",
    "section_completion",
    # Streaks
    "MAX_CURRENT_STREAK",
    "longest_run",
]

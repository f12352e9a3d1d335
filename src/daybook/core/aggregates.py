"""Pure statistics over journal entries - no I/O dependencies."""

import math
from dataclasses import asdict, dataclass, field
from datetime import date

from .dates import day_name, format_date, month_name
from .entry import JournalEntry, has_content, has_goal_text


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest integer, halves up."""
    return int(math.floor(value + 0.5))


def percent(part: int | float, whole: int | float) -> int:
    """Integer percentage, 0 when whole is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


@dataclass
class RangeStats:
    """Aggregates over the entries of an inclusive date range."""

    total_entries: int = 0
    total_goals_completed: int = 0
    total_goals_set: int = 0
    pooled_completion_rate: int = 0
    days_with_entries: int = 0
    streak: int | None = None
    average_goals_per_day: float | None = None
    monthly_breakdown: list["MonthSummary"] | None = None

    @property
    def completion_rate(self) -> int:
        return self.pooled_completion_rate

    def to_dict(self) -> dict:
        data = asdict(self)
        data["completion_rate"] = self.pooled_completion_rate
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class MonthSummary:
    """One month of a yearly breakdown."""

    month: int
    month_name: str
    total_entries: int = 0
    total_goals_completed: int = 0
    completion_rate: int = 0


@dataclass
class TrendPoint:
    """One day of the 7-day trend."""

    date: date
    day_name: str
    has_entry: bool = False
    goals_completed: int = 0
    completion_rate: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = format_date(self.date)
        return data


@dataclass
class SectionCompletion:
    completed_entries: int = 0
    completion_rate: int = 0


@dataclass
class SectionCompletionStats:
    """How often each section was filled in, across all entries."""

    goals: SectionCompletion = field(default_factory=SectionCompletion)
    affirmations: SectionCompletion = field(default_factory=SectionCompletion)
    gratitude: SectionCompletion = field(default_factory=SectionCompletion)
    total_entries: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class EntryTotals:
    """Full-table aggregate returned by the entry store."""

    total_entries: int = 0
    total_goals_completed: int = 0
    average_per_entry_completion_rate: float = 0.0


@dataclass
class OverallStats:
    """
    Lifetime totals.

    average_per_entry_completion_rate is the mean of each entry's own rate,
    not the pooled rate used by RangeStats.
    """

    total_entries: int = 0
    total_goals_completed: int = 0
    average_per_entry_completion_rate: int = 0
    longest_streak: int = 0


@dataclass
class CurrentStats:
    streak: int
    weekly_completion_rate: int
    monthly_completion_rate: int
    yearly_completion_rate: int


@dataclass
class PeriodSummary:
    entries: int
    goals_completed: int
    completion_rate: int


@dataclass
class RecentStats:
    this_week: PeriodSummary
    this_month: PeriodSummary


@dataclass
class DashboardStats:
    """Everything the stats dashboard shows, in one object."""

    current: CurrentStats
    overview: OverallStats
    recent: RecentStats
    trends: list[TrendPoint]

    def to_dict(self) -> dict:
        return {
            "current": asdict(self.current),
            "overview": asdict(self.overview),
            "recent": asdict(self.recent),
            "trends": [t.to_dict() for t in self.trends],
        }


# ============== Reductions ==============


def sum_goals_completed(entries: list[JournalEntry]) -> int:
    return sum(e.goals_completed_count for e in entries)


def sum_goals_set(entries: list[JournalEntry]) -> int:
    return sum(e.goals_set_count for e in entries)


def pooled_completion_rate(entries: list[JournalEntry]) -> int:
    """Completed goals over goals set, pooled across all entries."""
    return percent(sum_goals_completed(entries), sum_goals_set(entries))


def average_goals_per_day(entries: list[JournalEntry]) -> float:
    """Goals set per entry, one decimal place. 0 with no entries."""
    if not entries:
        return 0
    return round_half_up(sum_goals_set(entries) / len(entries) * 10) / 10


def summarize_range(entries: list[JournalEntry]) -> RangeStats:
    """
    Aggregate the entries of a date range.

    Pure function - no I/O. Entry order does not matter.
    """
    completed = sum_goals_completed(entries)
    goals_set = sum_goals_set(entries)
    return RangeStats(
        total_entries=len(entries),
        total_goals_completed=completed,
        total_goals_set=goals_set,
        pooled_completion_rate=percent(completed, goals_set),
        days_with_entries=len(entries),
    )


def summarize_month(month: int, entries: list[JournalEntry]) -> MonthSummary:
    return MonthSummary(
        month=month,
        month_name=month_name(month),
        total_entries=len(entries),
        total_goals_completed=sum_goals_completed(entries),
        completion_rate=pooled_completion_rate(entries),
    )


def entry_completion_rate(entry: JournalEntry) -> int:
    """A single entry's completion rate, 0 when it has no goals."""
    return percent(entry.goals_completed_count, entry.goals_set_count)


def trend_point(day: date, entry: JournalEntry | None) -> TrendPoint:
    if entry is None:
        return TrendPoint(date=day, day_name=day_name(day))
    return TrendPoint(
        date=day,
        day_name=day_name(day),
        has_entry=True,
        goals_completed=entry.goals_completed_count,
        completion_rate=entry_completion_rate(entry),
    )


def section_completion(entries: list[JournalEntry]) -> SectionCompletionStats:
    """
    Count entries where each section has at least one non-blank item.

    Pure function - no I/O.
    """
    total = len(entries)
    goals = sum(1 for e in entries if has_goal_text(e.goals))
    affirmations = sum(1 for e in entries if has_content(e.affirmations))
    gratitude = sum(1 for e in entries if has_content(e.gratitude))
    return SectionCompletionStats(
        goals=SectionCompletion(goals, percent(goals, total)),
        affirmations=SectionCompletion(affirmations, percent(affirmations, total)),
        gratitude=SectionCompletion(gratitude, percent(gratitude, total)),
        total_entries=total,
    )


def compute_totals(entries: list[JournalEntry]) -> EntryTotals:
    """Full-table totals for stores without a native aggregate query."""
    if not entries:
        return EntryTotals()
    rates = [
        e.goals_completed_count * 100.0 / e.goals_set_count if e.goals_set_count else 0.0
        for e in entries
    ]
    return EntryTotals(
        total_entries=len(entries),
        total_goals_completed=sum_goals_completed(entries),
        average_per_entry_completion_rate=sum(rates) / len(rates),
    )

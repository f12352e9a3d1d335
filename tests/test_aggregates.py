"""Tests for pure statistics reductions."""

from datetime import date

import pytest

from daybook.core.aggregates import (
    average_goals_per_day,
    compute_totals,
    entry_completion_rate,
    percent,
    pooled_completion_rate,
    round_half_up,
    section_completion,
    summarize_month,
    summarize_range,
    trend_point,
)
from daybook.core.entry import Goal, JournalEntry


@pytest.fixture
def day():
    return date(2024, 1, 1)


class TestRounding:
    @pytest.mark.parametrize(
        "value, expected", [(0.0, 0), (0.5, 1), (1.5, 2), (2.5, 3), (66.666, 67), (33.333, 33)]
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_percent_zero_whole(self):
        assert percent(5, 0) == 0

    def test_percent(self):
        assert percent(1, 3) == 33
        assert percent(2, 3) == 67
        assert percent(1, 8) == 13


class TestSummarizeRange:
    def test_empty(self):
        stats = summarize_range([])
        assert stats.total_entries == 0
        assert stats.total_goals_set == 0
        assert stats.pooled_completion_rate == 0
        assert stats.days_with_entries == 0

    def test_pooled_rate(self, entry_factory, day):
        entries = [entry_factory(day, done=3), entry_factory(date(2024, 1, 2), done=0, total=1)]
        stats = summarize_range(entries)

        assert stats.total_entries == 2
        assert stats.total_goals_completed == 3
        assert stats.total_goals_set == 4
        assert stats.pooled_completion_rate == 75
        assert stats.completion_rate == 75
        assert stats.days_with_entries == 2

    def test_uses_actual_goal_count(self, entry_factory, day):
        """Goals set is the stored list length, not a nominal three."""
        entries = [entry_factory(day, done=1, total=5)]
        stats = summarize_range(entries)

        assert stats.total_goals_set == 5
        assert stats.pooled_completion_rate == 20

    def test_entries_with_no_goals(self, entry_factory, day):
        stats = summarize_range([entry_factory(day, total=0)])
        assert stats.total_entries == 1
        assert stats.pooled_completion_rate == 0

    def test_to_dict_drops_unset_fields(self, entry_factory, day):
        data = summarize_range([entry_factory(day, done=1)]).to_dict()
        assert data["completion_rate"] == 33
        assert "streak" not in data
        assert "monthly_breakdown" not in data


class TestAverages:
    def test_average_goals_per_day(self, entry_factory, day):
        entries = [
            entry_factory(day, total=3),
            entry_factory(date(2024, 1, 2), total=2),
            entry_factory(date(2024, 1, 3), total=2),
        ]
        assert average_goals_per_day(entries) == 2.3

    def test_average_goals_per_day_empty(self):
        assert average_goals_per_day([]) == 0

    def test_pooled_differs_from_per_entry_average(self, entry_factory, day):
        entries = [entry_factory(day, done=1, total=1), entry_factory(date(2024, 1, 2), done=0, total=3)]

        assert pooled_completion_rate(entries) == 25
        totals = compute_totals(entries)
        assert totals.average_per_entry_completion_rate == pytest.approx(50.0)

    def test_compute_totals_zero_goal_entries_count_as_zero(self, entry_factory, day):
        entries = [entry_factory(day, done=2, total=2), entry_factory(date(2024, 1, 2), total=0)]
        totals = compute_totals(entries)

        assert totals.total_entries == 2
        assert totals.total_goals_completed == 2
        assert totals.average_per_entry_completion_rate == pytest.approx(50.0)

    def test_compute_totals_empty(self):
        totals = compute_totals([])
        assert totals.total_entries == 0
        assert totals.average_per_entry_completion_rate == 0.0


class TestMonthAndTrend:
    def test_summarize_month(self, entry_factory, day):
        summary = summarize_month(1, [entry_factory(day, done=2)])
        assert summary.month == 1
        assert summary.month_name == "January"
        assert summary.total_entries == 1
        assert summary.total_goals_completed == 2
        assert summary.completion_rate == 67

    def test_trend_point_present(self, entry_factory, day):
        point = trend_point(day, entry_factory(day, done=2))
        assert point.has_entry
        assert point.day_name == "Mon"
        assert point.goals_completed == 2
        assert point.completion_rate == 67

    def test_trend_point_absent(self, day):
        point = trend_point(day, None)
        assert not point.has_entry
        assert point.goals_completed == 0
        assert point.completion_rate == 0
        assert point.to_dict()["date"] == "2024-01-01"

    def test_entry_completion_rate_without_goals(self, entry_factory, day):
        assert entry_completion_rate(entry_factory(day, total=0)) == 0


class TestSectionCompletion:
    def test_empty(self):
        result = section_completion([])
        assert result.total_entries == 0
        assert result.goals.completion_rate == 0
        assert result.gratitude.completed_entries == 0

    def test_mixed_entry(self, day):
        entry = JournalEntry(
            date=day,
            goals=[Goal("A", True), Goal("", False)],
            affirmations=["", ""],
            gratitude=["B", ""],
        )
        result = section_completion([entry])

        assert entry.goals_completed_count == 1
        assert result.goals.completed_entries == 1
        assert result.gratitude.completed_entries == 1
        assert result.affirmations.completed_entries == 0
        assert result.goals.completion_rate == 100
        assert result.affirmations.completion_rate == 0

    def test_goal_flags_do_not_count(self, day):
        entry = JournalEntry(date=day, goals=[Goal("   ", True)], affirmations=[], gratitude=[])
        result = section_completion([entry])
        assert result.goals.completed_entries == 0

    def test_rates(self, entry_factory, day):
        entries = [
            entry_factory(day, gratitude=["x"]),
            entry_factory(date(2024, 1, 2), gratitude=[""]),
            entry_factory(date(2024, 1, 3), gratitude=[" "]),
        ]
        result = section_completion(entries)

        assert result.total_entries == 3
        assert result.gratitude.completed_entries == 1
        assert result.gratitude.completion_rate == 33
        assert result.affirmations.completion_rate == 100

"""Tests for calendar date helpers."""

from datetime import date, datetime

import pytest

from daybook.core.dates import (
    day_name,
    month_bounds,
    month_name,
    normalize_date,
    week_bounds,
    year_bounds,
)


class TestNormalizeDate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (date(2024, 1, 5), date(2024, 1, 5)),
            (datetime(2024, 1, 5, 23, 59), date(2024, 1, 5)),
            ("2024-01-05", date(2024, 1, 5)),
            ("2024-01-05T10:30:00", date(2024, 1, 5)),
            (" 2024-01-05 ", date(2024, 1, 5)),
        ],
    )
    def test_valid(self, value, expected):
        assert normalize_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "not a date", "2024-13-40", 20240105, object()])
    def test_invalid_returns_none(self, value):
        assert normalize_date(value) is None


class TestBounds:
    def test_week_starts_monday(self):
        # 2024-01-03 is a Wednesday
        assert week_bounds(date(2024, 1, 3)) == (date(2024, 1, 1), date(2024, 1, 7))

    def test_week_sunday_belongs_to_previous_monday(self):
        assert week_bounds(date(2024, 1, 7)) == (date(2024, 1, 1), date(2024, 1, 7))

    def test_week_spanning_years(self):
        assert week_bounds(date(2025, 1, 1)) == (date(2024, 12, 30), date(2025, 1, 5))

    def test_month_leap_february(self):
        assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_year(self):
        assert year_bounds(date(2024, 6, 1)) == (date(2024, 1, 1), date(2024, 12, 31))


class TestNames:
    def test_day_name(self):
        assert day_name(date(2024, 1, 1)) == "Mon"
        assert day_name(date(2024, 1, 7)) == "Sun"

    def test_month_name(self):
        assert month_name(1) == "January"
        assert month_name(12) == "December"

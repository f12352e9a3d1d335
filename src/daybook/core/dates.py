"""Calendar date helpers - pure, no I/O."""

import calendar
from datetime import date, datetime, timedelta

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def normalize_date(value: object) -> date | None:
    """
    Coerce a date-like value to a calendar date.

    Accepts date, datetime (time dropped) and ISO strings ("2024-01-05" or
    a full ISO datetime). Returns None for anything that cannot be read as
    a calendar date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def format_date(day: date) -> str:
    return day.isoformat()


def day_name(day: date) -> str:
    """Three-letter English weekday, independent of locale."""
    return DAY_NAMES[day.weekday()]


def month_name(month: int) -> str:
    return calendar.month_name[month]


def week_bounds(day: date) -> tuple[date, date]:
    """Monday..Sunday of the ISO week containing day."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(day: date) -> tuple[date, date]:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def year_bounds(day: date) -> tuple[date, date]:
    return date(day.year, 1, 1), date(day.year, 12, 31)

"""Streak detection over entry dates - pure, no I/O."""

from datetime import date

from .dates import normalize_date

# Upper bound on the backwards walk for the current streak. Does not apply
# to the longest streak.
MAX_CURRENT_STREAK = 365


def longest_run(dates: list[str | date]) -> int:
    """
    Longest run of consecutive calendar days in an ascending date list.

    Unparseable dates are skipped and break the run. Returns 0 for no
    valid dates.
    """
    longest = 0
    current = 0
    previous: date | None = None

    for raw in dates:
        day = normalize_date(raw)
        if day is None:
            previous = None
            current = 0
            continue

        if previous is not None and (day - previous).days == 1:
            current += 1
        else:
            current = 1

        longest = max(longest, current)
        previous = day

    return longest

"""Journal entry storage interface."""

from datetime import date
from typing import Protocol

from daybook.core.aggregates import EntryTotals
from daybook.core.entry import JournalEntry


class StoreError(Exception):
    """Storage unavailable or a query failed."""


class EntryStore(Protocol):
    """Interface for persisting journal entries, one per calendar date."""

    async def get_entry(self, day: date) -> JournalEntry | None:
        """Point lookup. Returns None if no entry exists for the date."""
        ...

    async def entry_exists(self, day: date) -> bool:
        """Check if an entry exists for a date without decoding it."""
        ...

    async def get_entries_by_date_range(self, start: date, end: date) -> list[JournalEntry]:
        """Entries with start <= date <= end, newest first."""
        ...

    async def get_all_entries(self, limit: int | None = 50) -> list[JournalEntry]:
        """Most recent entries, newest first. limit=None returns all."""
        ...

    async def get_all_entry_dates(self) -> list[str]:
        """Every stored date as YYYY-MM-DD text, ascending."""
        ...

    async def get_totals(self) -> EntryTotals:
        """Entry count, completed goals and mean per-entry completion rate."""
        ...

    async def save_entry(self, entry: JournalEntry) -> JournalEntry:
        """Create or replace the entry for its date."""
        ...

    async def update_entry(self, entry: JournalEntry) -> bool:
        """Update an existing entry in place. Returns False if none exists."""
        ...

    async def delete_entry(self, day: date) -> bool:
        """Delete the entry for a date. Returns False if none existed."""
        ...

"""In-memory journal entry storage adapter."""

from copy import deepcopy
from dataclasses import replace
from datetime import date, datetime

from daybook.core.aggregates import EntryTotals, compute_totals
from daybook.core.entry import JournalEntry


class MemoryEntryStore:
    """
    Dict-backed journal storage.

    Implements EntryStore protocol. Nothing is persisted; useful as a test
    fake and for dry runs.
    """

    def __init__(self, entries: list[JournalEntry] | None = None):
        self._entries: dict[date, JournalEntry] = {}
        for entry in entries or []:
            self._entries[entry.date] = deepcopy(entry)

    async def get_entry(self, day: date) -> JournalEntry | None:
        entry = self._entries.get(day)
        return deepcopy(entry) if entry else None

    async def entry_exists(self, day: date) -> bool:
        return day in self._entries

    async def get_entries_by_date_range(self, start: date, end: date) -> list[JournalEntry]:
        return [deepcopy(e) for e in self._newest_first() if start <= e.date <= end]

    async def get_all_entries(self, limit: int | None = 50) -> list[JournalEntry]:
        entries = [deepcopy(e) for e in self._newest_first()]
        return entries if limit is None else entries[:limit]

    async def get_all_entry_dates(self) -> list[str]:
        return [d.isoformat() for d in sorted(self._entries)]

    async def get_totals(self) -> EntryTotals:
        return compute_totals(list(self._entries.values()))

    async def save_entry(self, entry: JournalEntry) -> JournalEntry:
        now = datetime.now()
        existing = self._entries.get(entry.date)
        created = existing.created_at if existing else now
        saved = replace(deepcopy(entry), created_at=created, updated_at=now)
        self._entries[entry.date] = saved
        return deepcopy(saved)

    async def update_entry(self, entry: JournalEntry) -> bool:
        if entry.date not in self._entries:
            return False
        await self.save_entry(entry)
        return True

    async def delete_entry(self, day: date) -> bool:
        return self._entries.pop(day, None) is not None

    def _newest_first(self) -> list[JournalEntry]:
        return sorted(self._entries.values(), key=lambda e: e.date, reverse=True)

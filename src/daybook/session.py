"""Journal session state: the entry being edited and its load/save cycle."""

import logging
from dataclasses import replace
from datetime import date

from .core.entry import Goal, JournalEntry, empty_entry
from .ports.entry_store import EntryStore, StoreError

logger = logging.getLogger(__name__)


class JournalSession:
    """
    In-memory editing state for one selected date.

    Loads the stored entry (or a blank one), tracks unsaved edits, and
    writes back through the entry store. Reads and writes go to the store
    only; statistics are never consulted here.
    """

    def __init__(self, store: EntryStore, selected_date: date | None = None):
        self.store = store
        self.selected_date = selected_date or date.today()
        self.current_entry: JournalEntry | None = None
        self.is_loading = False
        self.error: str | None = None
        self.has_unsaved_changes = False

    async def load(self, day: date | None = None) -> JournalEntry | None:
        """
        Load the entry for day (default: the selected date).

        On a storage error the previous date and entry stay selected, so
        unsaved edits are never written under the failed date.
        """
        target = day or self.selected_date
        self.is_loading = True
        try:
            entry = await self.store.get_entry(target)
        except StoreError as e:
            logger.error(f"Error loading entry for {target}: {e}")
            self.error = str(e)
            self.is_loading = False
            return None

        self.selected_date = target
        self.current_entry = entry or empty_entry(target)
        self.has_unsaved_changes = False
        self.is_loading = False
        self.error = None
        return self.current_entry

    async def select_date(self, day: date) -> JournalEntry | None:
        return await self.load(day)

    async def save(self) -> bool:
        """Create or update the stored entry. Returns False if nothing was saved."""
        if self.current_entry is None or not self.has_unsaved_changes:
            return False

        entry = replace(self.current_entry, date=self.selected_date)
        try:
            existing = await self.store.get_entry(self.selected_date)
            if existing:
                await self.store.update_entry(entry)
            else:
                await self.store.save_entry(entry)
        except StoreError as e:
            logger.error(f"Error saving entry for {self.selected_date}: {e}")
            self.error = str(e)
            return False

        self.has_unsaved_changes = False
        self.error = None
        return True

    def update_goals(self, goals: list[Goal]) -> None:
        self._edit(goals=list(goals))

    def update_affirmations(self, items: list[str]) -> None:
        self._edit(affirmations=list(items))

    def update_gratitude(self, items: list[str]) -> None:
        self._edit(gratitude=list(items))

    def toggle_goal(self, index: int) -> None:
        """Flip a goal's completed flag. Raises IndexError for a missing goal."""
        entry = self._require_entry()
        if not 0 <= index < len(entry.goals):
            raise IndexError(f"No goal at index {index}")
        goals = [
            Goal(g.text, not g.completed) if i == index else g for i, g in enumerate(entry.goals)
        ]
        self._edit(goals=goals)

    def reset(self) -> None:
        """Replace the current entry with a blank one."""
        self.current_entry = empty_entry(self.selected_date)
        self.has_unsaved_changes = True

    def _edit(self, **changes) -> None:
        self.current_entry = replace(self._require_entry(), **changes)
        self.has_unsaved_changes = True

    def _require_entry(self) -> JournalEntry:
        if self.current_entry is None:
            self.current_entry = empty_entry(self.selected_date)
        return self.current_entry

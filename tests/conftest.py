"""Shared test fixtures for daybook."""

from datetime import date

import pytest

from daybook.adapters.memory_store import MemoryEntryStore
from daybook.core.entry import Goal, JournalEntry


def make_entry(
    day: date,
    done: int = 0,
    total: int = 3,
    affirmations: list[str] | None = None,
    gratitude: list[str] | None = None,
) -> JournalEntry:
    """Entry with `total` goals of which the first `done` are completed."""
    return JournalEntry(
        date=day,
        goals=[Goal(f"Goal {i + 1}", i < done) for i in range(total)],
        affirmations=affirmations if affirmations is not None else ["I am calm", "", ""],
        gratitude=gratitude if gratitude is not None else ["Coffee", "", ""],
    )


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def store():
    return MemoryEntryStore()


@pytest.fixture
def scenario_store():
    """Entries on 2024-01-01..03 and 2024-01-05."""
    return MemoryEntryStore(
        [
            make_entry(date(2024, 1, 1), done=3),
            make_entry(date(2024, 1, 2), done=2),
            make_entry(date(2024, 1, 3), done=1),
            make_entry(date(2024, 1, 5), done=0),
        ]
    )

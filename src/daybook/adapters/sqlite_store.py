"""SQLite-backed journal entry storage adapter."""

import asyncio
import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, TypeVar

from daybook.core.aggregates import EntryTotals
from daybook.core.dates import format_date, normalize_date
from daybook.core.entry import (
    EntryDecodeError,
    JournalEntry,
    decode_goals,
    decode_lines,
    encode_goals,
    encode_lines,
)
from daybook.ports.entry_store import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCHEMA = """
CREATE TABLE IF NOT EXISTS journal_entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT UNIQUE NOT NULL,
    goals TEXT NOT NULL,
    affirmations TEXT NOT NULL,
    gratitude TEXT NOT NULL,
    goals_completed INTEGER DEFAULT 0,
    created_at TEXT,
    updated_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_journal_entries_date ON journal_entries (date);
"""


class SqliteEntryStore:
    """
    SQLite journal storage.

    Implements EntryStore protocol. Each call opens a short-lived
    connection in a worker thread, so the event loop never blocks on disk.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._run(self._init_schema)

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _run(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        """Run fn against a fresh connection, committing on success."""
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            logger.error(f"Failed to open database {self.db_path}: {e}")
            raise StoreError(f"Cannot open database: {e}") from e
        try:
            result = fn(conn)
            conn.commit()
            return result
        except sqlite3.Error as e:
            logger.error(f"Database query failed: {e}")
            raise StoreError(f"Database query failed: {e}") from e
        finally:
            conn.close()

    async def _execute(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        return await asyncio.to_thread(self._run, fn)

    @staticmethod
    def _init_schema(conn: sqlite3.Connection) -> None:
        conn.executescript(SCHEMA)

    # ============== Reads ==============

    async def get_entry(self, day: date) -> JournalEntry | None:
        """Point lookup. Returns None if no entry exists for the date."""

        def query(conn: sqlite3.Connection) -> sqlite3.Row | None:
            return conn.execute(
                "SELECT * FROM journal_entries WHERE date = ?", (format_date(day),)
            ).fetchone()

        row = await self._execute(query)
        return _row_to_entry(row) if row else None

    async def entry_exists(self, day: date) -> bool:
        """Check if an entry exists for a date. The row is never decoded."""

        def query(conn: sqlite3.Connection) -> bool:
            row = conn.execute(
                "SELECT 1 FROM journal_entries WHERE date = ?", (format_date(day),)
            ).fetchone()
            return row is not None

        return await self._execute(query)

    async def get_entries_by_date_range(self, start: date, end: date) -> list[JournalEntry]:
        """Entries with start <= date <= end, newest first."""

        def query(conn: sqlite3.Connection) -> list[sqlite3.Row]:
            return conn.execute(
                """
                SELECT * FROM journal_entries
                WHERE date >= ? AND date <= ?
                ORDER BY date DESC
                """,
                (format_date(start), format_date(end)),
            ).fetchall()

        return [_row_to_entry(row) for row in await self._execute(query)]

    async def get_all_entries(self, limit: int | None = 50) -> list[JournalEntry]:
        """Most recent entries, newest first. limit=None returns all."""

        def query(conn: sqlite3.Connection) -> list[sqlite3.Row]:
            if limit is None:
                return conn.execute("SELECT * FROM journal_entries ORDER BY date DESC").fetchall()
            return conn.execute(
                "SELECT * FROM journal_entries ORDER BY date DESC LIMIT ?", (limit,)
            ).fetchall()

        return [_row_to_entry(row) for row in await self._execute(query)]

    async def get_all_entry_dates(self) -> list[str]:
        """Every stored date as text, ascending. Values are returned unparsed."""

        def query(conn: sqlite3.Connection) -> list[str]:
            rows = conn.execute("SELECT date FROM journal_entries ORDER BY date ASC").fetchall()
            return [row["date"] for row in rows]

        return await self._execute(query)

    async def get_totals(self) -> EntryTotals:
        """Single aggregate query over the whole table."""

        def query(conn: sqlite3.Connection) -> sqlite3.Row:
            return conn.execute(
                """
                SELECT
                    COUNT(*) AS total_entries,
                    SUM(goals_completed) AS total_goals_completed,
                    AVG(CASE WHEN json_array_length(goals) > 0
                        THEN goals_completed * 100.0 / json_array_length(goals)
                        ELSE 0 END) AS average_rate
                FROM journal_entries
                """
            ).fetchone()

        row = await self._execute(query)
        return EntryTotals(
            total_entries=row["total_entries"] or 0,
            total_goals_completed=row["total_goals_completed"] or 0,
            average_per_entry_completion_rate=row["average_rate"] or 0.0,
        )

    # ============== Writes ==============

    async def save_entry(self, entry: JournalEntry) -> JournalEntry:
        """Create or replace the entry for its date, keeping created_at."""
        now = datetime.now()

        def query(conn: sqlite3.Connection) -> sqlite3.Row:
            conn.execute(
                """
                INSERT INTO journal_entries
                    (date, goals, affirmations, gratitude, goals_completed, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(date) DO UPDATE SET
                    goals = excluded.goals,
                    affirmations = excluded.affirmations,
                    gratitude = excluded.gratitude,
                    goals_completed = excluded.goals_completed,
                    updated_at = excluded.updated_at
                """,
                (*_entry_params(entry), now.isoformat(), now.isoformat()),
            )
            return conn.execute(
                "SELECT * FROM journal_entries WHERE date = ?", (format_date(entry.date),)
            ).fetchone()

        return _row_to_entry(await self._execute(query))

    async def update_entry(self, entry: JournalEntry) -> bool:
        """Update an existing entry in place. Returns False if none exists."""
        now = datetime.now()

        def query(conn: sqlite3.Connection) -> int:
            day, goals, affirmations, gratitude, completed = _entry_params(entry)
            cursor = conn.execute(
                """
                UPDATE journal_entries
                SET goals = ?, affirmations = ?, gratitude = ?, goals_completed = ?, updated_at = ?
                WHERE date = ?
                """,
                (goals, affirmations, gratitude, completed, now.isoformat(), day),
            )
            return cursor.rowcount

        return await self._execute(query) > 0

    async def delete_entry(self, day: date) -> bool:
        """Delete the entry for a date. Returns False if none existed."""

        def query(conn: sqlite3.Connection) -> int:
            cursor = conn.execute("DELETE FROM journal_entries WHERE date = ?", (format_date(day),))
            return cursor.rowcount

        return await self._execute(query) > 0


def _entry_params(entry: JournalEntry) -> tuple[str, str, str, str, int]:
    """Column values for an entry. The completed count is recomputed on every write."""
    return (
        format_date(entry.date),
        encode_goals(entry.goals),
        encode_lines(entry.affirmations),
        encode_lines(entry.gratitude),
        entry.goals_completed_count,
    )


def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
    """Deserialize a row. Raises StoreError for data that cannot be decoded."""
    day = normalize_date(row["date"])
    if day is None:
        raise StoreError(f"Invalid entry date: {row['date']!r}")
    try:
        return JournalEntry(
            date=day,
            goals=decode_goals(row["goals"]),
            affirmations=decode_lines(row["affirmations"], "affirmations"),
            gratitude=decode_lines(row["gratitude"], "gratitude"),
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )
    except EntryDecodeError as e:
        logger.warning(f"Could not decode entry for {row['date']}: {e}")
        raise StoreError(str(e)) from e


def _parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None

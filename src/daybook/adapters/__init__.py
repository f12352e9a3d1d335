"""Adapters - I/O implementations of ports."""

from .sqlite_store import SqliteEntryStore
from .memory_store import MemoryEntryStore

__all__ = [
    "SqliteEntryStore",
    "MemoryEntryStore",
]

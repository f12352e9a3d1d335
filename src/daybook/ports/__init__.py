"""Ports - interfaces/protocols for external dependencies."""

from .entry_store import EntryStore, StoreError

__all__ = [
    "EntryStore",
    "StoreError",
]

"""
Note store implementations for SmartNotes.

Provides abstract base and concrete implementations for note persistence.

Available backends:
- SQLiteNoteStore: Local relational store backed by aiosqlite
"""

from smartnotes.core.note_store.base import UPDATABLE_COLUMNS, NoteStore
from smartnotes.core.note_store.sqlite_store import SQLiteNoteStore

__all__ = [
    "NoteStore",
    "SQLiteNoteStore",
    "UPDATABLE_COLUMNS",
]

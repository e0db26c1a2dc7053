"""
Shared test fixtures for note store tests.
"""

import pytest

from smartnotes.core.note_store.sqlite_store import SQLiteNoteStore


@pytest.fixture
async def sqlite_store(tmp_path):
    """Create an initialized SQLite store in a temporary directory."""
    store = SQLiteNoteStore(db_path=str(tmp_path / "notes" / "test.db"))
    await store.initialize()
    yield store
    await store.close()

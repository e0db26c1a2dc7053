"""
SQLite note store implementation.

Local stand-in for the managed relational store, using aiosqlite.
"""

from pathlib import Path
from typing import Any

import aiosqlite

from smartnotes.core.note_store.base import NoteStore
from smartnotes.utils.clock import now_iso
from smartnotes.utils.exceptions import NoteStoreError
from smartnotes.utils.id_generator import generate_durable_note_id
from smartnotes.utils.logger import get_logger

logger = get_logger(__name__)


class SQLiteNoteStore(NoteStore):
    """
    SQLite-based note store.

    Features:
    - Store-generated durable ids (UUID4)
    - Rows scoped by owner
    - ISO-8601 timestamps, newest-first listing
    """

    def __init__(self, db_path: str = "data/smartnotes.db"):
        """
        Initialize SQLite note store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self.connection: aiosqlite.Connection | None = None

        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async def connect(self) -> None:
        """Establish connection to SQLite."""
        if self.connection is None:
            self.connection = await aiosqlite.connect(self.db_path)
            self.connection.row_factory = aiosqlite.Row
            await self.connection.execute("PRAGMA journal_mode = WAL")
            await self.connection.commit()

    async def initialize(self) -> None:
        """Initialize database schema."""
        await self.connect()

        await self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS notes (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                title TEXT DEFAULT '',
                content TEXT DEFAULT '',
                updated_at TEXT NOT NULL,
                is_deleted INTEGER NOT NULL DEFAULT 0
            )
        """
        )
        await self.connection.execute(
            "CREATE INDEX IF NOT EXISTS idx_notes_owner_updated ON notes(user_id, updated_at)"
        )
        await self.connection.commit()

    async def list_notes(self, owner_id: str) -> list[dict[str, Any]]:
        """List every note row of an owner, newest first."""
        try:
            await self.connect()
            cursor = await self.connection.execute(
                """
                SELECT id, title, content, updated_at, is_deleted FROM notes
                WHERE user_id = ? ORDER BY updated_at DESC
                """,
                (owner_id,),
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise NoteStoreError(
                f"Failed to list notes: {e}", context={"owner_id": owner_id}
            ) from e

        return [self._row_to_record(row) for row in rows]

    async def insert_note(self, owner_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Insert a note row and return it with its durable id."""
        record = {
            "id": generate_durable_note_id(),
            "user_id": owner_id,
            "title": fields.get("title", ""),
            "content": fields.get("content", ""),
            "updated_at": fields.get("updated_at") or now_iso(),
            "is_deleted": bool(fields.get("is_deleted", False)),
        }

        try:
            await self.connect()
            await self.connection.execute(
                """
                INSERT INTO notes (id, user_id, title, content, updated_at, is_deleted)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    record["id"],
                    record["user_id"],
                    record["title"],
                    record["content"],
                    record["updated_at"],
                    int(record["is_deleted"]),
                ),
            )
            await self.connection.commit()
        except aiosqlite.Error as e:
            raise NoteStoreError(
                f"Failed to insert note: {e}", context={"owner_id": owner_id}
            ) from e

        logger.debug(f"Inserted note {record['id']}", extra={"note_id": record["id"]})
        return record

    async def update_note(self, note_id: str, fields: dict[str, Any]) -> None:
        """Update a subset of columns of one row."""
        self.validate_update_fields(fields)

        columns = sorted(fields)
        assignments = ", ".join(f"{column} = ?" for column in columns)
        params = [
            int(fields[column]) if column == "is_deleted" else fields[column] for column in columns
        ]
        params.append(note_id)

        try:
            await self.connect()
            await self.connection.execute(f"UPDATE notes SET {assignments} WHERE id = ?", params)
            await self.connection.commit()
        except aiosqlite.Error as e:
            raise NoteStoreError(
                f"Failed to update note {note_id}: {e}", context={"note_id": note_id}
            ) from e

    async def delete_note(self, note_id: str) -> None:
        """Delete a row; missing rows are ignored."""
        try:
            await self.connect()
            await self.connection.execute("DELETE FROM notes WHERE id = ?", (note_id,))
            await self.connection.commit()
        except aiosqlite.Error as e:
            raise NoteStoreError(
                f"Failed to delete note {note_id}: {e}", context={"note_id": note_id}
            ) from e

    async def get_note(self, note_id: str) -> dict[str, Any] | None:
        """Fetch a single row by id (diagnostics and tests)."""
        await self.connect()
        cursor = await self.connection.execute(
            "SELECT id, title, content, updated_at, is_deleted FROM notes WHERE id = ?",
            (note_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_record(row) if row else None

    async def close(self) -> None:
        """Close the connection."""
        if self.connection is not None:
            await self.connection.close()
            self.connection = None

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> dict[str, Any]:
        return {
            "id": row["id"],
            "title": row["title"],
            "content": row["content"],
            "updated_at": row["updated_at"],
            "is_deleted": bool(row["is_deleted"]),
        }

"""
Base interface for the remote note store.

The store is a relational table of note rows keyed by owner. Rows use the
store's column names (updated_at as ISO-8601, is_deleted); translation to
the Note shape happens in the engine.
"""

from abc import ABC, abstractmethod
from typing import Any

from smartnotes.utils.exceptions import ValidationError

# Columns an update may touch
UPDATABLE_COLUMNS = frozenset({"title", "content", "is_deleted", "updated_at"})


class NoteStore(ABC):
    """Abstract base class for note store implementations."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the store (connect, create schema)."""
        pass

    @abstractmethod
    async def list_notes(self, owner_id: str) -> list[dict[str, Any]]:
        """
        List every note row of an owner.

        Args:
            owner_id: Owner identity

        Returns:
            Rows with id, title, content, updated_at, is_deleted,
            ordered by updated_at descending
        """
        pass

    @abstractmethod
    async def insert_note(self, owner_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a single note row.

        Args:
            owner_id: Owner identity
            fields: Initial title, content and updated_at

        Returns:
            The created row, including its durable id
        """
        pass

    @abstractmethod
    async def update_note(self, note_id: str, fields: dict[str, Any]) -> None:
        """
        Update a subset of columns of one row.

        Args:
            note_id: Durable note id
            fields: Subset of title, content, is_deleted, updated_at
        """
        pass

    @abstractmethod
    async def delete_note(self, note_id: str) -> None:
        """
        Delete a row. Deleting a missing row is not an error.

        Args:
            note_id: Durable note id
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass

    @staticmethod
    def validate_update_fields(fields: dict[str, Any]) -> None:
        """
        Reject empty updates and columns outside the updatable set.

        Raises:
            ValidationError: If fields is empty or names an unknown column
        """
        if not fields:
            raise ValidationError("Update must touch at least one column")
        unknown = set(fields) - UPDATABLE_COLUMNS
        if unknown:
            raise ValidationError(
                f"Cannot update columns: {sorted(unknown)}",
                context={"allowed": sorted(UPDATABLE_COLUMNS)},
            )

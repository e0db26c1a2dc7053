"""
Note model for the reconciliation engine.

A Note lives under one of two id regimes: a temporary id generated
locally for an optimistic insert, and the durable id issued by the note
store once the insert succeeds.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from smartnotes.utils.clock import iso_to_ms, now_ms
from smartnotes.utils.id_generator import is_temporary_id

PREVIEW_LENGTH = 100

# Fields a partial edit may carry
EDITABLE_FIELDS = ("title", "content")


class ViewMode(str, Enum):
    """Which partition of the collection the list shows."""

    ACTIVE = "active"
    TRASH = "trash"


class SortOption(str, Enum):
    """Ordering of the projected note list."""

    UPDATED = "updated"  # updated_at descending
    ALPHA = "alpha"  # title ascending, case-insensitive


class Note(BaseModel):
    """
    A single user note.

    The engine treats instances as values: every mutation derives a new
    Note with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Temporary (tmp_xxx) or durable note ID")
    title: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note body")
    updated_at: int = Field(
        default_factory=now_ms, description="Last local modification, epoch milliseconds"
    )
    is_deleted: bool = Field(default=False, description="Soft-delete (trash) flag")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Note":
        """
        Build a Note from a note store row.

        Args:
            record: Row with id, title, content, updated_at (ISO-8601) and is_deleted

        Returns:
            Note with store column names translated
        """
        updated_at = record.get("updated_at")
        if isinstance(updated_at, str):
            updated_ms = iso_to_ms(updated_at)
        elif isinstance(updated_at, int | float):
            updated_ms = int(updated_at)
        else:
            updated_ms = now_ms()

        return cls(
            id=str(record["id"]),
            title=record.get("title") or "",
            content=record.get("content") or "",
            updated_at=updated_ms,
            is_deleted=bool(record.get("is_deleted") or False),
        )

    @property
    def is_temporary(self) -> bool:
        """True until the store has assigned a durable id."""
        return is_temporary_id(self.id)

    @property
    def preview(self) -> str:
        """
        Get a short snippet of the content for list display.

        Returns:
            First 100 characters of content
        """
        return self.content[:PREVIEW_LENGTH]

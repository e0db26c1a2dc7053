"""
ID generation utilities for SmartNotes.

Only locally generated identifiers live here:
- Temporary notes: tmp_xxx (replaced by the store's durable id)
- Durable notes: UUID4 strings issued by the note store
"""

from uuid import uuid4

TEMPORARY_ID_PREFIX = "tmp_"


def generate_temporary_note_id() -> str:
    """
    Generate a temporary Note ID for an optimistic insert.

    Returns:
        ID in format "tmp_xxx" where xxx is 32 hex characters
    """
    return f"{TEMPORARY_ID_PREFIX}{uuid4().hex}"


def generate_durable_note_id() -> str:
    """
    Generate a durable Note ID (store side).

    Returns:
        Canonical UUID4 string
    """
    return str(uuid4())


def is_temporary_id(note_id: str) -> bool:
    """Check whether an ID was generated locally for an optimistic insert."""
    return note_id.startswith(TEMPORARY_ID_PREFIX)

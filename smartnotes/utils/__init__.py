"""Utility modules for SmartNotes."""

from smartnotes.utils.clock import iso_to_ms, ms_to_iso, now_iso, now_ms
from smartnotes.utils.exceptions import (
    AuthenticationError,
    BlobStoreError,
    ConfigurationError,
    LLMError,
    NoteStoreError,
    SmartNotesError,
    StoreError,
    ValidationError,
)
from smartnotes.utils.id_generator import (
    TEMPORARY_ID_PREFIX,
    generate_durable_note_id,
    generate_temporary_note_id,
    is_temporary_id,
)
from smartnotes.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # ID Generators
    "TEMPORARY_ID_PREFIX",
    "generate_temporary_note_id",
    "generate_durable_note_id",
    "is_temporary_id",
    # Clock
    "now_ms",
    "now_iso",
    "iso_to_ms",
    "ms_to_iso",
    # Exceptions
    "SmartNotesError",
    "StoreError",
    "NoteStoreError",
    "BlobStoreError",
    "ValidationError",
    "ConfigurationError",
    "LLMError",
    "AuthenticationError",
]

"""
Data models for SmartNotes.

Core models:
- Note: note entity under a temporary or durable id
- ViewMode, SortOption: list partition and ordering enums
- Session, UserProfile: explicit session context
- ViewState, DeleteConfirmation: ambient UI state and the delete gate
"""

from smartnotes.models.note import EDITABLE_FIELDS, Note, SortOption, ViewMode
from smartnotes.models.session import Session, UserProfile
from smartnotes.models.ui_state import ConfirmationStatus, DeleteConfirmation, ViewState

__all__ = [
    # Note models
    "Note",
    "ViewMode",
    "SortOption",
    "EDITABLE_FIELDS",
    # Session models
    "Session",
    "UserProfile",
    # UI state
    "ViewState",
    "DeleteConfirmation",
    "ConfirmationStatus",
]

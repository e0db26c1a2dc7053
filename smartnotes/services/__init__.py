"""
Services for SmartNotes.

High-level business logic services:
- NoteEngine: Optimistic note collection with debounced persistence
- TextTransformService: AI rewrites (enhance, grammar, tone, title)
- ProfileService: Avatar uploads
- view_projection: Pure list/selection projection helpers
"""

from smartnotes.services.note_engine import NoteEngine
from smartnotes.services.profile_service import ProfileService
from smartnotes.services.text_transform import TextTransformService, Tone, TransformKind
from smartnotes.services.view_projection import (
    matches_search,
    project_notes,
    resolve_active_note,
)

__all__ = [
    "NoteEngine",
    "TextTransformService",
    "Tone",
    "TransformKind",
    "ProfileService",
    "project_notes",
    "matches_search",
    "resolve_active_note",
]

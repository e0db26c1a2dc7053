"""
View projection - derives what the presentation layer shows.

Pure functions of (notes, view mode, search term, selection); no side effects.
"""

from collections.abc import Iterable

from smartnotes.models.note import Note, SortOption, ViewMode


def matches_search(note: Note, search_term: str) -> bool:
    """
    Case-insensitive substring match against title or content.

    An empty search term matches every note.
    """
    if not search_term:
        return True
    term = search_term.lower()
    return term in note.title.lower() or term in note.content.lower()


def in_view(note: Note, view_mode: ViewMode) -> bool:
    """Trashed notes belong to the trash view, all others to the active view."""
    return note.is_deleted == (ViewMode(view_mode) == ViewMode.TRASH)


def project_notes(
    notes: Iterable[Note],
    view_mode: ViewMode = ViewMode.ACTIVE,
    search_term: str = "",
    sort: SortOption = SortOption.UPDATED,
) -> list[Note]:
    """
    Filter and sort notes for the list view.

    Args:
        notes: Full note collection
        view_mode: active or trash partition
        search_term: Case-insensitive filter on title or content
        sort: updated (newest first) or alpha (by title)

    Returns:
        New list; ties keep their input order (sorted() is stable)
    """
    visible = [note for note in notes if in_view(note, view_mode) and matches_search(note, search_term)]

    if SortOption(sort) == SortOption.ALPHA:
        return sorted(visible, key=lambda note: note.title.casefold())
    return sorted(visible, key=lambda note: note.updated_at, reverse=True)


def resolve_active_note(notes: Iterable[Note], selected_id: str | None) -> Note | None:
    """
    Look up the selected note in the full, unfiltered collection.

    Selection is independent of filtering: a note being edited stays active
    even when it no longer matches the search term.
    """
    if selected_id is None:
        return None
    return next((note for note in notes if note.id == selected_id), None)

"""
Note Reconciliation Engine - keeps the in-memory notes consistent with the store.

Handles:
- Optimistic local mutations (create, edit, trash, restore)
- Per-note debounced persistence of edits
- Temporary-id to durable-id handoff for new notes
- Store-success-gated permanent deletion behind a confirmation
- AI text transforms written back through the edit path

Local state is authoritative for editing: failed writes are logged and
never rolled back. Only permanent deletion waits for the store.
"""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any, NamedTuple

from smartnotes.core.note_store.base import NoteStore
from smartnotes.models.note import EDITABLE_FIELDS, Note, SortOption, ViewMode
from smartnotes.models.session import Session
from smartnotes.models.ui_state import DeleteConfirmation, ViewState
from smartnotes.services.text_transform import TextTransformService, Tone, TransformKind
from smartnotes.services.view_projection import project_notes, resolve_active_note
from smartnotes.utils.clock import ms_to_iso, now_iso, now_ms
from smartnotes.utils.exceptions import (
    AuthenticationError,
    ConfigurationError,
    LLMError,
    ValidationError,
)
from smartnotes.utils.id_generator import generate_temporary_note_id
from smartnotes.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SAVE_DELAY = 1.0

DELETE_FAILED_MESSAGE = (
    "Could not delete the note from the database. Check your connection or permissions."
)
TRANSFORM_FAILED_MESSAGES = {
    TransformKind.ENHANCE: "Could not improve the text. Check your connection or API key.",
    TransformKind.GRAMMAR: "Could not fix the grammar.",
    TransformKind.TONE: "Could not rewrite the text.",
    TransformKind.TITLE: "Could not generate a title.",
}
TONE_REQUIRED_MESSAGE = "Choose a tone for the rewrite: formal, professional or informal."

AlertHandler = Callable[[str], None]


class _PendingSave(NamedTuple):
    handle: asyncio.TimerHandle
    fields: dict[str, Any]


def _log_alert(message: str) -> None:
    logger.warning("User alert raised", extra={"alert": message})


class NoteEngine:
    """
    Owns the note collection of one session.

    Mutating operations are synchronous: they update memory, schedule the
    store write in the background and return. They must be called from
    inside a running event loop.
    """

    def __init__(
        self,
        store: NoteStore,
        session: Session,
        transforms: TextTransformService | None = None,
        save_delay: float = DEFAULT_SAVE_DELAY,
        alert: AlertHandler | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        """
        Initialize the engine.

        Args:
            store: Remote note store
            session: Session whose owner id scopes every store call
            transforms: Optional text transform service for apply_transform
            save_delay: Debounce window for edits, in seconds
            alert: Callback receiving user-visible failure notices
            clock: Source of epoch-millisecond timestamps
        """
        self.store = store
        self.session = session
        self.transforms = transforms
        self.save_delay = save_delay
        self.alert = alert or _log_alert
        self.clock = clock

        self.view = ViewState()
        self.delete_confirmation = DeleteConfirmation()

        self._notes: tuple[Note, ...] = ()
        self._save_timers: dict[str, _PendingSave] = {}
        self._tasks: set[asyncio.Task] = set()
        # temp id -> durable id, for callers still holding a temp id
        self._durable_ids: dict[str, str] = {}
        # temp ids changed locally before their insert finished
        self._dirty_temporary: set[str] = set()
        # temp ids permanently deleted before their insert finished
        self._discarded_temporary: set[str] = set()

    # ═══════════════════════════════════════════════════════════
    # READ SIDE
    # ═══════════════════════════════════════════════════════════

    @property
    def notes(self) -> tuple[Note, ...]:
        """Snapshot of the full collection, newest insertion first."""
        return self._notes

    @property
    def visible_notes(self) -> list[Note]:
        """Notes for the current view mode, search term and sort."""
        return project_notes(
            self._notes, self.view.view_mode, self.view.search_term, self.view.sort
        )

    @property
    def active_note(self) -> Note | None:
        return resolve_active_note(self._notes, self.view.selected_note_id)

    @property
    def pending_save_ids(self) -> set[str]:
        """Note ids with a debounced save that has not fired yet."""
        return set(self._save_timers)

    def get_note(self, note_id: str) -> Note | None:
        return resolve_active_note(self._notes, self._resolve_id(note_id))

    def _resolve_id(self, note_id: str) -> str:
        return self._durable_ids.get(note_id, note_id)

    # ═══════════════════════════════════════════════════════════
    # SESSION
    # ═══════════════════════════════════════════════════════════

    async def load(self) -> bool:
        """
        Replace the collection with the owner's notes from the store.

        Pending saves are written first so the fetch sees every local edit.

        Returns:
            True if the fetch succeeded. On failure the collection is left
            empty and the error is logged; there is no automatic retry.
        """
        await self.flush()
        # Nothing in flight can still report under a temporary id
        self._durable_ids.clear()
        self._dirty_temporary.clear()
        self._discarded_temporary.clear()

        owner_id = self.session.owner_id
        if owner_id is None:
            self._notes = ()
            self.view.selected_note_id = None
            return False

        try:
            records = await self.store.list_notes(owner_id)
            notes = tuple(Note.from_record(record) for record in records)
        except Exception as e:
            self._notes = ()
            logger.error(
                "Error fetching notes",
                extra={"owner_id": owner_id, "error": str(e), "error_type": type(e).__name__},
            )
            return False

        self._notes = notes
        logger.info(f"Loaded {len(notes)} notes", extra={"owner_id": owner_id})
        return True

    async def change_session(self, session: Session) -> bool:
        """
        Switch to another session (sign in / sign out).

        Pending saves of the previous session are flushed first, then all
        local state is reset and the new owner's notes are loaded.
        """
        await self.flush()
        self.session = session
        self._notes = ()
        self.view = ViewState()
        self.delete_confirmation = DeleteConfirmation()
        self._durable_ids.clear()
        self._dirty_temporary.clear()
        self._discarded_temporary.clear()
        if not session.is_authenticated:
            return False
        return await self.load()

    # ═══════════════════════════════════════════════════════════
    # OPTIMISTIC MUTATIONS
    # ═══════════════════════════════════════════════════════════

    def add_note(self) -> Note:
        """
        Insert an empty note at the front and select it.

        The store insert runs in the background; its durable id replaces
        the temporary one when it arrives.
        """
        note = Note(id=generate_temporary_note_id(), updated_at=self.clock())

        self._notes = (note, *self._notes)
        self.view.view_mode = ViewMode.ACTIVE
        self.view.selected_note_id = note.id
        self.view.search_term = ""
        self.view.is_mobile_list_visible = False

        self._spawn(self._insert(note), f"insert:{note.id}")
        return note

    def update_note(
        self, note_id: str, title: str | None = None, content: str | None = None
    ) -> Note | None:
        """
        Apply a partial edit now and schedule a debounced store write.

        Args:
            note_id: Note to edit
            title: New title, if edited
            content: New content, if edited

        Returns:
            The updated note, or None if no such note exists

        Raises:
            ValidationError: If neither title nor content is given
        """
        fields = {
            name: value
            for name, value in zip(EDITABLE_FIELDS, (title, content))
            if value is not None
        }
        if not fields:
            raise ValidationError("update_note needs a title or content")

        note = self.get_note(note_id)
        if note is None:
            logger.warning("Edit for unknown note ignored", extra={"note_id": note_id})
            return None

        updated = note.model_copy(update={**fields, "updated_at": self.clock()})
        self._replace_note(updated)
        self._schedule_save(updated.id, fields)
        return updated

    def move_to_trash(self, note_id: str) -> Note | None:
        """Soft-delete a note; deselects it if it was active."""
        updated = self._set_deleted(note_id, True)
        if updated is not None and self.view.selected_note_id == updated.id:
            self.view.selected_note_id = None
            self.view.is_mobile_list_visible = True
        return updated

    def restore_from_trash(self, note_id: str) -> Note | None:
        """Bring a trashed note back to the active view."""
        return self._set_deleted(note_id, False)

    def _set_deleted(self, note_id: str, is_deleted: bool) -> Note | None:
        note = self.get_note(note_id)
        if note is None:
            logger.warning("Trash/restore for unknown note ignored", extra={"note_id": note_id})
            return None

        updated = note.model_copy(update={"is_deleted": is_deleted, "updated_at": self.clock()})
        self._replace_note(updated)
        self._spawn(self._write_deleted_flag(updated.id, is_deleted), f"trash:{updated.id}")
        return updated

    # ═══════════════════════════════════════════════════════════
    # PERMANENT DELETION
    # ═══════════════════════════════════════════════════════════

    def request_permanent_delete(self, note_id: str) -> None:
        """Open the confirmation for a note; nothing is deleted yet."""
        note = self.get_note(note_id)
        if note is None:
            logger.warning("Delete request for unknown note ignored", extra={"note_id": note_id})
            return
        self.delete_confirmation.request(note.id)

    def cancel_permanent_delete(self) -> None:
        """Close the confirmation without side effects."""
        self.delete_confirmation.cancel()

    async def confirm_permanent_delete(self) -> bool:
        """
        Delete the pending note from the store, then from memory.

        The note is removed locally only after the store delete succeeds.
        On failure it is kept, the confirmation closes and the user is
        alerted.

        Returns:
            True if the note was deleted
        """
        confirmation = self.delete_confirmation
        if not confirmation.is_open or confirmation.is_deleting or confirmation.note_id is None:
            return False

        note_id = self._resolve_id(confirmation.note_id)
        # A save landing after the delete must not target the removed row
        self._cancel_pending_save(note_id)

        note = self.get_note(note_id)
        if note is not None and note.is_temporary:
            # No row exists yet; the insert handler deletes it on arrival
            self._discarded_temporary.add(note_id)
            self._remove_note(note_id)
            confirmation.reset()
            return True

        confirmation.is_deleting = True
        try:
            await self.store.delete_note(note_id)
        except Exception as e:
            logger.error(
                "Error deleting note",
                extra={"note_id": note_id, "error": str(e), "error_type": type(e).__name__},
            )
            confirmation.reset()
            self.alert(DELETE_FAILED_MESSAGE)
            return False

        self._cancel_pending_save(note_id)
        self._remove_note(note_id)
        confirmation.reset()
        logger.info("Note permanently deleted", extra={"note_id": note_id})
        return True

    # ═══════════════════════════════════════════════════════════
    # UI INTENTS
    # ═══════════════════════════════════════════════════════════

    def select_note(self, note_id: str | None) -> None:
        self.view.selected_note_id = self._resolve_id(note_id) if note_id else None
        if note_id:
            self.view.is_mobile_list_visible = False

    def back_to_list(self) -> None:
        self.view.is_mobile_list_visible = True

    def set_search_term(self, term: str) -> None:
        self.view.search_term = term

    def set_view_mode(self, view_mode: ViewMode | str) -> None:
        self.view.view_mode = ViewMode(view_mode)

    def set_sort(self, sort: SortOption | str) -> None:
        self.view.sort = SortOption(sort)

    # ═══════════════════════════════════════════════════════════
    # TEXT TRANSFORMS
    # ═══════════════════════════════════════════════════════════

    async def apply_transform(
        self, note_id: str, kind: TransformKind | str, tone: Tone | str | None = None
    ) -> Note | None:
        """
        Run an AI transform on a note's content and write the result back.

        Title generation writes the title; every other transform replaces
        the content. On failure the note is untouched and the user alerted.

        Returns:
            The updated note, the unchanged note for blank content, or None
            if the note is missing, the tone is missing or the transform failed

        Raises:
            ConfigurationError: If the engine has no transform service
        """
        if self.transforms is None:
            raise ConfigurationError("No text transform service configured")

        kind = TransformKind(kind)
        note = self.get_note(note_id)
        if note is None:
            return None
        if not note.content.strip():
            return note

        if kind == TransformKind.TONE:
            try:
                tone = Tone(tone)
            except ValueError:
                self.alert(TONE_REQUIRED_MESSAGE)
                return None

        try:
            result = await self.transforms.transform(kind, note.content, tone)
        except LLMError:
            self.alert(TRANSFORM_FAILED_MESSAGES[kind])
            return None

        # The note may have been re-keyed or removed while awaiting
        if kind == TransformKind.TITLE:
            return self.update_note(note.id, title=result)
        return self.update_note(note.id, content=result)

    # ═══════════════════════════════════════════════════════════
    # LIFECYCLE
    # ═══════════════════════════════════════════════════════════

    async def wait_idle(self) -> None:
        """Wait until no background store call is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def flush(self) -> None:
        """
        Fire every pending debounced save now and wait for all writes.

        An insert landing during the wait can arm a save for its durable
        id, so this repeats until no timer and no task is left.
        """
        while self._save_timers or self._tasks:
            for note_id, pending in list(self._save_timers.items()):
                pending.handle.cancel()
                self._fire_save(note_id, pending.fields)
            await self.wait_idle()

    async def close(self) -> None:
        await self.flush()

    # ═══════════════════════════════════════════════════════════
    # BACKGROUND WRITES
    # ═══════════════════════════════════════════════════════════

    def _spawn(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _schedule_save(self, note_id: str, fields: dict[str, Any]) -> None:
        self._cancel_pending_save(note_id)
        handle = asyncio.get_running_loop().call_later(
            self.save_delay, self._fire_save, note_id, fields
        )
        self._save_timers[note_id] = _PendingSave(handle, fields)

    def _cancel_pending_save(self, note_id: str) -> None:
        pending = self._save_timers.pop(note_id, None)
        if pending is not None:
            # A cancelled TimerHandle never runs its callback
            pending.handle.cancel()

    def _fire_save(self, note_id: str, fields: dict[str, Any]) -> None:
        self._save_timers.pop(note_id, None)
        self._spawn(self._save(note_id, fields), f"save:{note_id}")

    async def _save(self, note_id: str, fields: dict[str, Any]) -> None:
        note = self.get_note(note_id)
        if note is None:
            logger.debug("Save dropped, note no longer exists", extra={"note_id": note_id})
            return
        if note.is_temporary:
            self._dirty_temporary.add(note.id)
            return

        try:
            await self.store.update_note(note.id, {**fields, "updated_at": now_iso()})
        except Exception as e:
            logger.error(
                "Error updating note",
                extra={"note_id": note.id, "error": str(e), "error_type": type(e).__name__},
            )

    async def _write_deleted_flag(self, note_id: str, is_deleted: bool) -> None:
        note = self.get_note(note_id)
        if note is None:
            return
        if note.is_temporary:
            self._dirty_temporary.add(note.id)
            return

        try:
            await self.store.update_note(
                note.id, {"is_deleted": is_deleted, "updated_at": now_iso()}
            )
        except Exception as e:
            action = "moving note to trash" if is_deleted else "restoring note"
            logger.error(
                f"Error {action}",
                extra={"note_id": note.id, "error": str(e), "error_type": type(e).__name__},
            )

    async def _insert(self, note: Note) -> None:
        owner_id = self.session.owner_id
        if owner_id is None:
            error = AuthenticationError("User not authenticated", context={"note_id": note.id})
            logger.error("Error adding note", extra={"note_id": note.id, "error": str(error)})
            self._forget_temporary(note.id)
            return

        try:
            record = await self.store.insert_note(
                owner_id,
                {
                    "title": note.title,
                    "content": note.content,
                    "updated_at": ms_to_iso(note.updated_at),
                },
            )
            durable_id = str(record["id"])
        except Exception as e:
            # No rollback: the note stays visible under its temporary id
            logger.error(
                "Error adding note",
                extra={"note_id": note.id, "error": str(e), "error_type": type(e).__name__},
            )
            self._forget_temporary(note.id)
            return

        self._adopt_durable_id(note.id, durable_id)

    def _adopt_durable_id(self, temp_id: str, durable_id: str) -> None:
        self._durable_ids[temp_id] = durable_id
        # An edit still waiting on its timer counts as dirty too
        dirty = temp_id in self._dirty_temporary or temp_id in self._save_timers
        self._cancel_pending_save(temp_id)
        self._dirty_temporary.discard(temp_id)

        if temp_id in self._discarded_temporary:
            self._discarded_temporary.discard(temp_id)
            self._spawn(self._delete_orphan(durable_id), f"delete:{durable_id}")
            return

        note = resolve_active_note(self._notes, temp_id)
        if note is None:
            return

        self._notes = tuple(
            current.model_copy(update={"id": durable_id}) if current.id == temp_id else current
            for current in self._notes
        )
        if self.view.selected_note_id == temp_id:
            self.view.selected_note_id = durable_id
        if self.delete_confirmation.note_id == temp_id:
            self.delete_confirmation.note_id = durable_id

        if dirty:
            self._schedule_save(
                durable_id,
                {"title": note.title, "content": note.content, "is_deleted": note.is_deleted},
            )
        logger.debug(
            "Temporary id replaced", extra={"temp_id": temp_id, "note_id": durable_id}
        )

    def _forget_temporary(self, temp_id: str) -> None:
        # The insert will never land; no handoff is left to reconcile
        self._dirty_temporary.discard(temp_id)
        self._discarded_temporary.discard(temp_id)

    async def _delete_orphan(self, durable_id: str) -> None:
        try:
            await self.store.delete_note(durable_id)
        except Exception as e:
            logger.error(
                "Error deleting discarded note",
                extra={"note_id": durable_id, "error": str(e), "error_type": type(e).__name__},
            )

    # ═══════════════════════════════════════════════════════════
    # COLLECTION HELPERS
    # ═══════════════════════════════════════════════════════════

    def _replace_note(self, updated: Note) -> None:
        self._notes = tuple(updated if note.id == updated.id else note for note in self._notes)

    def _remove_note(self, note_id: str) -> None:
        self._notes = tuple(note for note in self._notes if note.id != note_id)
        if self.view.selected_note_id == note_id:
            self.view.selected_note_id = None
            self.view.is_mobile_list_visible = True

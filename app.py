"""
SmartNotes FastAPI Application

A thin presentation shim over the note engine for a single local session.
Every endpoint forwards one user intent (add, select, edit, trash, restore,
delete, transform, search, view toggle) and returns the resulting state.
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from smartnotes.config import Config
from smartnotes.core.factory import BlobStoreFactory, LLMFactory, NoteStoreFactory
from smartnotes.core.note_store.base import NoteStore
from smartnotes.models import Note, Session, SortOption, UserProfile, ViewMode
from smartnotes.services.note_engine import NoteEngine
from smartnotes.services.profile_service import ProfileService
from smartnotes.services.text_transform import Tone, TransformKind
from smartnotes.utils.exceptions import AuthenticationError, SmartNotesError, ValidationError
from smartnotes.utils.logger import get_logger, setup_logging

# Global engine instance
engine: NoteEngine | None = None
profile_service: ProfileService | None = None
store: NoteStore | None = None
# User-visible notices raised by the engine, drained into the next response
pending_alerts: list[str] = []
logger = get_logger(__name__)


# Pydantic models for API
class UpdateNoteRequest(BaseModel):
    """Request model for editing a note."""

    title: str | None = None
    content: str | None = None


class TransformRequest(BaseModel):
    """Request model for an AI transform."""

    kind: TransformKind
    tone: Tone | None = None


class NoteResponse(BaseModel):
    """A note plus any alerts raised while handling the request."""

    note: Note | None
    alerts: list[str] = Field(default_factory=list)


class NoteListResponse(BaseModel):
    """Projected list for the current view."""

    notes: list[Note]
    view_mode: ViewMode
    search_term: str
    active_note_id: str | None
    alerts: list[str] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    """Outcome of a permanent-delete step."""

    note_id: str | None
    pending: bool
    deleted: bool = False
    alerts: list[str] = Field(default_factory=list)


def build_session(config: Config) -> Session:
    """Build the local session from configuration (anonymous without a user id)."""
    if not config.session.user_id:
        return Session()
    return Session(
        user=UserProfile(
            id=config.session.user_id,
            email=config.session.email,
            name=config.session.name,
        ),
        access_token=config.session.access_token,
    )


def drain_alerts() -> list[str]:
    alerts = list(pending_alerts)
    pending_alerts.clear()
    return alerts


def require_engine() -> NoteEngine:
    if not engine:
        raise HTTPException(status_code=503, detail="Engine not initialized")
    return engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global engine, profile_service, store

    config = Config.from_env()

    setup_logging(
        level=config.logging.level,
        log_to_file=config.logging.log_to_file,
        log_dir=config.logging.log_dir,
        file_rotation=config.logging.file_rotation,
        file_retention=config.logging.file_retention,
        compression=config.logging.compression,
        serialize=config.logging.serialize,
    )

    logger.info("Starting SmartNotes server")
    logger.info(
        f"Configuration: LLM={config.llm.provider}/{config.llm.model}, "
        f"Store={config.store.backend}"
    )

    store = NoteStoreFactory.create(config.store)
    await store.initialize()

    try:
        transforms = LLMFactory.create_transform_service(config.llm, config.engine)
    except ValueError as e:
        logger.warning(f"Text transforms disabled: {e}")
        transforms = None

    engine = NoteEngine(
        store=store,
        session=build_session(config),
        transforms=transforms,
        save_delay=config.engine.save_delay_seconds,
        alert=pending_alerts.append,
    )
    profile_service = ProfileService(BlobStoreFactory.create(config.blob_store))

    await engine.load()
    logger.info("SmartNotes engine initialized")

    yield

    logger.info("Shutting down SmartNotes server")
    await engine.close()
    if transforms is not None:
        await transforms.llm.close()
    await store.close()
    engine = None
    profile_service = None
    store = None
    logger.info("Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title="SmartNotes API",
    description="Note taking with trash/restore, optimistic updates and AI text transforms",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy" if engine else "initializing",
        "engine_initialized": engine is not None,
        "authenticated": bool(engine and engine.session.is_authenticated),
        "pending_saves": len(engine.pending_save_ids) if engine else 0,
    }


# Note endpoints
@app.get("/notes", response_model=NoteListResponse)
async def list_notes(
    view: ViewMode = Query(default=ViewMode.ACTIVE),
    search: str = Query(default=""),
    sort: SortOption = Query(default=SortOption.UPDATED),
):
    """List notes of the requested view, filtered by search term and sorted."""
    current = require_engine()
    current.set_view_mode(view)
    current.set_search_term(search)
    current.set_sort(sort)
    return NoteListResponse(
        notes=current.visible_notes,
        view_mode=current.view.view_mode,
        search_term=current.view.search_term,
        active_note_id=current.view.selected_note_id,
        alerts=drain_alerts(),
    )


@app.post("/notes", response_model=NoteResponse, status_code=201)
async def add_note():
    """Create an empty note; it gets its durable id once the store insert completes."""
    current = require_engine()
    if not current.session.is_authenticated:
        raise HTTPException(status_code=401, detail="User not authenticated")
    note = current.add_note()
    return NoteResponse(note=note, alerts=drain_alerts())


@app.get("/notes/active", response_model=NoteResponse)
async def get_active_note():
    """Return the note currently open in the editor, if any."""
    current = require_engine()
    return NoteResponse(note=current.active_note, alerts=drain_alerts())


@app.get("/notes/{note_id}", response_model=NoteResponse)
async def get_note(note_id: str):
    current = require_engine()
    note = current.get_note(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteResponse(note=note, alerts=drain_alerts())


@app.patch("/notes/{note_id}", response_model=NoteResponse)
async def update_note(note_id: str, request: UpdateNoteRequest):
    """Apply an edit locally; the store write is debounced."""
    current = require_engine()
    try:
        note = current.update_note(note_id, title=request.title, content=request.content)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message) from e
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteResponse(note=note, alerts=drain_alerts())


@app.post("/notes/{note_id}/select", response_model=NoteResponse)
async def select_note(note_id: str):
    current = require_engine()
    if current.get_note(note_id) is None:
        raise HTTPException(status_code=404, detail="Note not found")
    current.select_note(note_id)
    return NoteResponse(note=current.active_note, alerts=drain_alerts())


@app.post("/notes/{note_id}/trash", response_model=NoteResponse)
async def move_to_trash(note_id: str):
    current = require_engine()
    note = current.move_to_trash(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteResponse(note=note, alerts=drain_alerts())


@app.post("/notes/{note_id}/restore", response_model=NoteResponse)
async def restore_from_trash(note_id: str):
    current = require_engine()
    note = current.restore_from_trash(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteResponse(note=note, alerts=drain_alerts())


@app.post("/notes/{note_id}/transform", response_model=NoteResponse)
async def transform_note(note_id: str, request: TransformRequest):
    """Run an AI transform on the note content and write the result back."""
    current = require_engine()
    if current.transforms is None:
        raise HTTPException(status_code=503, detail="Text transforms are not configured")
    if current.get_note(note_id) is None:
        raise HTTPException(status_code=404, detail="Note not found")
    if request.kind == TransformKind.TONE and request.tone is None:
        raise HTTPException(status_code=422, detail="A tone is required for tone rewrites")

    note = await current.apply_transform(note_id, request.kind, request.tone)
    return NoteResponse(note=note, alerts=drain_alerts())


# Permanent deletion
@app.post("/notes/{note_id}/delete-request", response_model=DeleteResponse)
async def request_permanent_delete(note_id: str):
    """Ask for confirmation before deleting a note forever."""
    current = require_engine()
    if current.get_note(note_id) is None:
        raise HTTPException(status_code=404, detail="Note not found")
    current.request_permanent_delete(note_id)
    confirmation = current.delete_confirmation
    return DeleteResponse(
        note_id=confirmation.note_id, pending=confirmation.is_open, alerts=drain_alerts()
    )


@app.post("/delete/cancel", response_model=DeleteResponse)
async def cancel_permanent_delete():
    current = require_engine()
    current.cancel_permanent_delete()
    return DeleteResponse(note_id=None, pending=False, alerts=drain_alerts())


@app.post("/delete/confirm", response_model=DeleteResponse)
async def confirm_permanent_delete():
    """Delete the pending note; it leaves the collection only if the store delete succeeds."""
    current = require_engine()
    note_id = current.delete_confirmation.note_id
    if note_id is None:
        raise HTTPException(status_code=409, detail="No delete pending confirmation")
    deleted = await current.confirm_permanent_delete()
    return DeleteResponse(
        note_id=note_id,
        pending=current.delete_confirmation.is_open,
        deleted=deleted,
        alerts=drain_alerts(),
    )


# Session endpoints
@app.post("/reload", response_model=NoteListResponse)
async def reload_notes():
    """Re-fetch notes from the store (user-triggered retry after a failed load)."""
    current = require_engine()
    await current.load()
    return NoteListResponse(
        notes=current.visible_notes,
        view_mode=current.view.view_mode,
        search_term=current.view.search_term,
        active_note_id=current.view.selected_note_id,
        alerts=drain_alerts(),
    )


@app.post("/flush")
async def flush_saves() -> dict[str, Any]:
    """Write every pending debounced save now."""
    current = require_engine()
    pending = len(current.pending_save_ids)
    await current.flush()
    return {"flushed": pending}


@app.post("/profile/avatar")
async def upload_avatar(request: Request, filename: str = Query(...)) -> dict[str, Any]:
    """Upload raw image bytes as the user's avatar."""
    current = require_engine()
    if profile_service is None:
        raise HTTPException(status_code=503, detail="Profile service not initialized")

    data = await request.body()
    try:
        profile = await profile_service.upload_avatar(current.session, filename, data)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message) from e
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message) from e
    except SmartNotesError as e:
        raise HTTPException(
            status_code=502,
            detail="Could not upload the image. Check that the avatars bucket exists.",
        ) from e

    return {"avatar_url": profile.avatar_url}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "SmartNotes API",
        "version": "1.0.0",
        "description": "Note taking with trash/restore, optimistic updates and AI text transforms",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")

"""
Shared test fixtures for all test modules.
"""

from typing import Any

import pytest

from smartnotes.models import Session, UserProfile
from smartnotes.services.note_engine import NoteEngine
from tests.fakes import TEST_SAVE_DELAY, AlertRecorder, FakeNoteStore


@pytest.fixture
def user() -> UserProfile:
    return UserProfile(id="user_1", email="ana@example.com", name="Ana Souza")


@pytest.fixture
def session(user) -> Session:
    return Session(user=user, access_token="token-123")


@pytest.fixture
def store_rows() -> list[dict[str, Any]]:
    """Three notes of user_1 (one trashed) plus one of another user."""
    return [
        {
            "id": "n1",
            "user_id": "user_1",
            "title": "Groceries",
            "content": "milk, eggs",
            "updated_at": "2024-05-01T10:00:00+00:00",
            "is_deleted": False,
        },
        {
            "id": "n2",
            "user_id": "user_1",
            "title": "Ideas",
            "content": "Write a blog post",
            "updated_at": "2024-05-02T10:00:00+00:00",
            "is_deleted": None,
        },
        {
            "id": "n3",
            "user_id": "user_1",
            "title": "Old plan",
            "content": None,
            "updated_at": "2024-04-01T10:00:00+00:00",
            "is_deleted": True,
        },
        {
            "id": "other",
            "user_id": "user_2",
            "title": "Not mine",
            "content": "",
            "updated_at": "2024-05-03T10:00:00+00:00",
            "is_deleted": False,
        },
    ]


@pytest.fixture
def fake_store(store_rows) -> FakeNoteStore:
    return FakeNoteStore(store_rows)


@pytest.fixture
def alerts() -> AlertRecorder:
    return AlertRecorder()


@pytest.fixture
async def engine(fake_store, session, alerts):
    """Engine bound to the fake store with a short debounce window."""
    engine = NoteEngine(
        store=fake_store,
        session=session,
        save_delay=TEST_SAVE_DELAY,
        alert=alerts,
    )
    yield engine
    await engine.close()


@pytest.fixture
async def loaded_engine(engine):
    """Engine with user_1's notes loaded."""
    assert await engine.load() is True
    return engine

"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own notes file and README in a temporary
       directory, so tests never touch the working directory's data.

Fixtures (function-scoped):
    ├── notes_path:    Path of a not-yet-existing notes file in tmp_path
    ├── storage:       NoteStorage bound to notes_path
    ├── service:       NoteService over that storage with a fresh IdGenerator
    ├── sample_notes:  Two valid Note records
    ├── docs:          DocsService writing README.md into tmp_path
    └── test_client:   HTTPX AsyncClient talking to the app, with the
                       note and docs services swapped for the fixtures above
"""

import os
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "test"
os.environ["PUBLIC_DIR"] = "nonexistent-public-dir-for-tests"

from notes_api.models.note import Note  # noqa: E402
from notes_api.services.docs_service import DocsService  # noqa: E402
from notes_api.services.id_service import IdGenerator  # noqa: E402
from notes_api.services.note_service import NoteService, get_note_service  # noqa: E402
from notes_api.services.storage_service import NoteStorage  # noqa: E402


@pytest.fixture
def notes_path(tmp_path):
    """Location of the notes file for one test (created lazily by load)."""
    return tmp_path / "notes.json"


@pytest.fixture
def storage(notes_path):
    return NoteStorage(notes_path)


@pytest.fixture
def service(storage):
    return NoteService(storage=storage, ids=IdGenerator())


@pytest.fixture
def sample_notes():
    """Two notes in creation order, as they would appear in the file."""
    created = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    updated = datetime(2024, 1, 15, 13, 30, 0, 250000, tzinfo=timezone.utc)
    return [
        Note(
            id="1705320000000",
            note_title="Task List",
            note_body="Complete project documentation",
            created_at=created,
            updated_at=created,
        ),
        Note(
            id="1705320000001",
            note_title="Groceries",
            note_body="Milk, eggs",
            created_at=created,
            updated_at=updated,
        ),
    ]


@pytest.fixture
def docs(tmp_path):
    return DocsService(path=tmp_path / "README.md", port=3000)


@pytest_asyncio.fixture
async def test_client(service, docs):
    """
    HTTPX AsyncClient routed directly into the FastAPI app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    from notes_api.main import app

    app.dependency_overrides[get_note_service] = lambda: service
    transport = ASGITransport(app=app)
    with patch("notes_api.routes.docs.docs_service", docs):
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    app.dependency_overrides.clear()

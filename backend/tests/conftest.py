"""
FileNotes: Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own temporary store root, so tests never share
       notes and never touch a real directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── storage_root: Path of a not-yet-created note directory
    ├── note_store: NoteStore with its root and staging dir created
    ├── settings: Settings pointing at storage_root
    └── test_client: HTTPX AsyncClient talking to a fresh app (lifespan run)
"""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from filenotes.config import Settings
from filenotes.main import create_app
from filenotes.services.note_store import NoteStore


@pytest.fixture
def storage_root(tmp_path) -> Path:
    """
    A note directory that does not exist yet, nested two levels deep.

    Why not created: startup must create it, parents included.
    """
    return tmp_path / "data" / "notes"


@pytest_asyncio.fixture
async def note_store(storage_root) -> NoteStore:
    store = NoteStore(storage_root)
    await store.ensure_root()
    return store


@pytest.fixture
def settings(storage_root) -> Settings:
    return Settings(
        host="127.0.0.1",
        port=8080,
        storage_root=str(storage_root),
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    ASGITransport does not send lifespan events, so the lifespan context is
    entered here; the store root exists before the first request.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

"""
NoteStore — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own temporary storage directory, and apps are built
       with create_app(settings) over that directory, so tests never share
       state or touch the real filesystem outside tmp_path.

Fixture Hierarchy (all function-scoped):
    ├── storage_dir:  empty temporary notes directory
    ├── settings:     Settings pointing at storage_dir
    ├── note_store:   NoteStore over storage_dir (service-level tests)
    ├── app:          FastAPI app built from settings
    └── test_client:  HTTPX AsyncClient wired to app via ASGITransport
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notestore.config import Settings
from notestore.main import create_app
from notestore.services.note_store import NoteStore


@pytest.fixture
def storage_dir(tmp_path):
    """A fresh, empty notes directory for each test."""
    path = tmp_path / "notes"
    path.mkdir()
    return path


@pytest.fixture
def settings(storage_dir):
    return Settings(host="127.0.0.1", port=8080, storage_dir=storage_dir, log_level="WARNING")


@pytest.fixture
def note_store(storage_dir):
    return NoteStore(storage_dir)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

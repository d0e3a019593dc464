"""
Global pytest fixtures for the Short URL test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide an isolated in-memory MemoryStore for direct testing
    - Provide a ShortUrlManager fixture wired to the store fixture

Why an app factory?
    Using `create_app()` ensures each test gets a fresh store, so ids always
    start at 0 and nothing leaks between tests.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from shorturl.config import Settings
from shorturl.manager.shortener import ShortUrlManager
from shorturl.storage.storage import MemoryStore


@pytest.fixture
def store() -> MemoryStore:
    """Provide a fresh in-memory store."""
    return MemoryStore()


@pytest.fixture
def manager(store: MemoryStore) -> ShortUrlManager:
    """Provide a ShortUrlManager (validation on) wired to the store fixture."""
    return ShortUrlManager(store=store)


@pytest.fixture
def app(store: MemoryStore):
    """App built with default settings around the store fixture."""
    return create_app(settings=Settings(), store=store)


@pytest.fixture
def client(app) -> TestClient:
    """
    Provide a TestClient that does not follow redirects, so 302 responses
    can be inspected directly.
    """
    return TestClient(app, follow_redirects=False)

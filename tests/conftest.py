"""Shared pytest fixtures for contentmodel tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from contentmodel import MemoryStore, init_contentmodel
from contentmodel.events import unregister


@pytest.fixture
def store() -> MemoryStore:
    """Return an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def sql_store():
    """Return a SqlContentStore over a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield init_contentmodel(engine=engine)
    engine.dispose()


@pytest.fixture
def people(store: MemoryStore) -> MemoryStore:
    """Store seeded with a few Article rows and one Page row."""
    store.create("Article", {"name": "alice", "status": "active", "rank": 3})
    store.create("Article", {"name": "bob", "status": "active", "rank": 1})
    store.create("Article", {"name": "alice", "status": "retired", "rank": 2})
    store.create("Page", {"name": "alice", "status": "active"})
    return store


@pytest.fixture
def handlers():
    """Collect handlers registered during a test and drop them afterwards."""
    registered = []
    yield registered
    for handler in registered:
        unregister(handler)

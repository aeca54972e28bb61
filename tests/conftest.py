"""Pytest fixtures and configuration for taskmirror tests."""

import pytest
import pytest_asyncio
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskmirror.auth.session import SessionProvider
from taskmirror.database.database import Base
from taskmirror.database import models  # noqa: F401
from taskmirror.database.record_store import SqlRecordStore
from taskmirror.models.task import Task
from taskmirror.models.user import User
from taskmirror.notifications import BufferedNotifier
from taskmirror.store.task_store import TaskStore

from .fakes import FakeRecordStore


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def user():
    return User(id="user-1", email="one@example.com", name="User One")


@pytest.fixture
def other_user():
    return User(id="user-2", email="two@example.com", name="User Two")


@pytest.fixture
def record_store():
    return FakeRecordStore()


@pytest.fixture
def notifier():
    return BufferedNotifier()


@pytest.fixture
def session():
    return SessionProvider()


@pytest.fixture
def store(record_store, notifier):
    """A TaskStore that has not observed any session yet."""
    return TaskStore(record_store, notifier=notifier)


@pytest_asyncio.fixture
async def signed_in_store(store, session, user, notifier):
    """A TaskStore bound to a session with ``user`` signed in and loaded."""
    await store.bind(session)
    await session.login(user)
    notifier.drain()
    return store


@pytest.fixture
def db_session_factory():
    """Session factory over a fresh in-memory SQLite database.

    StaticPool keeps a single connection so every session (and worker thread)
    sees the same database.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sql_record_store(db_session_factory):
    return SqlRecordStore(db_session_factory)


@pytest.fixture
def sample_task_base(user):
    """Base task data; override keys per test."""
    return {
        "id": "task-1",
        "owner_id": user.id,
        "title": "Test Task",
        "description": None,
        "completed": False,
        "category": None,
        "priority": "medium",
        "due_date": None,
        "created_at": datetime(2026, 10, 19, 9, 0, 0),
        "is_deleted": False,
    }


@pytest.fixture
def make_task(sample_task_base):
    """Factory building Task objects from the base data."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {**sample_task_base, "id": f"task-{counter['n']}", **overrides}
        return Task(**data)

    return _make

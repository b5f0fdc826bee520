"""
Pytest configuration and fixtures for Newsroom API tests.
"""
import os

# Settings are read once at import time
os.environ["NEWSROOM_DATABASE_URL"] = "sqlite:///:memory:"
os.environ["NEWSROOM_SCHEDULER_ENABLED"] = "false"

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from newsroom.database import Base
from newsroom.deps import get_store
from newsroom.main import app
from newsroom.models import ArticleStatus, Role, User
from newsroom.store import SqlArticleStore
from newsroom.workflow.states import Actor

IST = ZoneInfo("Asia/Kolkata")

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db):
    return TestingSessionLocal


@pytest.fixture(scope="function")
def store(db):
    """Article store bound to the test database, also used by the app."""
    test_store = SqlArticleStore(TestingSessionLocal)
    app.dependency_overrides[get_store] = lambda: test_store
    yield test_store
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(store):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


def _create_user(db, username: str, role: Role) -> User:
    user = User(username=username, email=f"{username}@example.com", role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def reporter(db):
    return _create_user(db, "reporter", Role.REPORTER)


@pytest.fixture(scope="function")
def other_reporter(db):
    return _create_user(db, "other_reporter", Role.REPORTER)


@pytest.fixture(scope="function")
def editor(db):
    return _create_user(db, "editor", Role.EDITOR)


@pytest.fixture
def reporter_actor(reporter):
    return Actor(user_id=reporter.id, role=Role.REPORTER)


@pytest.fixture
def other_reporter_actor(other_reporter):
    return Actor(user_id=other_reporter.id, role=Role.REPORTER)


@pytest.fixture
def editor_actor(editor):
    return Actor(user_id=editor.id, role=Role.EDITOR)


def headers_for(user: User) -> dict:
    return {"X-User-Id": str(user.id), "X-User-Role": user.role}


@pytest.fixture
def reporter_headers(reporter):
    return headers_for(reporter)


@pytest.fixture
def other_reporter_headers(other_reporter):
    return headers_for(other_reporter)


@pytest.fixture
def editor_headers(editor):
    return headers_for(editor)


@pytest.fixture
def now():
    """2025-01-01 09:01 in Asia/Kolkata."""
    return datetime(2025, 1, 1, 9, 1, tzinfo=IST)


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def make_article(store, reporter):
    """Insert an article straight through the store."""
    def _make(**values):
        values.setdefault("title", "Test article")
        values.setdefault("content", "Body")
        values.setdefault("status", ArticleStatus.DRAFT.value)
        values.setdefault("reporter_id", reporter.id)
        values.setdefault("scheduled_posts", [])
        return store.create(values)

    return _make


@pytest.fixture
def entry():
    """Builds a persisted schedule entry record."""
    def _entry(platform: str, date: str = "2025-01-01", time: str = "09:00", posted: bool = False) -> dict:
        return {"platform": platform, "date": date, "time": time, "isPosted": posted}

    return _entry

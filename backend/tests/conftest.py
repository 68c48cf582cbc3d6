"""Shared pytest fixtures backed by a file-based SQLite database per test.

A file (rather than ``:memory:``) database is used because the ownership
validator opens its own sessions and must see rows committed by others.
"""

import logging
import os
import tempfile
from datetime import timedelta
from uuid import uuid4

# must be set before the application settings are first imported
os.environ["NOTEFUL_SKIP_LIFESPAN_DB"] = "1"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "noteful-test-logs"))
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from src.noteful.core.models import BaseModel, Folder, Note, Tag, User  # noqa: E402
from src.noteful.database import get_db_session  # noqa: E402
from src.noteful.main import app  # noqa: E402
from src.noteful.security import Identity, TokenConfig, TokenService, get_token_service  # noqa: E402
from src.noteful.security.password import hash_password  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_SECRET = "test-secret-key"


@pytest.fixture
async def test_engine(tmp_path):
    """Fresh SQLite database file with the full schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'noteful.db'}", echo=False)

    # SQLite only enforces foreign keys (CASCADE / SET NULL) when asked to
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def token_service():
    return TokenService(TokenConfig(secret_key=TEST_SECRET, ttl=timedelta(hours=1)))


@pytest.fixture
def test_app(session_factory, token_service):
    """FastAPI app wired to the test database and token service."""

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Async client calling the app in-process."""
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(test_session):
    """Factory inserting a user with a hashed password."""

    async def _make_user(username=None, password="Password123", full_name="Test User"):
        user = User(
            username=username or f"user_{uuid4().hex[:8]}",
            password_hash=hash_password(password),
            full_name=full_name,
        )
        test_session.add(user)
        await test_session.commit()
        return user

    return _make_user


@pytest.fixture
async def test_user(make_user):
    return await make_user(username="alice", full_name="Alice Example")


@pytest.fixture
async def other_user(make_user):
    return await make_user(username="mallory", full_name="Mallory Other")


@pytest.fixture
def make_folder(test_session):
    async def _make_folder(owner, name="Inbox"):
        folder = Folder(name=name, owner_id=owner.id)
        test_session.add(folder)
        await test_session.commit()
        return folder

    return _make_folder


@pytest.fixture
def make_tag(test_session):
    async def _make_tag(owner, name="work"):
        tag = Tag(name=name, owner_id=owner.id)
        test_session.add(tag)
        await test_session.commit()
        return tag

    return _make_tag


@pytest.fixture
def make_note(test_session):
    async def _make_note(owner, title="Test Note", content="Some content", folder=None, tags=()):
        note = Note(
            title=title,
            content=content,
            owner_id=owner.id,
            folder_id=folder.id if folder else None,
        )
        note.tags = list(tags)
        test_session.add(note)
        await test_session.commit()
        return note

    return _make_note


def bearer(token_service, user):
    """Authorization header for ``user``."""
    identity = Identity(id=user.id, username=user.username, full_name=user.full_name)
    return {"Authorization": f"Bearer {token_service.issue(identity).token}"}


@pytest.fixture
def headers_for(token_service):
    return lambda user: bearer(token_service, user)


@pytest.fixture
def auth_headers(headers_for, test_user):
    return headers_for(test_user)


@pytest.fixture
def other_headers(headers_for, other_user):
    return headers_for(other_user)

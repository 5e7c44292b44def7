"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

The environment below is applied before any ``app`` module is imported, so
the application settings point at an in-memory SQLite database and at
throwaway upload/storage directories.
"""

import os
import tempfile
import uuid
from collections.abc import AsyncGenerator, Generator
from types import SimpleNamespace

_TEST_ROOT = tempfile.mkdtemp(prefix="films-api-tests-")

os.environ["FILMS_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_DIR"] = os.path.join(_TEST_ROOT, "logs")
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["STORAGE_DIR"] = os.path.join(_TEST_ROOT, "storage")
os.environ["STORAGE_PUBLIC_URL"] = "http://testserver/storage"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from app.db import build_engine, build_sessionmaker, init_db  # noqa: E402
from app.schemas import TokenPayload  # noqa: E402
from app.services.auth import TokenService  # noqa: E402


@pytest.fixture
def app() -> FastAPI:
    """
    Create a new application instance for each test.
    """
    from main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client running the application's lifespan (schema creation on
    startup, engine disposal on shutdown). Disposing the engine discards the
    in-memory database, so every test starts from empty tables.

    Server errors are returned as responses so the 500 mapping can be checked.
    """
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    Session factory over a private in-memory database with every table created.
    """
    engine = build_engine("sqlite+aiosqlite://")
    await init_db(engine)
    try:
        yield build_sessionmaker(engine)
    finally:
        await engine.dispose()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService("test-secret")


@pytest.fixture
def token_payload() -> TokenPayload:
    return TokenPayload(id=uuid.uuid4(), userName="alice")


def make_user(user_id=None, user_name="alice", films=None) -> SimpleNamespace:
    """Stand-in for a stored user record."""
    return SimpleNamespace(
        id=user_id or uuid.uuid4(),
        user_name=user_name,
        password="hashed",
        films=list(films or []),
    )


def make_film(film_id=None, owner=None, comments=None) -> SimpleNamespace:
    """Stand-in for a stored film record."""
    return SimpleNamespace(
        id=film_id or uuid.uuid4(),
        title="Alien",
        genre="Horror",
        image=None,
        owner=owner or make_user(),
        comments=list(comments or []),
    )

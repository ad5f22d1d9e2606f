# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so the test environment must be in
# place before anything from bloglist is imported
os.environ["ENVIRONMENT"] = "test"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_TO_FILE"] = "false"

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from bloglist.configs import settings  # noqa: E402
from bloglist.db import Database  # noqa: E402
from bloglist.main import create_app  # noqa: E402
from bloglist.managers.token_manager import JWTTokenCodec  # noqa: E402


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """Fresh in-memory database with all tables created."""
    db = Database(settings.TEST_DATABASE_URL, settings)
    await db.init()
    yield db
    await db.drop_all()
    await db.close()


@pytest.fixture
def token_codec() -> JWTTokenCodec:
    """Codec shared by the app under test and the token fixtures."""
    return JWTTokenCodec.from_settings(settings)


@pytest.fixture
def app(database: Database, token_codec: JWTTokenCodec) -> FastAPI:
    """Application wired to the test database."""
    return create_app(database=database, token_codec=token_codec)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac

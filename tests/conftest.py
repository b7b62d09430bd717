"""
DevConnect Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every API test gets a freshly built application backed by its own
       in-memory SQLite database, plus an HTTPX AsyncClient talking to it
       through ASGITransport (no server, no PostgreSQL).

Fixture Hierarchy:
    test_settings      Settings for an isolated test app
    github_transport   httpx.MockTransport standing in for api.github.com
    app                FastAPI app with tables created
    test_client        HTTPX AsyncClient bound to `app`
    mock_db_session    AsyncMock session for service-level unit tests
    register_user      helper: register an account, return its token
"""

import os
import uuid
from typing import Awaitable, Callable, Dict

# Override settings for testing BEFORE any app imports: devconnect.main
# builds a default application at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from devconnect.config import Settings
from devconnect.main import create_app
from devconnect.services.github_service import GithubService


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt_secret="test-secret-not-for-production",
        bcrypt_rounds=4,  # fastest allowed; hashing strength is irrelevant in tests
        rate_limit_requests=10_000,
        retry_max_attempts=2,
        retry_min_wait=0,
        retry_max_wait=1,
        log_level="WARNING",
    )


@pytest.fixture
def github_responses() -> Dict[str, httpx.Response]:
    """Map of GitHub username → canned response; tests add entries."""
    return {}


@pytest.fixture
def github_transport(github_responses) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        parts = request.url.path.strip("/").split("/")
        # /users/{username}/repos
        username = parts[1] if len(parts) == 3 else ""
        return github_responses.get(username, httpx.Response(404, json={"message": "Not Found"}))

    return httpx.MockTransport(handler)


@pytest_asyncio.fixture
async def app(test_settings, github_transport):
    application = create_app(
        test_settings,
        github_service=GithubService(test_settings, transport=github_transport),
    )
    await application.state.database.create_all()
    yield application
    await application.state.github_service.close()
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient configured to talk to the test app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client) -> Callable[..., Awaitable[str]]:
    """
    Returns an async helper that registers an account and returns its token.

        token = await register_user("Alice")
    """

    async def _register(name: str = "Test User", email: str = None, password: str = "secret123") -> str:
        email = email or f"{name.lower().replace(' ', '.')}.{uuid.uuid4().hex[:6]}@example.com"
        response = await test_client.post(
            "/api/users", json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _register


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.get.return_value = post
        await post_service.like(mock_db_session, str(post.id), user_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session

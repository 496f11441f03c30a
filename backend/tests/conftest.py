"""
HairBook Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── settings: Settings pointing at a throwaway SQLite file under tmp_path
    ├── app: application built from `settings`, tables created, engine
    │        disposed afterwards
    ├── test_client: HTTPX AsyncClient wired to `app` through ASGITransport
    ├── register_and_login: factory returning bearer headers for a new user
    └── admin_headers: bearer headers carrying the admin role
"""

import os
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before `app.main` is imported: it builds a module-level app
TEST_JWT_SECRET = "test-jwt-secret-with-enough-bytes-for-hs256"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./hairbook_test.db"
os.environ["JWT_SECRET"] = TEST_JWT_SECRET
os.environ["LOG_LEVEL"] = "WARNING"

from app.config import Settings  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models.user import ADMIN_ROLE  # noqa: E402
from app.services.password_service import PasswordHasher  # noqa: E402

# Lowest cost bcrypt accepts; keeps the suite fast
FAST_BCRYPT_ROUNDS = 4


# ══════════════════════════════════════════════════════════════════════════
# Service-Level Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_login(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
            result = await user_service.login(mock_db_session, ...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def fast_hasher():
    return PasswordHasher(rounds=FAST_BCRYPT_ROUNDS)


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings(tmp_path):
    """Each test gets its own SQLite file, so no state leaks between tests."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'hairbook.db'}",
        jwt_secret=TEST_JWT_SECRET,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings, fast_hasher):
    application = create_app(settings)
    application.state.password_hasher = fast_hasher
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient that talks to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_and_login(test_client):
    """
    Factory: registers a user over HTTP, logs in, returns bearer headers.

    Usage:
        headers = await register_and_login(email="b@example.com")
    """

    async def _register_and_login(
        email: str = "ana@example.com",
        password: str = "pw",
        name: str = "Ana",
        phone: str = "555",
    ) -> dict:
        response = await test_client.post(
            "/api/register",
            json={"name": name, "email": email, "phone": phone, "password": password},
        )
        assert response.status_code == 200, response.text
        response = await test_client.post(
            "/api/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login


@pytest.fixture
def admin_headers(app):
    """Admins are provisioned out of band; a token with the admin role suffices."""
    token = app.state.token_service.issue(uuid4(), ADMIN_ROLE)
    return {"Authorization": f"Bearer {token}"}

"""Shared fixtures for API integration tests.

Uses the module-level ``app`` from ``watch_server.api.main``. The
database verification in the lifespan is patched out and the catalog
application is overridden with one backed by the in-memory SQLite
database from the root conftest.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from watch_server.api.dependencies.rate_limit import get_rate_limiter
from watch_server.api.dependencies.services import get_application
from watch_server.services.catalog import Application

PASSWORD = "Secr3t!pass"
EMAIL = "laura@example.com"

# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "integration"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.integration`` to every test collected here."""
    integration_marker = pytest.mark.integration
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(integration_marker)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def client(application: Application) -> AsyncGenerator[AsyncClient, None]:
    """Provide an ``httpx.AsyncClient`` wired to the real app.

    * ``_verify_database_connection`` is patched to skip DB checks.
    * ``get_application`` is overridden with the SQLite-backed application.
    * The rate limiter starts empty.
    """
    from watch_server.api.main import app

    get_rate_limiter().reset()
    with patch("watch_server.api.main._verify_database_connection"):
        app.dependency_overrides[get_application] = lambda: application
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
        app.dependency_overrides.pop(get_application, None)


async def register(client: AsyncClient, email: str = EMAIL, password: str = PASSWORD) -> int:
    """Register a user through the API and return its id."""
    resp = await client.post("/v1/user", json={"email": email, "password": password})
    assert resp.status_code == 200, f"Registration failed: {resp.text}"
    return resp.json()["payload"]


async def login(client: AsyncClient, email: str = EMAIL, password: str = PASSWORD) -> dict:
    """Login and return the token pair."""
    resp = await client.post("/v1/user/login", json={"email": email, "password": password})
    assert resp.status_code == 200, f"Login failed: {resp.text}"
    return resp.json()["payload"]


@pytest.fixture
async def user_id(client: AsyncClient) -> int:
    """Id of the registered test user."""
    return await register(client)


@pytest.fixture
async def auth_headers(client: AsyncClient, user_id: int) -> dict[str, str]:
    """Login with test credentials and return Authorization headers."""
    tokens = await login(client)
    return {"Authorization": f"Bearer {tokens['access_token']}"}

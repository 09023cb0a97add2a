"""Integration test fixtures — fresh app state, async client, admin auth."""

import os
import tempfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Force test config BEFORE any app imports
os.environ["DEBUG"] = "true"
os.environ["SECRET_KEY"] = "test-secret-key-for-integration-tests"
os.environ["SIMULATE_LATENCY"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEMO_DATA"] = "true"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "ioc_console_test_logs")

import ioc_console.dependencies as dep_mod


def _reset_singletons():
    """Reset module-level singletons so every test sees the seeded demo data."""
    dep_mod._config_instance = None
    dep_mod._repository = None
    dep_mod._identity = None
    dep_mod._refresher = None


@pytest.fixture
def test_app():
    _reset_singletons()
    from ioc_console.main import app

    yield app
    _reset_singletons()


@pytest_asyncio.fixture
async def client(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_headers(client):
    """Bearer header for the demo admin account."""
    resp = await client.post(
        "/api/v1/auth/login",
        json={"username": "admin", "password": "admin123"},
    )
    assert resp.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}

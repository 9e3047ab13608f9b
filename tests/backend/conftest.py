import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from jointhub.core import db as db_module
from jointhub.main import app, rate_limiter


TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    assert await db_module.init_db(generate_schemas=True)


@pytest_asyncio.fixture
async def db():
    """
    Fresh database without an HTTP client, for store-level tests.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(monkeypatch):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    The process-wide rate limiter is reset and widened so ordinary tests never trip it.
    """
    await _init_test_db()
    rate_limiter.reset()
    monkeypatch.setattr(rate_limiter, "max_requests", 10_000)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def register_and_login(client):
    """
    Factory fixture: register a fresh user through the API and return
    (Authorization headers, username).
    """

    async def _register_and_login(username: str | None = None, password: str = "UserPass!23"):
        username = username or f"user_{uuid.uuid4().hex[:6]}"
        resp = await client.post("/api/auth/register", json={"username": username, "password": password})
        assert resp.status_code == 201, resp.text
        resp = await client.post("/api/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}, username

    return _register_and_login

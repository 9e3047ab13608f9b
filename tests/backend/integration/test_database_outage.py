from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise
from tortoise.exceptions import DBConnectionError

from jointhub.core import db as db_module
from jointhub.main import app, rate_limiter
from jointhub.services.chat_store import chat_store


pytestmark = pytest.mark.asyncio


async def test_unreachable_database_is_reported_as_outage(tmp_path, monkeypatch):
    unreachable = f"sqlite://{tmp_path}/missing/nested/db.sqlite3"
    monkeypatch.setitem(db_module.TORTOISE_ORM, "connections", {"default": unreachable})
    monkeypatch.setattr(rate_limiter, "max_requests", 10_000)
    if Tortoise._inited:
        await Tortoise.close_connections()

    assert await db_module.init_db() is False
    assert db_module.is_db_available() is False

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        register = await client.post("/api/auth/register", json={"username": "zed", "password": "Pass#1234"})
        health = await client.get("/healthz")

    assert register.status_code == 503
    assert register.json()["status"] == "DB_DISCONNECTED"
    assert health.json()["database"] == "disconnected"


async def test_database_lost_after_startup_is_reported_as_outage(client, register_and_login):
    headers, _ = await register_and_login()

    with patch.object(chat_store, "history", AsyncMock(side_effect=DBConnectionError("connection refused"))):
        resp = await client.get("/api/chat/history", headers=headers)

    assert resp.status_code == 503
    assert resp.json()["status"] == "DB_DISCONNECTED"


async def test_database_recovers_once_reconnected(client):
    assert db_module.is_db_available() is True
    resp = await client.get("/healthz")
    assert resp.json()["database"] == "connected"

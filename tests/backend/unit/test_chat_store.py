"""
Unit tests for services.chat_store and services.credentials against a real
(in-memory) database.
"""
import uuid

import pytest

from jointhub.core.errors import DuplicateUser, Forbidden, InvalidCredentials, InvalidInput
from jointhub.services import credentials
from jointhub.services.chat_store import ChatLogStore


pytestmark = pytest.mark.asyncio


async def _user_id(username: str = "alice") -> str:
    user = await credentials.register(username, "secret123")
    return str(user.id)


async def test_history_without_log_is_empty(db):
    store = ChatLogStore()
    assert await store.history(await _user_id()) == []


async def test_append_assigns_timestamp_and_keeps_order(db):
    store = ChatLogStore()
    uid = await _user_id()
    await store.append(uid, {"sender": "user", "text": "first", "isImage": False})
    await store.append(uid, {"sender": "assistant", "text": "second", "isImage": False,
                             "timestamp": "2025-01-01T00:00:00Z"})

    history = await store.history(uid)
    assert [m["text"] for m in history] == ["first", "second"]
    assert history[0]["timestamp"].endswith("Z")
    assert history[1]["timestamp"] == "2025-01-01T00:00:00Z"


async def test_append_evicts_oldest_beyond_cap(db):
    store = ChatLogStore(limit=3)
    uid = await _user_id()
    for i in range(1, 6):
        stored = await store.append(uid, {"sender": "user", "text": f"m{i}"})
    assert [m["text"] for m in stored] == ["m3", "m4", "m5"]
    assert [m["text"] for m in await store.history(uid)] == ["m3", "m4", "m5"]


async def test_default_cap_is_100(db):
    store = ChatLogStore()
    uid = await _user_id()
    for i in range(1, 102):
        await store.append(uid, {"sender": "user", "text": f"m{i}"})
    history = await store.history(uid)
    assert len(history) == 100
    assert history[0]["text"] == "m2"
    assert history[-1]["text"] == "m101"


async def test_clear_is_idempotent(db):
    store = ChatLogStore()
    uid = await _user_id()
    await store.clear(uid)
    await store.append(uid, {"sender": "user", "text": "hi"})
    await store.clear(uid)
    await store.clear(uid)
    assert await store.history(uid) == []


async def test_register_duplicate_username(db):
    await credentials.register("bob", "pw1")
    with pytest.raises(DuplicateUser):
        await credentials.register("bob", "pw2")


async def test_register_blank_fields(db):
    with pytest.raises(InvalidInput):
        await credentials.register("", "pw")
    with pytest.raises(InvalidInput):
        await credentials.register("carol", "")


async def test_verify_returns_identity(db):
    user = await credentials.register("dave", "pw")
    identity = await credentials.verify("dave", "pw")
    assert identity.id == str(user.id)
    assert identity.username == "dave"


async def test_verify_failures_are_indistinguishable(db):
    await credentials.register("erin", "pw")
    with pytest.raises(InvalidCredentials) as wrong_password:
        await credentials.verify("erin", "nope")
    with pytest.raises(InvalidCredentials) as unknown_user:
        await credentials.verify("nobody", "pw")
    assert wrong_password.value.to_body() == unknown_user.value.to_body()


async def test_append_for_unknown_user_is_forbidden(db):
    store = ChatLogStore()
    ghost = str(uuid.uuid4())
    with pytest.raises(Forbidden):
        await store.append(ghost, {"sender": "user", "text": "hi", "isImage": False})
    assert await store.history(ghost) == []

import pytest

from jointhub.client.api import ClientError
from jointhub.client.state import ChatMessage


class FakeApi:
    """
    Stand-in for JointHubClient that records calls instead of doing HTTP.
    Set ``text_reply`` / ``image_reply`` / ``history_reply`` to a value or an
    exception; ``save_error`` makes saves fail.
    """

    def __init__(self):
        self.token = None
        self.saved: list[ChatMessage] = []
        self.cleared = 0
        self.text_calls: list[tuple[list, str | None]] = []
        self.image_calls: list[str] = []
        self.text_reply = "Hello from Liz"
        self.image_reply = "aW1n"
        self.history_reply: list[ChatMessage] = []
        self.save_error: Exception | None = None
        self.closed = False

    async def register(self, username, password):
        return "User registered"

    async def login(self, username, password):
        if password != "secret123":
            raise ClientError(401, "Invalid credentials", "AUTH_INVALID_CREDENTIALS")
        self.token = "tok"
        return {"token": "tok", "username": username}

    async def history(self):
        return list(await self._reply(self.history_reply))

    async def save_message(self, message):
        if self.save_error:
            raise self.save_error
        self.saved.append(message)

    async def clear(self):
        self.cleared += 1

    async def _reply(self, value):
        if isinstance(value, Exception):
            raise value
        return value

    async def generate_text(self, contents, system_instruction=None):
        self.text_calls.append((contents, system_instruction))
        return await self._reply(self.text_reply)

    async def generate_image(self, prompt):
        self.image_calls.append(prompt)
        return await self._reply(self.image_reply)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_api():
    return FakeApi()

"""
HTTP client for the JOINT HUB API.
"""
from typing import Any, Dict, List, Optional

import httpx

from .state import ChatMessage


class ClientError(Exception):
    """
    A non-2xx answer from the API.

    ``status_tag`` is the machine-readable ``status`` field of the error body
    (e.g. "DB_DISCONNECTED"), when the server sent one.
    """

    def __init__(self, status_code: int, message: str, status_tag: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.status_tag = status_tag

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_outage(self) -> bool:
        return self.status_code == 503 or self.status_tag == "DB_DISCONNECTED"


class JointHubClient:
    """Thin async wrapper over the REST surface; holds the bearer token once logged in."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        token: Optional[str] = None,
        timeout: float = 90.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self._http = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "JointHubClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        resp = await self._http.request(method, path, json=json, headers=self._headers())
        try:
            body = resp.json()
        except ValueError:
            body = None
        if resp.status_code >= 400:
            if isinstance(body, dict):
                raise ClientError(resp.status_code, str(body.get("error") or resp.reason_phrase), body.get("status"))
            raise ClientError(resp.status_code, resp.text or resp.reason_phrase)
        return body

    # -------- auth --------
    async def register(self, username: str, password: str) -> str:
        body = await self._request("POST", "/api/auth/register", {"username": username, "password": password})
        return body.get("message", "")

    async def login(self, username: str, password: str) -> Dict[str, str]:
        """Log in and keep the returned token for later calls."""
        body = await self._request("POST", "/api/auth/login", {"username": username, "password": password})
        self.token = body["token"]
        return body

    # -------- chat history --------
    async def history(self) -> List[ChatMessage]:
        body = await self._request("GET", "/api/chat/history")
        return [ChatMessage.from_api(m) for m in body or []]

    async def save_message(self, message: ChatMessage) -> None:
        await self._request("POST", "/api/chat/save", {"message": message.to_api()})

    async def clear(self) -> None:
        await self._request("POST", "/api/chat/clear")

    # -------- generation --------
    async def generate_text(self, contents: List[dict], system_instruction: Optional[str] = None) -> Optional[str]:
        """
        Returns:
            The first candidate's text, or None when the answer had none
        """
        payload: Dict[str, Any] = {"contents": contents}
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        body = await self._request("POST", "/api/generate-text", payload)
        try:
            return body["candidates"][0]["content"]["parts"][0]["text"] or None
        except (KeyError, IndexError, TypeError):
            return None

    async def generate_image(self, prompt: str) -> Optional[str]:
        body = await self._request("POST", "/api/generate-image", {"instances": [{"prompt": prompt}]})
        return (body or {}).get("imageBase64")

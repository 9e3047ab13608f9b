"""
Generation Gateway

Proxies the chat client's generation requests to the upstream providers:
1. Text: Gemini generateContent (persona instruction, fixed temperature)
2. Images: OpenAI image generations (one square image, base64 encoded)

Calls are single-shot. Nothing is cached or retried; every provider failure
is raised as UpstreamError with the provider's message.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from ..core.errors import InvalidInput, UpstreamError

logger = logging.getLogger("uvicorn.error")


def _provider_message(resp: httpx.Response) -> str:
    """Best-effort extraction of the provider's own error message."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str):
        return error
    return f"HTTP {resp.status_code}"


class GenerationGateway:
    """Text and image generation through external providers"""

    def __init__(self):
        self.gemini_api_key = settings.gemini_api_key
        self.gemini_api_url = settings.gemini_api_url.rstrip("/")
        self.gemini_model = settings.gemini_model
        self.temperature = settings.text_temperature
        self.default_persona = settings.default_persona

        self.openai_api_key = settings.openai_api_key
        self.image_url = settings.openai_image_url
        self.image_model = settings.image_model
        self.image_size = settings.image_size

        self.timeout = settings.upstream_timeout_seconds

    async def _post(self, url: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, headers=headers, json=payload)
                if resp.status_code >= 400:
                    raise UpstreamError(_provider_message(resp))
                return resp.json()
        except UpstreamError:
            raise
        except httpx.TimeoutException:
            raise UpstreamError("Upstream provider timed out")
        except Exception as e:
            raise UpstreamError(str(e) or type(e).__name__)

    async def generate_text(
        self,
        contents: Optional[List[Dict[str, Any]]],
        system_instruction: Optional[str] = None,
    ) -> str:
        """
        Generate the assistant's reply for a conversation.

        Parameters:
            contents: Gemini-style turns, [{"role": "user", "parts": [{"text": ...}]}, ...]
            system_instruction: Persona override; the configured persona when blank

        Returns:
            Text of the first candidate
        """
        if not contents or not isinstance(contents, list):
            raise InvalidInput("Missing or invalid contents array.")
        if not self.gemini_api_key:
            raise UpstreamError("GEMINI_API_KEY not configured")

        payload = {
            "contents": contents,
            "systemInstruction": {"parts": [{"text": system_instruction or self.default_persona}]},
            "generationConfig": {"temperature": self.temperature},
        }
        url = f"{self.gemini_api_url}/models/{self.gemini_model}:generateContent"
        headers = {"x-goog-api-key": self.gemini_api_key, "Content-Type": "application/json"}

        result = await self._post(url, headers, payload)

        candidates = result.get("candidates") or []
        parts = []
        if candidates and isinstance(candidates[0], dict):
            parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
        if not text:
            logger.warning("[generation] %s returned no text candidate", self.gemini_model)
            raise UpstreamError("No text returned by the model")
        return text

    async def generate_image(self, prompt: Optional[str]) -> str:
        """
        Generate one square image.

        Returns:
            The PNG image, base64 encoded
        """
        if not prompt or not prompt.strip():
            raise InvalidInput("Please provide a description for the image.")
        if not self.openai_api_key:
            raise UpstreamError("OPENAI_API_KEY not configured")

        payload = {
            "model": self.image_model,
            "prompt": prompt,
            "n": 1,
            "size": self.image_size,
            "response_format": "b64_json",
        }
        headers = {"Authorization": f"Bearer {self.openai_api_key}", "Content-Type": "application/json"}

        result = await self._post(self.image_url, headers, payload)

        data = result.get("data") or []
        image = data[0].get("b64_json") if data and isinstance(data[0], dict) else None
        if not image:
            logger.warning("[generation] %s returned no image data", self.image_model)
            raise UpstreamError("No image data returned by the provider")
        return image


# Global singleton
generation_gateway = GenerationGateway()

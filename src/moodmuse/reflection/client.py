"""AI reflection replies via the Gemini generateContent API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from moodmuse.config import Settings
from moodmuse.reflection.timeline import ChatMessage, MessageRole

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a warm, supportive journaling companion. Reflect back what the "
    "user shares, ask one gentle follow-up question, and keep replies under "
    "120 words. You are not a therapist; if the user mentions self-harm, "
    "encourage them to contact local emergency services or a crisis line."
)


class ReflectionError(Exception):
    """Raised when a reflection reply could not be generated."""


class ReflectionClient:
    """Sends a conversation to Gemini and returns the reply text."""

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> ReflectionClient:
        return cls(
            base_url=settings.gemini_base_url,
            model=settings.gemini_model,
            timeout=settings.reflection_timeout_seconds,
        )

    @staticmethod
    def build_payload(history: list[ChatMessage]) -> dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
            "contents": [
                {
                    "role": "user" if m.role == MessageRole.USER else "model",
                    "parts": [{"text": m.content}],
                }
                for m in history
            ],
        }

    async def generate_reply(self, history: list[ChatMessage], api_key: str) -> str:
        """Return the model's reply to ``history``. Raises ReflectionError on any failure."""
        if not api_key:
            raise ReflectionError("No API key configured")
        if not history:
            raise ReflectionError("Conversation is empty")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    params={"key": api_key},
                    json=self.build_payload(history),
                )
        except httpx.HTTPError as exc:
            logger.warning("Reflection request failed: %s", exc)
            raise ReflectionError(f"Reflection service unreachable: {exc}") from exc

        if response.status_code != 200:
            logger.warning("Reflection API error %d: %s", response.status_code, response.text[:200])
            raise ReflectionError(f"Reflection service returned {response.status_code}")

        try:
            parts = response.json()["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts).strip()
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ReflectionError("Unexpected reflection response") from exc
        if not text:
            raise ReflectionError("Reflection service returned an empty reply")
        return text

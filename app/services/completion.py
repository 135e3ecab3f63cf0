"""
Completion service: the single external capability the AI features use.

    complete(system_prompt, conversation, *, max_tokens, temperature, model=None) -> str

`conversation` is a list of {"role": "user"|"assistant", "content": str}.
Any transport / auth / quota / API failure surfaces as ServiceUnavailableError;
callers never see SDK exceptions.

The SDK client is built on first use, so a missing API key surfaces from
complete() after request validation. One service instance is shared per
process; its client is created once and never reconfigured.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from app.core.config import Settings
from app.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

Message = dict[str, Any]


class CompletionService(ABC):
    model: str

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        conversation: list[Message],
        *,
        max_tokens: int,
        temperature: float,
        model: Optional[str] = None,
    ) -> str:
        """Return the model's text reply ("" when it produced none)."""


class OpenAICompletionService(CompletionService):
    """Chat-completions facade over any OpenAI-compatible endpoint."""

    def __init__(self, client: Optional[OpenAI], model: str, settings: Optional[Settings] = None):
        self._client = client
        self._settings = settings
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAICompletionService":
        """Defer client construction to the first complete() call."""
        return cls(client=None, model=settings.OPENAI_MODEL, settings=settings)

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = self._build_client(self._settings)
        return self._client

    @staticmethod
    def _build_client(settings: Settings) -> OpenAI:
        try:
            return OpenAI(
                api_key=settings.OPENAI_API_KEY or None,
                base_url=settings.OPENAI_API_BASE_URL,
                timeout=settings.OPENAI_TIMEOUT_SECONDS,
                max_retries=settings.OPENAI_MAX_RETRIES,
            )
        except OpenAIError as exc:
            # Raised when no API key is configured at all.
            logger.error("Completion client could not be configured: %s", exc)
            raise ServiceUnavailableError(reason="completion client not configured") from exc

    def complete(
        self,
        system_prompt: str,
        conversation: list[Message],
        *,
        max_tokens: int,
        temperature: float,
        model: Optional[str] = None,
    ) -> str:
        client = self.client
        messages = [{"role": "system", "content": system_prompt}, *conversation]
        try:
            resp = client.chat.completions.create(
                model=model or self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as exc:
            logger.warning("Completion call failed: %s", type(exc).__name__, exc_info=exc)
            raise ServiceUnavailableError(reason=type(exc).__name__) from exc

        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""

"""Google Gemini adapter for the generative text provider.

SDK: google-genai (``from google import genai``).
Requires an API key (``MSPRATES_GEMINI_API_KEY``).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog
from google import genai

from msprates.constants import GeminiSettings
from msprates.exceptions import ProviderError

logger = structlog.get_logger()


@runtime_checkable
class TextProvider(Protocol):
    """Anything able to answer a natural-language prompt with raw text."""

    name: str

    async def generate(self, prompt: str) -> str: ...


class GeminiProvider:
    """TextProvider backed by the Gemini API."""

    name = "gemini"

    def __init__(self, api_key: str, model: str | None = None) -> None:
        if not api_key:
            raise ValueError("GeminiProvider requires an API key")
        self.model = model or GeminiSettings().model
        self._client = genai.Client(api_key=api_key)

    async def generate(self, prompt: str) -> str:
        """
        Send ``prompt`` to Gemini and return the answer text.

        Raises:
            ProviderError: On any SDK or transport failure, or an empty answer.
        """
        logger.debug("gemini_request", model=self.model, prompt_chars=len(prompt))

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except Exception as e:
            logger.warning("gemini_request_failed", model=self.model, error=str(e))
            raise ProviderError(self.name, str(e)) from e

        text = (getattr(response, "text", None) or "").strip()
        if not text:
            raise ProviderError(self.name, "empty response")

        logger.info("gemini_response", model=self.model, text_chars=len(text))
        return text


def build_default_provider(settings: GeminiSettings | None = None) -> GeminiProvider | None:
    """Build the Gemini provider from settings, or None when no API key is configured."""
    settings = settings or GeminiSettings()
    if not settings.api_key:
        logger.debug("gemini_not_configured")
        return None
    return GeminiProvider(api_key=settings.api_key, model=settings.model)

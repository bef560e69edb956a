"""OpenAI-backed text generation for investment insights."""

from __future__ import annotations

import logging
from typing import Protocol

from openai import AsyncOpenAI

from app.config import get_settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a financial educator for Indian retail investors. "
    "Explain clearly, avoid jargon and never promise returns."
)


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...


class OpenAITextGenerator:
    """Generate free text from a prompt using the OpenAI Responses API."""

    def __init__(self, api_key: str, model: str, client: AsyncOpenAI | None = None) -> None:
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key)

    async def generate(self, prompt: str) -> str:
        logger.info("Requesting insight from %s (%d prompt chars)", self.model, len(prompt))
        response = await self._client.responses.create(
            model=self.model,
            input=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
        return response.output_text


def get_text_generator() -> TextGenerator | None:
    """Return the configured generator, or ``None`` when no API key is set."""

    settings = get_settings()
    if not settings.openai_api_key:
        return None
    return OpenAITextGenerator(api_key=settings.openai_api_key, model=settings.openai_model)


__all__ = ["OpenAITextGenerator", "TextGenerator", "get_text_generator"]

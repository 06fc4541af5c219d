"""Completion service client."""

import logging
from typing import Protocol

from openai import AsyncOpenAI

from .. import config

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Anything that turns a prompt into free text."""

    async def complete(self, prompt: str) -> str:
        ...


class OpenAICompletionClient:
    """Completion client backed by an OpenAI-compatible chat endpoint.

    The call is awaited as-is: no timeout, retry or cancellation is layered
    on top, so a failure surfaces directly to the caller.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
    ):
        self.model = model or config.COMPLETION_MODEL
        self._api_key = api_key if api_key is not None else config.OPENAI_API_KEY
        self._base_url = base_url if base_url is not None else config.COMPLETION_BASE_URL
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        # Built lazily so a missing key only fails generation requests
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    async def complete(self, prompt: str) -> str:
        """Send a single-turn prompt and return the completion text."""
        logger.info("Requesting completion from %s (%d prompt chars)", self.model, len(prompt))
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        text = response.choices[0].message.content or ""
        logger.info("Received completion (%d chars)", len(text))
        return text

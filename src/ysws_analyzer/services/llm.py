"""
One-shot text completion client.

Hides the difference between the OpenAI API and a local Ollama server,
both reached through the ``openai`` SDK:

* ``openai/<model>`` – api.openai.com, needs ``OPENAI_API_KEY``
* ``ollama/<model>`` – ``OLLAMA_URL``'s OpenAI-compatible ``/v1`` endpoint

``complete()`` returns the reply text or raises ``LLMError``.
"""

from __future__ import annotations

import asyncio

from openai import AsyncOpenAI, OpenAIError

from ..core.config import settings, split_model_id
from ..core.exceptions import ConfigurationError, LLMError
from ..core.logging import LoggerMixin


class LLMClient(LoggerMixin):
    """Async completion client for a single configured model."""

    def __init__(self, model: str | None = None) -> None:
        """
        Args:
            model: Prefixed model identifier (uses settings default if None)
        """
        if model is None:
            self.provider, self.model_name = settings.llm_provider, settings.llm_model_name
        else:
            self.provider, self.model_name = split_model_id(model)
        self.model = f"{self.provider}/{self.model_name}"
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is not None:
            return self._client

        if self.provider == "openai":
            if not settings.openai_api_key:
                raise ConfigurationError(
                    "OPENAI_API_KEY is not set",
                    model=self.model,
                )
            self._client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                timeout=settings.llm_timeout_seconds,
                max_retries=0,
            )
        elif self.provider == "ollama":
            self._client = AsyncOpenAI(
                api_key="ollama",
                base_url=f"{settings.ollama_url.rstrip('/')}/v1",
                timeout=settings.llm_timeout_seconds,
                max_retries=0,
            )
        else:
            raise ConfigurationError(
                "Unknown LLM back-end",
                model=self.model,
            )
        return self._client

    async def complete(self, prompt: str, max_tokens: int | None = None) -> str:
        """
        Send ``prompt`` as a single user message and return the reply text.

        Raises:
            ConfigurationError: If the back-end is not configured
            LLMError: If the call fails, times out or returns no text
        """
        client = self._get_client()
        self.logger.debug(
            "llm_request",
            model=self.model,
            prompt_chars=len(prompt),
        )

        try:
            response = await asyncio.wait_for(
                client.chat.completions.create(
                    model=self.model_name,
                    messages=[{"role": "user", "content": prompt}],
                    max_tokens=max_tokens or settings.llm_max_tokens,
                    temperature=settings.llm_temperature,
                ),
                timeout=settings.llm_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise LLMError(
                "LLM call timed out",
                model=self.model,
                timeout=settings.llm_timeout_seconds,
            ) from e
        except OpenAIError as e:
            raise LLMError(
                "LLM call failed",
                model=self.model,
                error=str(e),
            ) from e

        if not response.choices or not response.choices[0].message.content:
            raise LLMError("LLM returned an empty reply", model=self.model)

        return response.choices[0].message.content.strip()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

from typing import Any

import openai
import structlog

from pr_reviewer.core.exceptions import (
    LLMError,
    LLMProviderUnavailableError,
    LLMRateLimitError,
    LLMResponseError,
)
from pr_reviewer.services.llm.base import CompletionRequest, LLMProvider

logger = structlog.get_logger()


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider."""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 120.0,
        client: Any = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client = client

    @property
    def name(self) -> str:
        return "openai"

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> Any:
        """Lazy initialization of the OpenAI client."""
        if self._client is None:
            if not self.is_available():
                raise LLMProviderUnavailableError("OpenAI API key not configured")

            self._client = openai.AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    def is_available(self) -> bool:
        return self._client is not None or bool(self._api_key)

    async def close(self) -> None:
        """Close the OpenAI client and its connection pool."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def complete(self, request: CompletionRequest) -> str:
        """Send the messages and return the reply text ("{}" when empty)."""
        client = self._get_client()
        sampling = request.sampling

        logger.debug(
            "Sending completion request to OpenAI",
            model=self._model,
            messages=len(request.messages),
        )

        try:
            response = await client.chat.completions.create(
                model=self._model,
                temperature=sampling.temperature,
                top_p=sampling.top_p,
                max_tokens=sampling.max_tokens,
                frequency_penalty=sampling.frequency_penalty,
                presence_penalty=sampling.presence_penalty,
                messages=[{"role": m.role, "content": m.content} for m in request.messages],
            )
        except openai.RateLimitError as e:
            raise LLMRateLimitError(f"OpenAI rate limit exceeded: {e}") from e
        except openai.AuthenticationError as e:
            raise LLMProviderUnavailableError(f"OpenAI authentication failed: {e}") from e
        except openai.OpenAIError as e:
            logger.error("OpenAI API error", error=str(e))
            raise LLMError(f"OpenAI API error: {e}") from e

        if not response.choices:
            raise LLMResponseError("OpenAI returned no choices")

        content: str | None = response.choices[0].message.content
        return content or "{}"

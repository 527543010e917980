from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from pr_reviewer.core.exceptions import (
    LLMError,
    LLMProviderUnavailableError,
    LLMRateLimitError,
    LLMResponseError,
)
from pr_reviewer.services.llm.base import ChatMessage, CompletionRequest, SamplingConfig
from pr_reviewer.services.llm.openai import OpenAIProvider


def _completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _request() -> CompletionRequest:
    return CompletionRequest(
        messages=[
            ChatMessage(role="system", content="Responda em JSON."),
            ChatMessage(role="user", content="Revise este diff."),
        ],
        sampling=SamplingConfig(),
    )


class TestOpenAIProvider:
    """Tests for the OpenAI provider."""

    @pytest.fixture
    def mock_client(self) -> MagicMock:
        client = MagicMock()
        client.chat.completions.create = AsyncMock()
        return client

    @pytest.fixture
    def provider(self, mock_client: MagicMock) -> OpenAIProvider:
        return OpenAIProvider(model="gpt-test", client=mock_client)

    @pytest.mark.asyncio
    async def test_complete_sends_messages_and_sampling(
        self, provider: OpenAIProvider, mock_client: MagicMock
    ) -> None:
        mock_client.chat.completions.create.return_value = _completion('{"reviews": []}')

        text = await provider.complete(_request())

        assert text == '{"reviews": []}'
        mock_client.chat.completions.create.assert_awaited_once_with(
            model="gpt-test",
            temperature=0.1,
            top_p=1.0,
            max_tokens=700,
            frequency_penalty=0.0,
            presence_penalty=0.0,
            messages=[
                {"role": "system", "content": "Responda em JSON."},
                {"role": "user", "content": "Revise este diff."},
            ],
        )

    @pytest.mark.asyncio
    async def test_empty_content_becomes_empty_object(
        self, provider: OpenAIProvider, mock_client: MagicMock
    ) -> None:
        mock_client.chat.completions.create.return_value = _completion(None)

        assert await provider.complete(_request()) == "{}"

    @pytest.mark.asyncio
    async def test_no_choices(self, provider: OpenAIProvider, mock_client: MagicMock) -> None:
        mock_client.chat.completions.create.return_value = SimpleNamespace(choices=[])

        with pytest.raises(LLMResponseError):
            await provider.complete(_request())

    @pytest.mark.asyncio
    async def test_rate_limit_is_mapped(
        self, provider: OpenAIProvider, mock_client: MagicMock
    ) -> None:
        response = httpx.Response(
            429, request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )
        mock_client.chat.completions.create.side_effect = openai.RateLimitError(
            "Rate limit reached", response=response, body=None
        )

        with pytest.raises(LLMRateLimitError):
            await provider.complete(_request())

    @pytest.mark.asyncio
    async def test_connection_error_is_mapped(
        self, provider: OpenAIProvider, mock_client: MagicMock
    ) -> None:
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )

        with pytest.raises(LLMError):
            await provider.complete(_request())

    def test_unavailable_without_key(self) -> None:
        provider = OpenAIProvider(model="gpt-test")

        assert provider.is_available() is False
        with pytest.raises(LLMProviderUnavailableError):
            provider._get_client()

    def test_lazy_client_creation(self) -> None:
        provider = OpenAIProvider(model="gpt-test", api_key="sk-test")

        client = provider._get_client()

        assert isinstance(client, openai.AsyncOpenAI)
        assert provider._get_client() is client
        assert provider.name == "openai"
        assert provider.model == "gpt-test"

    @pytest.mark.asyncio
    async def test_close_releases_client(
        self, provider: OpenAIProvider, mock_client: MagicMock
    ) -> None:
        mock_client.close = AsyncMock()

        await provider.close()

        mock_client.close.assert_awaited_once()
        assert provider.is_available() is False

    @pytest.mark.asyncio
    async def test_close_without_client_is_a_no_op(self) -> None:
        provider = OpenAIProvider(model="gpt-test", api_key="sk-test")

        await provider.close()

        assert provider.is_available() is True

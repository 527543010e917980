"""Test doubles for the LLM provider."""

from pr_reviewer.services.llm.base import CompletionRequest, LLMProvider


class FakeLLMProvider(LLMProvider):
    """LLM provider returning scripted replies in call order."""

    def __init__(self, replies: list[str | Exception] | None = None) -> None:
        self.replies = list(replies or [])
        self.requests: list[CompletionRequest] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def model(self) -> str:
        return "fake-model"

    def is_available(self) -> bool:
        return True

    async def complete(self, request: CompletionRequest) -> str:
        self.requests.append(request)
        if not self.replies:
            return '{"reviews": []}'
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

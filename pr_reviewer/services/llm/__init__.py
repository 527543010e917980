from pr_reviewer.services.llm.base import (
    ChatMessage,
    CompletionRequest,
    LLMProvider,
    SamplingConfig,
)
from pr_reviewer.services.llm.openai import OpenAIProvider

__all__ = [
    "ChatMessage",
    "CompletionRequest",
    "LLMProvider",
    "OpenAIProvider",
    "SamplingConfig",
]

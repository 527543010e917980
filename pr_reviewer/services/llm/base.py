from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class ChatMessage:
    """A single role-tagged message in a chat completion request."""

    role: Literal["system", "user", "assistant"]
    content: str


@dataclass(frozen=True)
class SamplingConfig:
    """Sampling parameters for a completion.

    Defaults keep responses short and close to deterministic.
    """

    temperature: float = 0.1
    top_p: float = 1.0
    max_tokens: int = 700
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0


@dataclass
class CompletionRequest:
    """Request for a chat completion."""

    messages: list[ChatMessage]
    sampling: SamplingConfig = field(default_factory=SamplingConfig)


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier."""
        pass

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> str:
        """Return the raw text of the model's reply."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is configured and available."""
        pass

    async def close(self) -> None:
        """Release any underlying client resources."""
        pass

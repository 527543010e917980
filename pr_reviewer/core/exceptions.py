from typing import Any


class PRReviewerError(Exception):
    """Base exception for pr-reviewer."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class GitHubError(PRReviewerError):
    """Errors related to GitHub API interactions."""

    pass


class GitHubAuthenticationError(GitHubError):
    """GitHub authentication failed."""

    pass


class GitHubRateLimitError(GitHubError):
    """GitHub API rate limit exceeded."""

    def __init__(self, reset_at: int, message: str = "Rate limit exceeded") -> None:
        self.reset_at = reset_at
        super().__init__(message, {"reset_at": reset_at})


class GitHubNotFoundError(GitHubError):
    """Requested GitHub resource not found."""

    pass


class EventError(PRReviewerError):
    """Errors related to the triggering pull request event."""

    pass


class UnsupportedEventError(EventError):
    """The event action is not one we review."""

    def __init__(self, action: str | None) -> None:
        self.action = action
        super().__init__(f"Unsupported event action: {action}", {"action": action})


class InvalidEventError(EventError):
    """The event payload is missing or malformed."""

    pass


class LLMError(PRReviewerError):
    """Errors related to LLM interactions."""

    pass


class LLMProviderUnavailableError(LLMError):
    """LLM provider is not available or configured."""

    pass


class LLMRateLimitError(LLMError):
    """LLM provider rate limit exceeded."""

    pass


class LLMResponseError(LLMError):
    """The LLM returned no usable completion."""

    pass


class ReviewResponseDecodeError(PRReviewerError):
    """Model output could not be decoded into review findings."""

    pass


class ConfigurationError(PRReviewerError):
    """Invalid or missing configuration."""

    pass

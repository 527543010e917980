from pr_reviewer.services.github.client import GitHubClient
from pr_reviewer.services.github.events import load_event
from pr_reviewer.services.github.models import (
    PullRequestContext,
    PullRequestEvent,
    Review,
    ReviewComment,
)

__all__ = [
    "GitHubClient",
    "PullRequestContext",
    "PullRequestEvent",
    "Review",
    "ReviewComment",
    "load_event",
]

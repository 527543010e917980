"""Acquisition of the diff to review, depending on the event action."""

import structlog

from pr_reviewer.core.exceptions import InvalidEventError, UnsupportedEventError
from pr_reviewer.services.github.client import GitHubClient
from pr_reviewer.services.github.models import PullRequestEvent

logger = structlog.get_logger()

SUPPORTED_ACTIONS = ("opened", "synchronize")


def ensure_supported(event: PullRequestEvent) -> None:
    """Raise :class:`UnsupportedEventError` for actions we do not review.

    A supported action without a pull request number is an
    :class:`InvalidEventError`.
    """
    if event.action not in SUPPORTED_ACTIONS:
        raise UnsupportedEventError(event.action)
    if event.number is None:
        raise InvalidEventError(
            f"{event.action} event without a pull request number",
            details={"action": event.action},
        )


class DiffAcquirer:
    """Fetches the full PR diff on open and only the pushed delta on synchronize."""

    def __init__(self, github_client: GitHubClient) -> None:
        self.github = github_client

    async def acquire(self, event: PullRequestEvent) -> str | None:
        """Return the raw unified diff, or ``None`` when there is nothing to review."""
        ensure_supported(event)

        if event.action == "opened":
            diff = await self.github.get_pull_request_diff(event.owner, event.repo, event.number)
        else:
            if not event.before or not event.after:
                raise InvalidEventError(
                    "synchronize event without before/after commits",
                    details={"before": event.before, "after": event.after},
                )
            logger.info("Fetching pushed changes", base=event.before, head=event.after)
            diff = await self.github.compare_commits(
                event.owner,
                event.repo,
                base=event.before,
                head=event.after,
            )

        if not diff or not diff.strip():
            return None
        return diff

"""Loading of the pull request event that triggered the run."""

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from pr_reviewer.core.exceptions import InvalidEventError
from pr_reviewer.services.github.models import PullRequestEvent

logger = structlog.get_logger()


def load_event(path: str | Path | None) -> PullRequestEvent:
    """Read and validate the event payload written by the Actions runner."""
    if not path:
        raise InvalidEventError("No event payload path configured (GITHUB_EVENT_PATH)")

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidEventError(f"Cannot read event payload: {e}", {"path": str(path)}) from e

    try:
        event = PullRequestEvent.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise InvalidEventError(f"Malformed event payload: {e}", {"path": str(path)}) from e

    logger.debug(
        "Loaded event payload",
        action=event.action,
        owner=event.owner,
        repo=event.repo,
        pr_number=event.number,
    )
    return event

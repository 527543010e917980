"""Command line entry point: review the pull request of one Actions event."""

import argparse
import asyncio
import sys
from collections.abc import Sequence

import structlog
from pydantic import ValidationError

from pr_reviewer.core.config import Settings, get_settings
from pr_reviewer.core.exceptions import ConfigurationError
from pr_reviewer.core.logging import configure_logging
from pr_reviewer.services.github.events import load_event
from pr_reviewer.services.review.pipeline import PipelineResult, ReviewPipeline

logger = structlog.get_logger()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pr-reviewer",
        description="Post LLM review comments on the hunks of a pull request.",
    )
    parser.add_argument(
        "--event-path",
        help="Path to the event payload JSON (defaults to $GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the comments instead of posting a review",
    )
    return parser.parse_args(argv)


def load_settings() -> Settings:
    """Load settings, reporting missing or invalid inputs by name."""
    try:
        return get_settings()
    except ValidationError as e:
        fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}",
            details={"fields": fields},
        ) from e


async def run(argv: Sequence[str] | None = None) -> PipelineResult:
    args = parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format)

    event = load_event(args.event_path or settings.github_event_path)

    pipeline = ReviewPipeline(settings=settings)
    try:
        result = await pipeline.execute(event, post_review=not args.dry_run)
    finally:
        await pipeline.close()

    logger.info(
        "Review run finished",
        status=result.status,
        pr_number=result.pr_number,
        files_reviewed=result.files_reviewed,
        hunks_reviewed=result.hunks_reviewed,
        comments=result.total_comments,
        review_posted=result.review_posted,
    )
    return result


def main(argv: Sequence[str] | None = None) -> None:
    try:
        asyncio.run(run(argv))
    except Exception as e:
        logger.exception("Review run failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Main review pipeline orchestration."""

import asyncio
from dataclasses import dataclass, field
from typing import Literal

import structlog

from pr_reviewer.core.config import Settings, get_settings
from pr_reviewer.core.exceptions import UnsupportedEventError
from pr_reviewer.services.github.client import GitHubClient
from pr_reviewer.services.github.models import (
    PullRequestContext,
    PullRequestEvent,
    Review,
    ReviewComment,
)
from pr_reviewer.services.llm.base import LLMProvider, SamplingConfig
from pr_reviewer.services.llm.openai import OpenAIProvider
from pr_reviewer.services.review.assembler import LinePolicy, assemble_comments
from pr_reviewer.services.review.diff_parser import DiffParser, FileDiff, Hunk
from pr_reviewer.services.review.diff_source import DiffAcquirer, ensure_supported
from pr_reviewer.services.review.hunk_reviewer import HunkReviewer
from pr_reviewer.services.review.path_filter import PathFilter

logger = structlog.get_logger()

PipelineStatus = Literal[
    "skipped_unsupported_event",
    "skipped_empty_diff",
    "no_comments",
    "posted",
    "dry_run",
]


@dataclass
class PipelineResult:
    """Result of a review pipeline execution."""

    status: PipelineStatus
    pr_number: int | None
    files_reviewed: int = 0
    hunks_reviewed: int = 0
    total_comments: int = 0
    review_posted: bool = False
    github_review_id: int | None = None
    comments: list[ReviewComment] = field(default_factory=list)


class ReviewPipeline:
    """Orchestrates the code review process for one pull request event."""

    def __init__(
        self,
        github_client: GitHubClient | None = None,
        llm_provider: LLMProvider | None = None,
        diff_parser: DiffParser | None = None,
        path_filter: PathFilter | None = None,
        hunk_reviewer: HunkReviewer | None = None,
        line_policy: LinePolicy | None = None,
        max_concurrent_reviews: int | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()

        self.github = github_client or GitHubClient(
            token=settings.github_token.get_secret_value(),
            base_url=settings.github_api_url,
        )
        self.llm = llm_provider or OpenAIProvider(
            model=settings.openai_api_model,
            api_key=settings.openai_api_key.get_secret_value(),
            base_url=settings.openai_base_url,
            timeout=settings.llm_timeout_seconds,
        )
        self.diff_parser = diff_parser or DiffParser()
        self.path_filter = path_filter or PathFilter.from_string(settings.exclude)
        self.hunk_reviewer = hunk_reviewer or HunkReviewer(
            llm=self.llm,
            sampling=SamplingConfig(
                temperature=settings.llm_temperature,
                top_p=settings.llm_top_p,
                max_tokens=settings.llm_max_tokens,
            ),
            language=settings.review_language,
        )
        self.diff_acquirer = DiffAcquirer(self.github)
        self.event_name = settings.github_event_name
        self.line_policy: LinePolicy = line_policy or settings.comment_line_policy
        self.max_concurrent_reviews = max(
            1, max_concurrent_reviews or settings.max_concurrent_reviews
        )

    async def execute(
        self,
        event: PullRequestEvent,
        post_review: bool = True,
    ) -> PipelineResult:
        """
        Execute the full review pipeline for a pull request event.

        Args:
            event: The pull request event that triggered the run.
            post_review: Whether to post the review to GitHub.

        Returns:
            PipelineResult with review details.
        """
        log = logger.bind(owner=event.owner, repo=event.repo, pr_number=event.number)

        # 1. Route on the event action before touching any API
        try:
            ensure_supported(event)
        except UnsupportedEventError as e:
            log.info(
                "Unsupported event, nothing to do",
                event_name=self.event_name,
                action=e.action,
            )
            return PipelineResult(status="skipped_unsupported_event", pr_number=event.number)

        log.info("Starting review pipeline", action=event.action)

        # 2. Fetch PR details
        context = await self.github.get_pull_request(event.owner, event.repo, event.number)
        log.info("Fetched PR", title=context.title)

        # 3. Fetch diff
        diff = await self.diff_acquirer.acquire(event)
        if diff is None:
            log.info("No diff found")
            return PipelineResult(status="skipped_empty_diff", pr_number=event.number)

        # 4. Parse, drop deleted files and apply exclusions
        file_diffs = self.diff_parser.parse(diff)
        reviewable = [f for f in file_diffs if not f.is_deleted]
        reviewable = self.path_filter.filter(reviewable)
        log.info(
            "Parsed diff",
            files=len(file_diffs),
            reviewable=len(reviewable),
            additions=sum(f.additions for f in reviewable),
            deletions=sum(f.deletions for f in reviewable),
        )

        # 5. Review each hunk
        comments = await self.review_files(reviewable, context)
        hunks_reviewed = sum(len(f.hunks) for f in reviewable)

        result = PipelineResult(
            status="no_comments",
            pr_number=event.number,
            files_reviewed=len(reviewable),
            hunks_reviewed=hunks_reviewed,
            total_comments=len(comments),
            comments=comments,
        )

        # 6. Post review to GitHub
        if not comments:
            log.info("No review comments produced")
            return result

        if not post_review:
            result.status = "dry_run"
            for comment in comments:
                log.info("Would comment", path=comment.path, line=comment.line, body=comment.body)
            return result

        response = await self.github.create_review(
            event.owner,
            event.repo,
            event.number,
            Review(event="COMMENT", comments=comments),
        )
        result.status = "posted"
        result.review_posted = True
        result.github_review_id = response.get("id")
        log.info("Posted review to GitHub", review_id=result.github_review_id)

        return result

    async def review_files(
        self,
        file_diffs: list[FileDiff],
        context: PullRequestContext,
    ) -> list[ReviewComment]:
        """Review every hunk and return comments in diff order."""
        jobs: list[tuple[FileDiff, Hunk]] = [
            (file_diff, hunk)
            for file_diff in file_diffs
            if file_diff.path
            for hunk in file_diff.hunks
        ]

        if self.max_concurrent_reviews == 1:
            batches = []
            for file_diff, hunk in jobs:
                batches.append(await self._review_hunk(file_diff, hunk, context))
        else:
            semaphore = asyncio.Semaphore(self.max_concurrent_reviews)

            async def bounded(file_diff: FileDiff, hunk: Hunk) -> list[ReviewComment]:
                async with semaphore:
                    return await self._review_hunk(file_diff, hunk, context)

            # gather keeps results in submission order
            batches = await asyncio.gather(*(bounded(f, h) for f, h in jobs))

        comments: list[ReviewComment] = []
        for batch in batches:
            comments.extend(batch)
        return comments

    async def _review_hunk(
        self,
        file_diff: FileDiff,
        hunk: Hunk,
        context: PullRequestContext,
    ) -> list[ReviewComment]:
        findings = await self.hunk_reviewer.review(file_diff.path or "", hunk, context)
        return assemble_comments(file_diff, hunk, findings, line_policy=self.line_policy)

    async def close(self) -> None:
        """Clean up resources."""
        await self.github.close()
        await self.llm.close()

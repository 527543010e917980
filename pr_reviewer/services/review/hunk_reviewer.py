from dataclasses import dataclass

import structlog

from pr_reviewer.core.exceptions import LLMError, ReviewResponseDecodeError
from pr_reviewer.prompts.review import build_review_prompt, build_system_prompt
from pr_reviewer.services.github.models import PullRequestContext
from pr_reviewer.services.llm.base import (
    ChatMessage,
    CompletionRequest,
    LLMProvider,
    SamplingConfig,
)
from pr_reviewer.services.review.diff_parser import Hunk
from pr_reviewer.services.review.response_decoder import ReviewFinding, decode_review_response

logger = structlog.get_logger()


@dataclass
class HunkReviewer:
    """Asks the model for findings on a single hunk.

    A failed model call or an undecodable reply yields no findings for that
    hunk; the error is logged and never propagated.
    """

    llm: LLMProvider
    sampling: SamplingConfig = SamplingConfig()
    language: str = "Brazilian Portuguese"

    def build_request(
        self,
        file_path: str,
        hunk: Hunk,
        context: PullRequestContext,
    ) -> CompletionRequest:
        prompt = build_review_prompt(
            file_path=file_path,
            hunk_text=hunk.to_prompt_text(),
            pr_title=context.title,
            pr_description=context.description,
            language=self.language,
        )
        return CompletionRequest(
            messages=[
                ChatMessage(role="system", content=build_system_prompt(self.language)),
                ChatMessage(role="user", content=prompt),
            ],
            sampling=self.sampling,
        )

    async def review(
        self,
        file_path: str,
        hunk: Hunk,
        context: PullRequestContext,
    ) -> list[ReviewFinding]:
        request = self.build_request(file_path, hunk, context)

        logger.debug("Reviewing hunk", path=file_path, header=hunk.header)

        try:
            response_text = await self.llm.complete(request)
            findings = decode_review_response(response_text)
        except (LLMError, ReviewResponseDecodeError) as e:
            logger.error(
                "Error getting review for hunk",
                path=file_path,
                header=hunk.header,
                error=e.message,
                details=e.details,
            )
            return []

        logger.debug("Hunk reviewed", path=file_path, header=hunk.header, findings=len(findings))
        return findings

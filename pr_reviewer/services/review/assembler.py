"""Resolution of model findings into postable review comments."""

from collections.abc import Iterable
from typing import Literal

import structlog

from pr_reviewer.services.github.models import ReviewComment
from pr_reviewer.services.review.diff_parser import FileDiff, Hunk
from pr_reviewer.services.review.response_decoder import ReviewFinding

logger = structlog.get_logger()

LinePolicy = Literal["drop", "keep"]


def assemble_comments(
    file_diff: FileDiff,
    hunk: Hunk,
    findings: Iterable[ReviewFinding] | None,
    line_policy: LinePolicy = "drop",
) -> list[ReviewComment]:
    """Pair each finding with the file's path.

    With ``line_policy="drop"`` findings pointing outside the hunk's
    new-file lines are discarded, since GitHub rejects the whole review
    when one comment targets a line that is not part of the diff.
    """
    path = file_diff.path
    if not path or not findings:
        return []

    comments = []
    for finding in findings:
        if line_policy == "drop" and finding.line not in hunk.new_line_range:
            logger.warning(
                "Dropping finding outside hunk range",
                path=path,
                line=finding.line,
                header=hunk.header,
            )
            continue
        comments.append(ReviewComment(path=path, line=finding.line, body=finding.body))

    return comments

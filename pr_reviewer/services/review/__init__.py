"""Review service package."""

from pr_reviewer.services.review.assembler import assemble_comments
from pr_reviewer.services.review.diff_parser import (
    DeletedTarget,
    DiffLine,
    DiffParser,
    FileDiff,
    Hunk,
    LineType,
    PresentTarget,
)
from pr_reviewer.services.review.diff_source import DiffAcquirer
from pr_reviewer.services.review.hunk_reviewer import HunkReviewer
from pr_reviewer.services.review.path_filter import PathFilter, parse_patterns
from pr_reviewer.services.review.pipeline import PipelineResult, ReviewPipeline
from pr_reviewer.services.review.response_decoder import ReviewFinding, decode_review_response

__all__ = [
    "DeletedTarget",
    "DiffAcquirer",
    "DiffLine",
    "DiffParser",
    "FileDiff",
    "Hunk",
    "HunkReviewer",
    "LineType",
    "PathFilter",
    "PipelineResult",
    "PresentTarget",
    "ReviewFinding",
    "ReviewPipeline",
    "assemble_comments",
    "decode_review_response",
    "parse_patterns",
]

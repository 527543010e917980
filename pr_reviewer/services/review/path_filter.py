"""Exclusion of files by glob pattern."""

from collections.abc import Iterable, Sequence

import structlog
from wcmatch import glob

from pr_reviewer.services.review.diff_parser import FileDiff

logger = structlog.get_logger()

# minimatch-style matching: ``*`` stays within a path segment, ``**`` spans them
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB


def parse_patterns(raw: str | None) -> list[str]:
    """Split a comma-separated pattern list, trimming each entry.

    Empty entries are discarded so that an unset option excludes nothing.
    """
    if not raw:
        return []
    return [pattern.strip() for pattern in raw.split(",") if pattern.strip()]


class PathFilter:
    """Drops files whose target path matches any exclusion pattern."""

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self.patterns = [p for p in (pattern.strip() for pattern in patterns) if p]

    @classmethod
    def from_string(cls, raw: str | None) -> "PathFilter":
        return cls(parse_patterns(raw))

    def is_excluded(self, path: str | None) -> bool:
        if not self.patterns:
            return False
        if not path:
            # An unnamed file is matched as "": only pure wildcards cover it
            return any(not pattern.strip("*") for pattern in self.patterns)
        return glob.globmatch(path, self.patterns, flags=GLOB_FLAGS)

    def filter(self, files: Sequence[FileDiff]) -> list[FileDiff]:
        """Return the files that match none of the patterns, in order."""
        kept = []
        for file_diff in files:
            if self.is_excluded(file_diff.path):
                logger.debug("Excluding file from review", path=file_diff.path)
                continue
            kept.append(file_diff)
        return kept

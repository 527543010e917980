"""pr-reviewer: LLM review comments for pull request diffs."""

__version__ = "0.1.0"

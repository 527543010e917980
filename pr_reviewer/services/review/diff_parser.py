import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

import structlog

logger = structlog.get_logger()

DEV_NULL = "/dev/null"


class LineType(str, Enum):
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"


@dataclass
class DiffLine:
    """A single line in a diff."""

    type: LineType
    content: str
    old_line_no: int | None = None
    new_line_no: int | None = None

    @property
    def line_no(self) -> int | None:
        """New-file line number when the line exists there, else the old one."""
        return self.new_line_no if self.new_line_no is not None else self.old_line_no

    def __str__(self) -> str:
        prefix = {
            LineType.CONTEXT: " ",
            LineType.ADDITION: "+",
            LineType.DELETION: "-",
        }[self.type]
        return f"{prefix}{self.content}"


@dataclass
class Hunk:
    """A hunk (section) of changes in a diff."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header: str  # The @@ line
    lines: list[DiffLine] = field(default_factory=list)

    @property
    def new_line_range(self) -> range:
        """Line numbers of the new file covered by this hunk."""
        return range(self.new_start, self.new_start + self.new_count)

    def to_prompt_text(self) -> str:
        """Render the hunk with every line prefixed by its line number."""
        lines = [self.header]
        for diff_line in self.lines:
            lines.append(f"{diff_line.line_no} {diff_line}")
        return "\n".join(lines)


@dataclass(frozen=True)
class PresentTarget:
    """The file exists after the change."""

    path: str


@dataclass(frozen=True)
class DeletedTarget:
    """The file was removed by the change."""

    old_path: str


FileTarget = PresentTarget | DeletedTarget


@dataclass
class FileDiff:
    """Parsed diff for a single file."""

    target: FileTarget
    status: Literal["added", "modified", "deleted", "renamed"]
    old_path: str | None = None
    is_binary: bool = False
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def path(self) -> str | None:
        """Path in the new tree, ``None`` for deleted files."""
        if isinstance(self.target, PresentTarget):
            return self.target.path
        return None

    @property
    def is_deleted(self) -> bool:
        return isinstance(self.target, DeletedTarget)

    @property
    def additions(self) -> int:
        """Count of added lines."""
        return sum(
            1 for hunk in self.hunks for line in hunk.lines if line.type == LineType.ADDITION
        )

    @property
    def deletions(self) -> int:
        """Count of deleted lines."""
        return sum(
            1 for hunk in self.hunks for line in hunk.lines if line.type == LineType.DELETION
        )


@dataclass
class _FileState:
    """Mutable accumulator used while a file section is being read."""

    old_path: str | None = None
    new_path: str | None = None
    status: Literal["added", "modified", "deleted", "renamed"] = "modified"
    is_binary: bool = False
    seen_old_header: bool = False
    hunks: list[Hunk] = field(default_factory=list)

    def build(self) -> FileDiff:
        old_path = None if self.old_path == DEV_NULL else self.old_path
        new_path = None if self.new_path == DEV_NULL else self.new_path

        status = self.status
        if status == "modified" and old_path and new_path and old_path != new_path:
            status = "renamed"

        target: FileTarget
        if status == "deleted":
            target = DeletedTarget(old_path=old_path or new_path or "")
        else:
            target = PresentTarget(path=new_path or old_path or "")

        return FileDiff(
            target=target,
            status=status,
            old_path=old_path if status == "renamed" else None,
            is_binary=self.is_binary,
            hunks=self.hunks,
        )


class DiffParser:
    """Parser for unified diff format."""

    # Regex patterns
    FILE_HEADER_PATTERN = re.compile(r"^diff --git \"?a/(.*?)\"? \"?b/(.*?)\"?$")
    OLD_FILE_PATTERN = re.compile(r"^--- (.*)$")
    NEW_FILE_PATTERN = re.compile(r"^\+\+\+ (.*)$")
    HUNK_HEADER_PATTERN = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$")
    RENAME_FROM_PATTERN = re.compile(r"^rename from (.*)$")
    RENAME_TO_PATTERN = re.compile(r"^rename to (.*)$")
    BINARY_PATTERN = re.compile(r"^Binary files (.*) and (.*) differ$")

    @staticmethod
    def _clean_path(raw: str, prefix: str) -> str:
        """Strip timestamps, quotes and the a/ or b/ prefix from a header path."""
        path = raw.split("\t", 1)[0].strip()
        if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
            path = path[1:-1]
        if path == DEV_NULL:
            return path
        if path.startswith(prefix):
            path = path[len(prefix) :]
        return path

    def parse(self, diff_text: str) -> list[FileDiff]:
        """Parse a unified diff into structured FileDiff objects."""
        if not diff_text.strip():
            return []

        files: list[FileDiff] = []
        current: _FileState | None = None
        current_hunk: Hunk | None = None
        old_line_no = 0
        new_line_no = 0
        old_remaining = 0
        new_remaining = 0

        for line in diff_text.splitlines():
            # Hunk body, consumed by the counts in the @@ header
            if current_hunk is not None and (old_remaining > 0 or new_remaining > 0):
                if line.startswith("+"):
                    current_hunk.lines.append(
                        DiffLine(type=LineType.ADDITION, content=line[1:], new_line_no=new_line_no)
                    )
                    new_line_no += 1
                    new_remaining -= 1
                    continue
                if line.startswith("-"):
                    current_hunk.lines.append(
                        DiffLine(type=LineType.DELETION, content=line[1:], old_line_no=old_line_no)
                    )
                    old_line_no += 1
                    old_remaining -= 1
                    continue
                if line.startswith(" ") or line == "":
                    current_hunk.lines.append(
                        DiffLine(
                            type=LineType.CONTEXT,
                            content=line[1:],
                            old_line_no=old_line_no,
                            new_line_no=new_line_no,
                        )
                    )
                    old_line_no += 1
                    new_line_no += 1
                    old_remaining -= 1
                    new_remaining -= 1
                    continue
                if line.startswith("\\"):
                    # "\ No newline at end of file"
                    continue
                logger.debug("Hunk ended before its declared size", header=current_hunk.header)
                current_hunk = None
                old_remaining = new_remaining = 0

            if line.startswith("\\"):
                continue

            # New file diff starting
            file_match = self.FILE_HEADER_PATTERN.match(line)
            if file_match:
                if current:
                    files.append(current.build())
                current = _FileState(old_path=file_match.group(1), new_path=file_match.group(2))
                current_hunk = None
                continue

            # Old file line (--- a/file); also starts a file in plain diffs
            old_match = self.OLD_FILE_PATTERN.match(line)
            if old_match:
                if current is None or current.hunks or current.seen_old_header:
                    if current is not None:
                        files.append(current.build())
                    current = _FileState()
                current_hunk = None
                current.seen_old_header = True
                current.old_path = self._clean_path(old_match.group(1), "a/")
                if current.old_path == DEV_NULL:
                    current.status = "added"
                continue

            if current is None:
                # Preamble before the first file (e.g. commit message)
                continue

            # New file line (+++ b/file)
            new_match = self.NEW_FILE_PATTERN.match(line)
            if new_match:
                current.new_path = self._clean_path(new_match.group(1), "b/")
                if current.new_path == DEV_NULL:
                    current.status = "deleted"
                continue

            # Hunk header
            hunk_match = self.HUNK_HEADER_PATTERN.match(line)
            if hunk_match:
                old_start = int(hunk_match.group(1))
                old_count = int(hunk_match.group(2) or 1)
                new_start = int(hunk_match.group(3))
                new_count = int(hunk_match.group(4) or 1)

                current_hunk = Hunk(
                    old_start=old_start,
                    old_count=old_count,
                    new_start=new_start,
                    new_count=new_count,
                    header=line,
                )
                current.hunks.append(current_hunk)

                old_line_no = old_start
                new_line_no = new_start
                old_remaining = old_count
                new_remaining = new_count
                continue

            # Extended git headers
            if line.startswith("new file mode"):
                current.status = "added"
                continue

            if line.startswith("deleted file mode"):
                current.status = "deleted"
                continue

            rename_from = self.RENAME_FROM_PATTERN.match(line)
            if rename_from:
                current.old_path = rename_from.group(1)
                current.status = "renamed"
                continue

            rename_to = self.RENAME_TO_PATTERN.match(line)
            if rename_to:
                current.new_path = rename_to.group(1)
                current.status = "renamed"
                continue

            binary_match = self.BINARY_PATTERN.match(line)
            if binary_match:
                current.is_binary = True
                if self._clean_path(binary_match.group(1), "a/") == DEV_NULL:
                    current.status = "added"
                if self._clean_path(binary_match.group(2), "b/") == DEV_NULL:
                    current.status = "deleted"
                continue

            if line.startswith("GIT binary patch"):
                current.is_binary = True

        # Don't forget the last file
        if current:
            files.append(current.build())

        return files

import pytest

from pr_reviewer.services.review.diff_parser import (
    DeletedTarget,
    DiffParser,
    FileDiff,
    PresentTarget,
)
from pr_reviewer.services.review.path_filter import PathFilter, parse_patterns
from tests.fixtures.sample_diffs import MIXED_CHANGES, MULTIPLE_FILES, README_ONLY


def _file(path: str) -> FileDiff:
    return FileDiff(target=PresentTarget(path), status="modified")


class TestParsePatterns:
    def test_splits_and_trims(self) -> None:
        assert parse_patterns(" *.md , docs/** ,*.lock") == ["*.md", "docs/**", "*.lock"]

    def test_empty_input_means_no_patterns(self) -> None:
        assert parse_patterns("") == []
        assert parse_patterns(None) == []
        assert parse_patterns(" , ") == []


class TestPathFilter:
    """Tests for glob based exclusion."""

    def test_no_patterns_keeps_everything(self) -> None:
        files = DiffParser().parse(MULTIPLE_FILES)

        assert PathFilter().filter(files) == files

    def test_excludes_markdown(self) -> None:
        files = DiffParser().parse(README_ONLY)

        assert PathFilter(["*.md"]).filter(files) == []

    def test_star_does_not_cross_directories(self) -> None:
        path_filter = PathFilter(["*.md"])

        assert path_filter.is_excluded("README.md")
        assert not path_filter.is_excluded("docs/guide.md")

    def test_globstar_crosses_directories(self) -> None:
        path_filter = PathFilter(["**/*.md", "tests/**"])

        assert path_filter.is_excluded("docs/guide.md")
        assert path_filter.is_excluded("README.md")
        assert path_filter.is_excluded("tests/unit/test_x.py")
        assert not path_filter.is_excluded("src/main.py")

    @pytest.mark.parametrize(
        ("pattern", "path", "excluded"),
        [
            ("src/?.py", "src/a.py", True),
            ("src/?.py", "src/ab.py", False),
            ("*.[ch]", "lib.c", True),
            ("*.[ch]", "lib.o", False),
            ("*.{yml,yaml}", "ci.yaml", True),
        ],
    )
    def test_glob_dialect(self, pattern: str, path: str, excluded: bool) -> None:
        assert PathFilter([pattern]).is_excluded(path) is excluded

    def test_preserves_order(self) -> None:
        files = [_file("a.py"), _file("b.md"), _file("c.py"), _file("d.md")]

        kept = PathFilter.from_string("*.md").filter(files)

        assert [f.path for f in kept] == ["a.py", "c.py"]

    def test_filtering_is_idempotent(self) -> None:
        files = DiffParser().parse(MIXED_CHANGES)
        path_filter = PathFilter.from_string("docs/**, *.txt")

        once = path_filter.filter(files)

        assert path_filter.filter(once) == once
        assert [f.path for f in once] == [None, "app.py"]

    def test_missing_path_matched_as_empty_string(self) -> None:
        deleted = FileDiff(target=DeletedTarget("gone.py"), status="deleted")

        assert PathFilter(["*"]).filter([deleted]) == []
        assert PathFilter(["*.py"]).filter([deleted]) == [deleted]

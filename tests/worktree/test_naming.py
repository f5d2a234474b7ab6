"""Tests for worktree name <-> directory name mapping."""

from __future__ import annotations

import pytest

from wt_cli.errors import InvalidNameError
from wt_cli.worktree.naming import (
    parse_worktree_name,
    validate_worktree_name,
    worktree_dir_name,
)


class TestWorktreeDirName:
    """Tests for worktree_dir_name function."""

    def test_joins_with_delimiter(self) -> None:
        """Project basename and name are joined with '@'."""
        assert worktree_dir_name("repo", "feature") == "repo@feature"

    def test_custom_delimiter(self) -> None:
        """A configured delimiter is used instead of '@'."""
        assert worktree_dir_name("repo", "feature", "+") == "repo+feature"


class TestParseWorktreeName:
    """Tests for parse_worktree_name function."""

    @pytest.mark.parametrize("name", ["feature", "fix-123", "a.b", "x@y", "UPPER", "..hidden"])
    def test_inverts_dir_name(self, name: str) -> None:
        """Parsing recovers every valid name."""
        validate_worktree_name(name)
        assert parse_worktree_name(worktree_dir_name("repo", name), "repo") == name

    def test_other_project_prefix(self) -> None:
        """Directories of another project yield no name."""
        assert parse_worktree_name("other@feature", "repo") is None

    def test_prefix_without_delimiter(self) -> None:
        """A basename that only shares the project name is not a worktree."""
        assert parse_worktree_name("repo-feature", "repo") is None
        assert parse_worktree_name("repository@x", "repo") is None

    def test_main_checkout(self) -> None:
        """The main checkout's own directory yields no name."""
        assert parse_worktree_name("repo", "repo") is None

    def test_empty_remainder(self) -> None:
        """``repo@`` has no name."""
        assert parse_worktree_name("repo@", "repo") is None

    def test_custom_delimiter(self) -> None:
        """Only the configured delimiter is recognized."""
        assert parse_worktree_name("repo+feature", "repo", "+") == "feature"
        assert parse_worktree_name("repo@feature", "repo", "+") is None


class TestValidateWorktreeName:
    """Tests for validate_worktree_name function."""

    @pytest.mark.parametrize("name", ["feature", "fix_1", "v1.2.3", "a@b", "..x", "x.."])
    def test_accepts(self, name: str) -> None:
        """Single path components are valid."""
        validate_worktree_name(name)

    @pytest.mark.parametrize(
        "name",
        ["", ".", "..", "a/b", "/abs", "a\\b", "../escape", "trailing/"],
    )
    def test_rejects(self, name: str) -> None:
        """Empty names, dot names and anything with a separator are rejected."""
        with pytest.raises(InvalidNameError):
            validate_worktree_name(name)

    def test_empty_message(self) -> None:
        """The empty name gets a dedicated message."""
        with pytest.raises(InvalidNameError, match="cannot be empty"):
            validate_worktree_name("")

    def test_separator_message(self) -> None:
        """Separators are named in the message."""
        with pytest.raises(InvalidNameError, match="path separators"):
            validate_worktree_name("a/b")

"""Tests for WorktreeLocator."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.mocks.git import PROJECT_ROOT, FakeGit
from wt_cli.config import Settings
from wt_cli.errors import InvalidNameError, NotARepositoryError, NotInNamedWorktreeError
from wt_cli.worktree.locator import WorktreeLocator


class TestProjectRoot:
    """Tests for project root discovery."""

    def test_from_named_worktree(self, make_locator) -> None:
        """The project root is derived from the shared .git directory."""
        locator = make_locator(["alpha"], current="alpha")
        assert locator.project_root() == PROJECT_ROOT

    def test_outside_repository(self, settings: Settings) -> None:
        """Errors from git propagate unchanged."""
        locator = WorktreeLocator(FakeGit(toplevel=None, project_root=None), settings)
        with pytest.raises(NotARepositoryError):
            locator.project_root()


class TestCurrentWorktreeName:
    """Tests for current worktree detection."""

    def test_named_worktree(self, make_locator) -> None:
        """Inside repo@alpha the current name is alpha."""
        assert make_locator(["alpha"], current="alpha").current_worktree_name() == "alpha"

    def test_main_checkout(self, make_locator) -> None:
        """The primary checkout has no worktree name."""
        with pytest.raises(NotInNamedWorktreeError, match="main worktree"):
            make_locator(["alpha"]).current_worktree_name()

    def test_unrecognized_directory(self, settings: Settings) -> None:
        """A checkout that does not follow the naming scheme is rejected."""
        git = FakeGit(toplevel=Path("/src/elsewhere"))
        locator = WorktreeLocator(git, settings)
        with pytest.raises(NotInNamedWorktreeError, match="not in a recognized worktree"):
            locator.current_worktree_name()

    def test_prefixed_but_not_sibling(self, settings: Settings) -> None:
        """A repo@x directory somewhere else is not one of our worktrees."""
        git = FakeGit(toplevel=Path("/other/repo@alpha"))
        locator = WorktreeLocator(git, settings)
        with pytest.raises(NotInNamedWorktreeError):
            locator.current_worktree_name()

    def test_not_a_repository_propagates(self, settings: Settings) -> None:
        """Outside any repository the git error is not masked."""
        locator = WorktreeLocator(FakeGit(toplevel=None), settings)
        with pytest.raises(NotARepositoryError):
            locator.current_worktree_name()


class TestEnumerate:
    """Tests for worktree enumeration."""

    def test_lists_named_worktrees_in_order(self, make_locator) -> None:
        """Only sibling worktrees following the scheme are listed."""
        locator = make_locator(
            ["beta", "alpha"],
            extra_paths=[Path("/tmp/scratch"), Path("/src/other@x")],
        )
        assert locator.enumerate() == ["beta", "alpha"]

    def test_prefix_filter(self, make_locator) -> None:
        """Names are filtered by prefix."""
        locator = make_locator(["feature-a", "feature-b", "fix"])
        assert locator.enumerate("feat") == ["feature-a", "feature-b"]
        assert locator.enumerate("zzz") == []

    def test_main_checkout_excluded(self, make_locator) -> None:
        """The primary checkout is never listed."""
        assert make_locator([]).enumerate() == []

    def test_custom_delimiter(self) -> None:
        """The configured delimiter is used to decode directory names."""
        git = FakeGit(worktrees=[Path("/src/repo+alpha"), Path("/src/repo@beta")])
        locator = WorktreeLocator(git, Settings(delimiter="+"))
        assert locator.enumerate() == ["alpha"]


class TestResolvePath:
    """Tests for name to path resolution."""

    def test_sibling_path(self, make_locator) -> None:
        """Names map to repo@name next to the project root."""
        assert make_locator().resolve_path("feature") == Path("/src/repo@feature")

    def test_missing_worktree_is_not_checked(self, make_locator) -> None:
        """Resolution is purely by name."""
        assert make_locator([]).resolve_path("nope") == Path("/src/repo@nope")

    def test_invalid_name(self, make_locator) -> None:
        """Path-like names are rejected."""
        with pytest.raises(InvalidNameError):
            make_locator().resolve_path("../escape")

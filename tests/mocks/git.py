"""In-memory git for locator and command tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from wt_cli.errors import NotARepositoryError

if TYPE_CHECKING:
    from collections.abc import Sequence

PROJECT_ROOT = Path("/src/repo")


@dataclass
class FakeGit:
    """Stand-in for `wt_cli.worktree.git.Git`.

    ``toplevel`` or ``project_root`` set to None behaves like running
    outside a repository.
    """

    toplevel: Path | None = PROJECT_ROOT
    project_root: Path | None = PROJECT_ROOT
    worktrees: list[Path] = field(default_factory=list)
    calls: list[tuple] = field(default_factory=list)
    remote: bool = True
    fetch_ok: bool = True
    remove_returncode: int = 0

    def common_dir(self) -> Path:
        if self.project_root is None:
            raise NotARepositoryError
        return self.project_root / ".git"

    def show_toplevel(self) -> Path:
        if self.toplevel is None:
            raise NotARepositoryError
        return self.toplevel

    def worktree_paths(self) -> list[Path]:
        if self.project_root is None:
            raise NotARepositoryError
        return [self.project_root, *self.worktrees]

    def set_config(self, key: str, value: str) -> bool:
        self.calls.append(("set_config", key, value))
        return True

    def has_remote(self, name: str) -> bool:
        return self.remote

    def fetch(self, remote: str) -> bool:
        self.calls.append(("fetch", remote))
        return self.fetch_ok

    def add_worktree(self, path: Path, ref: str = "HEAD") -> None:
        self.calls.append(("add_worktree", path, ref))
        path.mkdir(parents=True)

    def remove_worktree(self, path: Path, extra_args: Sequence[str] = ()) -> int:
        self.calls.append(("remove_worktree", path, list(extra_args)))
        return self.remove_returncode

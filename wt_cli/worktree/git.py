"""Narrow adapter over the git executable.

Read queries (`common_dir`, `show_toplevel`, `worktree_paths`) feed the
worktree locator; the writes are thin pass-throughs used by ``wt add`` and
``wt rm``.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from wt_cli.core.process import run_command
from wt_cli.errors import CommandFailedError, NotARepositoryError, ToolNotFoundError

if TYPE_CHECKING:
    import subprocess
    from collections.abc import Sequence


def parse_worktree_list(output: str) -> list[Path]:
    """Parse ``git worktree list --porcelain`` into worktree paths, in listing order."""
    return [
        Path(line.removeprefix("worktree "))
        for line in output.splitlines()
        if line.startswith("worktree ")
    ]


class Git:
    """Runs git in ``cwd`` (the process working directory when None)."""

    def __init__(self, executable: str = "git", cwd: Path | None = None) -> None:
        self.executable = executable
        self.cwd = cwd

    def _run_git(
        self,
        *args: str | Path,
        cwd: Path | None = None,
        capture_output: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        return run_command(
            [self.executable, *args],
            cwd=cwd or self.cwd,
            capture_output=capture_output,
        )

    def _query(self, *args: str) -> str:
        try:
            result = self._run_git(*args)
        except ToolNotFoundError as e:
            raise NotARepositoryError(f"{self.executable} is not installed") from e
        if result.returncode != 0:
            raise NotARepositoryError
        return result.stdout.strip()

    def available(self) -> bool:
        """Check if git is installed."""
        return shutil.which(self.executable) is not None

    def common_dir(self) -> Path:
        """Return the absolute path of the shared ``.git`` directory."""
        common = Path(self._query("rev-parse", "--git-common-dir"))
        if not common.is_absolute():
            common = Path(self.cwd or Path.cwd()) / common
        return Path(os.path.normpath(common))

    def show_toplevel(self) -> Path:
        """Return the top-level directory of the checkout containing ``cwd``."""
        return Path(self._query("rev-parse", "--show-toplevel"))

    def worktree_paths(self) -> list[Path]:
        """Return the paths of all registered worktrees, main checkout first."""
        return parse_worktree_list(self._query("worktree", "list", "--porcelain"))

    # --- Writes (pass-through) ---

    def set_config(self, key: str, value: str) -> bool:
        """Set a repository config value, returning False on failure."""
        return self._run_git("config", key, value).returncode == 0

    def has_remote(self, name: str) -> bool:
        """Check if a remote is configured."""
        return self._run_git("remote", "get-url", name).returncode == 0

    def fetch(self, remote: str) -> bool:
        """Fetch from a remote with progress on the terminal."""
        return self._run_git("fetch", remote, capture_output=False).returncode == 0

    def add_worktree(self, path: Path, ref: str = "HEAD") -> None:
        """Create a detached worktree at ``path`` checked out at ``ref``."""
        argv = ["worktree", "add", "--detach", str(path), ref]
        result = self._run_git(*argv, capture_output=False)
        if result.returncode != 0:
            raise CommandFailedError([self.executable, *argv], result.returncode)

    def remove_worktree(self, path: Path, extra_args: Sequence[str] = ()) -> int:
        """Run ``git worktree remove`` with output on the terminal."""
        return self._run_git(
            "worktree",
            "remove",
            str(path),
            *extra_args,
            capture_output=False,
        ).returncode

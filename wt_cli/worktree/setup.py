"""Environment scaffolding for a freshly created worktree."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

import dotenv

from wt_cli.core.process import run_command

if TYPE_CHECKING:
    from pathlib import Path

ENV_FILES = (".env", ".envrc")


def copy_env_files(
    source: Path,
    dest: Path,
    names: tuple[str, ...] = ENV_FILES,
) -> list[Path]:
    """Copy untracked environment files from the source checkout into a worktree.

    Returns the list of files written.
    """
    copied: list[Path] = []
    for name in names:
        src_file = source / name
        if src_file.is_file():
            dest_file = dest / name
            dest_file.parent.mkdir(parents=True, exist_ok=True)
            dest_file.write_bytes(src_file.read_bytes())
            copied.append(dest_file)
    return copied


def is_direnv_available() -> bool:
    """Check if direnv is installed and available."""
    return shutil.which("direnv") is not None


def allow_direnv(path: Path) -> tuple[bool, str]:
    """Run ``direnv allow`` in ``path`` to trust its copied ``.envrc``.

    Returns:
        Tuple of (success, message)

    """
    if not is_direnv_available():
        return False, "direnv is not installed"
    result = run_command(["direnv", "allow"], cwd=path)
    if result.returncode != 0:
        return False, f"'direnv allow' failed: {result.stderr.strip()}"
    return True, "Ran 'direnv allow'"


def setup_devcontainer_env(source: Path, worktree_path: Path, name: str) -> Path | None:
    """Prepare ``.devcontainer/.env`` in a new worktree.

    The source checkout's file (if any) is copied, then ``GIT_WORKTREE`` is
    set to the worktree name so the container can tell which worktree it
    serves. Returns None when the worktree has no ``.devcontainer``.
    """
    devcontainer_dir = worktree_path / ".devcontainer"
    if not devcontainer_dir.is_dir():
        return None
    env_path = devcontainer_dir / ".env"
    src_env = source / ".devcontainer" / ".env"
    if src_env.is_file():
        env_path.write_bytes(src_env.read_bytes())
    env_path.touch()
    dotenv.set_key(env_path, "GIT_WORKTREE", name, quote_mode="never")
    return env_path

"""Find the project root and its sibling worktrees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wt_cli.errors import NotInNamedWorktreeError

from .naming import parse_worktree_name, validate_worktree_name, worktree_dir_name

if TYPE_CHECKING:
    from pathlib import Path

    from wt_cli.config import Settings

    from .git import Git


class WorktreeLocator:
    """Resolve worktree names and paths against live git state.

    Nothing is cached: every call queries git again, since worktrees can be
    added or removed by other processes at any time.
    """

    def __init__(self, git: Git, settings: Settings) -> None:
        self.git = git
        self.settings = settings

    def project_root(self) -> Path:
        """Return the primary checkout's root; works from any worktree or subdirectory."""
        return self.git.common_dir().parent

    def current_worktree_root(self) -> Path:
        """Return the root of the checkout containing the current directory."""
        return self.git.show_toplevel()

    def name_for_path(self, path: Path, project_root: Path | None = None) -> str | None:
        """Return the worktree name for ``path``, or None if it is not a sibling worktree."""
        root = project_root or self.project_root()
        if path == root or path.parent != root.parent:
            return None
        return parse_worktree_name(path.name, root.name, self.settings.delimiter)

    def current_worktree_name(self) -> str:
        """Return the name of the worktree containing the current directory."""
        current = self.current_worktree_root()
        root = self.project_root()
        if current == root:
            msg = "currently in the main worktree, not a named worktree"
            raise NotInNamedWorktreeError(msg)
        name = self.name_for_path(current, root)
        if name is None:
            msg = "current directory is not in a recognized worktree"
            raise NotInNamedWorktreeError(msg)
        return name

    def enumerate(self, prefix: str = "") -> list[str]:
        """Return names of registered sibling worktrees starting with ``prefix``.

        Order follows ``git worktree list``.
        """
        root = self.project_root()
        names = []
        for path in self.git.worktree_paths():
            name = self.name_for_path(path, root)
            if name is not None and name.startswith(prefix):
                names.append(name)
        return names

    def resolve_path(self, name: str) -> Path:
        """Return the sibling path for ``name``; existence is not checked."""
        validate_worktree_name(name)
        root = self.project_root()
        return root.parent / worktree_dir_name(root.name, name, self.settings.delimiter)

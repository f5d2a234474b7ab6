"""Mapping between worktree names and sibling directory names.

A worktree named ``feature`` of the project checked out at ``~/src/repo``
lives at ``~/src/repo@feature``.
"""

from __future__ import annotations

import os

from wt_cli.constants import WORKTREE_DELIMITER
from wt_cli.errors import InvalidNameError


def worktree_dir_name(
    project_basename: str,
    name: str,
    delimiter: str = WORKTREE_DELIMITER,
) -> str:
    """Return the directory name for a worktree, e.g. ``repo@name``."""
    return f"{project_basename}{delimiter}{name}"


def parse_worktree_name(
    dir_name: str,
    project_basename: str,
    delimiter: str = WORKTREE_DELIMITER,
) -> str | None:
    """Extract the worktree name from a directory name like ``repo@name``.

    Returns None if the directory does not carry the project's prefix.
    """
    prefix = f"{project_basename}{delimiter}"
    if not dir_name.startswith(prefix):
        return None
    return dir_name[len(prefix) :] or None


def validate_worktree_name(name: str) -> None:
    """Raise `InvalidNameError` unless ``name`` is usable as a single path component."""
    if not name:
        raise InvalidNameError(name)
    if name in (".", ".."):
        raise InvalidNameError(name)
    if "/" in name or "\\" in name:
        raise InvalidNameError(name, "path separators are not allowed")
    if os.path.basename(name) != name or os.path.isabs(name):
        raise InvalidNameError(name)

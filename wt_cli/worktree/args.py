"""Decide which worktree a command's arguments refer to.

Commands such as ``wt exec``, ``wt up`` and ``wt curl`` take an optional
worktree name followed by a payload passed through to another program::

    wt exec                 # current worktree, interactive shell
    wt exec . make test     # current worktree, explicit
    wt exec feature make    # worktree "feature"
    wt exec feature -- make # same, "--" is dropped
    wt exec make test       # current worktree, "make" is not a worktree

A payload whose first word happens to equal a registered worktree name is
taken as a worktree reference. Spell the worktree out (``wt exec . make``)
to run such a command in the current worktree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wt_cli.constants import CURRENT_WORKTREE_MARKER, PAYLOAD_SEPARATOR
from wt_cli.errors import WtError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from .locator import WorktreeLocator


@dataclass(frozen=True)
class WorktreeArgs:
    """A worktree name and the arguments that follow it."""

    name: str
    payload: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Workspace:
    """The directory a command operates on.

    ``name`` is None when the directory is the primary checkout.
    """

    folder: Path
    payload: list[str] = field(default_factory=list)
    name: str | None = None


def _drop_separator(rest: list[str]) -> list[str]:
    """Drop one ``--`` written between the worktree and the payload."""
    if rest and rest[0] == PAYLOAD_SEPARATOR:
        return rest[1:]
    return rest


def split_worktree_args(args: Sequence[str], locator: WorktreeLocator) -> WorktreeArgs:
    """Split ``args`` into a worktree name and a payload.

    Priority: no arguments or a leading ``.`` mean the current worktree; a
    leading registered worktree name is taken as the target; anything else
    is all payload for the current worktree.
    """
    if not args:
        return WorktreeArgs(locator.current_worktree_name())

    first, *rest = args
    if first == CURRENT_WORKTREE_MARKER:
        return WorktreeArgs(locator.current_worktree_name(), _drop_separator(rest))

    if first in locator.enumerate(""):
        return WorktreeArgs(first, _drop_separator(rest))

    return WorktreeArgs(locator.current_worktree_name(), list(args))


def resolve_workspace_folder(args: Sequence[str], locator: WorktreeLocator) -> Workspace:
    """Resolve ``args`` to a worktree directory and the remaining arguments.

    From the primary checkout, where there is no current worktree name, the
    project root itself is used and every argument (minus a leading ``.``)
    becomes payload.
    """
    try:
        resolved = split_worktree_args(args, locator)
    except WtError:
        try:
            root = locator.project_root()
            in_main = locator.current_worktree_root() == root
        except WtError:
            in_main = False
        if not in_main:
            raise
        payload = list(args)
        if payload and payload[0] == CURRENT_WORKTREE_MARKER:
            payload = _drop_separator(payload[1:])
        return Workspace(root, payload)

    return Workspace(locator.resolve_path(resolved.name), resolved.payload, resolved.name)

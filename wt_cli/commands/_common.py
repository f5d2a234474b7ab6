"""State and helpers shared by wt commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import typer

from wt_cli.config import Settings, load_config, load_settings
from wt_cli.constants import CURRENT_WORKTREE_MARKER
from wt_cli.devcontainer.runtime import ContainerRuntime
from wt_cli.devcontainer.session import SessionResolver
from wt_cli.devcontainer.tool import DevcontainerCli
from wt_cli.errors import WorktreeNotFoundError, WtError
from wt_cli.worktree.args import Workspace, resolve_workspace_folder
from wt_cli.worktree.git import Git
from wt_cli.worktree.locator import WorktreeLocator

if TYPE_CHECKING:
    from pathlib import Path

# Payload commands: everything after the first positional argument, including
# options such as `-la` or `--help`, belongs to the wrapped program.
PASSTHROUGH_SETTINGS = {
    "allow_interspersed_args": False,
    "ignore_unknown_options": True,
}


@dataclass
class AppState:
    """Per-invocation state stored on the root typer context."""

    settings: Settings = field(default_factory=Settings)
    verbose: bool = False

    def locator(self) -> WorktreeLocator:
        """Worktree locator running git in the current directory."""
        return WorktreeLocator(Git(self.settings.git), self.settings)

    def sessions(self) -> SessionResolver:
        """Devcontainer session resolver for the configured runtime."""
        return SessionResolver(ContainerRuntime(self.settings), self.settings)

    def devcontainer(self) -> DevcontainerCli:
        """Adapter for the devcontainer CLI."""
        return DevcontainerCli(self.settings)


def get_state(ctx: typer.Context) -> AppState:
    """Return the `AppState` set up by the root callback."""
    state = ctx.find_object(AppState)
    return state if state is not None else AppState()


def resolve_name_arg(name: str, locator: WorktreeLocator) -> str:
    """Resolve a worktree name argument, treating ``.`` as the current worktree."""
    if name == CURRENT_WORKTREE_MARKER:
        return locator.current_worktree_name()
    return name


def resolve_single_workspace(name: str | None, locator: WorktreeLocator) -> Workspace:
    """Resolve an optional lone worktree argument (no payload allowed)."""
    workspace = resolve_workspace_folder([name] if name else [], locator)
    if workspace.payload:
        raise WorktreeNotFoundError(workspace.payload[0])
    return workspace


def complete_worktree_name(ctx: typer.Context, incomplete: str) -> list[str]:
    """Shell completion for the leading worktree name argument."""
    if ctx.params.get("args") or ctx.params.get("extra"):
        return []
    state = ctx.find_object(AppState)
    if state is None:
        try:
            state = AppState(settings=load_settings(load_config()))
        except ValueError:
            state = AppState()
    try:
        return state.locator().enumerate(incomplete)
    except WtError:
        return []


def devcontainer_config(folder: Path) -> Path:
    """Return the path of ``folder``'s devcontainer.json (may not exist)."""
    return folder / ".devcontainer" / "devcontainer.json"

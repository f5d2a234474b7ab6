"""Commands that drive a worktree's devcontainer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from wt_cli._output import reported_errors, success
from wt_cli.cli import app
from wt_cli.constants import DEFAULT_CONTAINER_SHELL
from wt_cli.core.process import ReplaceProcess, perform
from wt_cli.devcontainer.scaffold import write_devcontainer
from wt_cli.devcontainer.tool import DevcontainerCli
from wt_cli.launch import get_parent_shell
from wt_cli.worktree.args import Workspace, resolve_workspace_folder

from ._common import (
    PASSTHROUGH_SETTINGS,
    complete_worktree_name,
    devcontainer_config,
    get_state,
    resolve_single_workspace,
)

logger = logging.getLogger(__name__)

_WORKTREE_ARGS_HELP = (
    "Optional worktree name ('.' for the current one) followed by arguments. "
    "A first argument that is not a worktree name starts the arguments"
)


def exec_action(workspace: Workspace, devcontainer: DevcontainerCli) -> ReplaceProcess:
    """Build the action for ``wt exec``.

    Runs in the devcontainer when the worktree has one, otherwise directly
    in the worktree directory. No command means an interactive shell.
    """
    command = workspace.payload
    if devcontainer_config(workspace.folder).is_file():
        argv = devcontainer.argv("exec", workspace.folder, command or DEFAULT_CONTAINER_SHELL)
        return ReplaceProcess(argv, env={"DOCKER_CLI_HINTS": "false"})
    if not command:
        return ReplaceProcess([get_parent_shell()], cwd=workspace.folder)
    return ReplaceProcess(list(command), cwd=workspace.folder)


@app.command("exec", context_settings=PASSTHROUGH_SETTINGS)
def exec_cmd(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            help=f"{_WORKTREE_ARGS_HELP}; use `wt exec . CMD` if CMD is also a worktree name",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
) -> None:
    """Execute a command in the worktree's devcontainer (default: current worktree).

    **Examples:**

    - `wt exec` — Interactive shell in the current worktree's container
    - `wt exec -- npm test` — Run tests in the current worktree's container
    - `wt exec feature -- make` — Run make in worktree `feature`
    """
    state = get_state(ctx)
    with reported_errors():
        workspace = resolve_workspace_folder(args or [], state.locator())
        perform(exec_action(workspace, state.devcontainer()))


def _devcontainer_passthrough(ctx: typer.Context, subcommand: str, args: list[str]) -> None:
    state = get_state(ctx)
    with reported_errors():
        workspace = resolve_workspace_folder(args, state.locator())
        argv = state.devcontainer().argv(subcommand, workspace.folder, workspace.payload)
        perform(ReplaceProcess(argv))


@app.command("up", context_settings=PASSTHROUGH_SETTINGS)
def up(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            help=f"{_WORKTREE_ARGS_HELP} for 'devcontainer up'",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
) -> None:
    """Start the worktree's devcontainer (default: current worktree)."""
    _devcontainer_passthrough(ctx, "up", args or [])


@app.command("build", context_settings=PASSTHROUGH_SETTINGS)
def build(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            help=f"{_WORKTREE_ARGS_HELP} for 'devcontainer build'",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
) -> None:
    """Build the worktree's devcontainer (default: current worktree)."""
    _devcontainer_passthrough(ctx, "build", args or [])


@app.command("down")
def down(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(
            help="Worktree whose container to remove (default: current worktree)",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
) -> None:
    """Stop and remove the devcontainer for a worktree."""
    state = get_state(ctx)
    sessions = state.sessions()
    with reported_errors():
        workspace = resolve_single_workspace(name, state.locator())
        container_id = sessions.find_container(workspace.folder, include_stopped=True)
        logger.info("Removing container %s", container_id)
        returncode = sessions.runtime.remove(container_id)
    raise typer.Exit(returncode)


@app.command("proxy-port")
def proxy_port(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(
            help="Worktree to inspect (default: current worktree)",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
) -> None:
    """Print the SOCKS proxy port for the worktree's devcontainer."""
    state = get_state(ctx)
    with reported_errors():
        workspace = resolve_single_workspace(name, state.locator())
        print(state.sessions().proxy_port(workspace.folder))


@app.command("init")
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing .devcontainer/ files"),
    ] = False,
) -> None:
    """Create a minimal `.devcontainer/` with SOCKS5 proxy support.

    The container runs microsocks on port 1080, published on a random
    loopback port that `wt proxy-port`, `wt chrome` and `wt curl` discover.
    """
    cwd = Path.cwd()
    with reported_errors():
        write_devcontainer(cwd, force=force)
    success(f"Created .devcontainer/ in {cwd}")

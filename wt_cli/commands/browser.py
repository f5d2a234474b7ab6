"""Commands that reach a worktree's devcontainer through its SOCKS5 proxy."""

from __future__ import annotations

import logging
import shutil
from typing import Annotated

import typer

from wt_cli._output import reported_errors
from wt_cli.cli import app
from wt_cli.core.process import RunCommand, SpawnDetached, format_argv, perform
from wt_cli.errors import ToolNotFoundError
from wt_cli.launch import chrome_argv, curl_argv, find_chrome_binary, playwright_argv
from wt_cli.proxy import normalize_localhost_url, socks_proxy_url
from wt_cli.worktree.args import Workspace, resolve_workspace_folder

from ._common import PASSTHROUGH_SETTINGS, AppState, complete_worktree_name, get_state

logger = logging.getLogger(__name__)


def _require(executable: str, hint: str) -> str:
    path = shutil.which(executable)
    if path is None:
        raise ToolNotFoundError(executable, hint)
    return path


def _proxied(state: AppState, args: list[str]) -> tuple[Workspace, int, list[str]]:
    """Resolve the workspace and its proxy port; a running proxy is required."""
    workspace = resolve_workspace_folder(args, state.locator())
    port = state.sessions().proxy_port(workspace.folder)
    extra = [normalize_localhost_url(arg) for arg in workspace.payload]
    return workspace, port, extra


@app.command("chrome", context_settings=PASSTHROUGH_SETTINGS)
def chrome(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            help="Optional worktree name followed by Chrome arguments (URLs, flags)",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
) -> None:
    """Open a Chrome browser with per-worktree profile and proxy settings.

    All traffic, including `localhost`, goes through the devcontainer's
    SOCKS5 proxy, so `http://localhost:3000` reaches the container.
    """
    state = get_state(ctx)
    with reported_errors():
        workspace, port, extra = _proxied(state, args or [])
        binary = find_chrome_binary()
        argv = chrome_argv(binary, workspace.folder, socks_proxy_url(port), extra)
        logger.info("Launching Chrome: %s", format_argv(argv))
        perform(SpawnDetached(argv, quiet=not state.verbose))


@app.command("playwright", context_settings=PASSTHROUGH_SETTINGS)
def playwright(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            help="Optional worktree name followed by 'playwright open' arguments",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
) -> None:
    """Open a browser with Playwright using per-worktree proxy settings."""
    state = get_state(ctx)
    with reported_errors():
        npx = _require("npx", "install Node.js and Playwright")
        _, port, extra = _proxied(state, args or [])
        argv = playwright_argv(npx, socks_proxy_url(port), extra)
        logger.info("Launching Playwright: %s", format_argv(argv))
        perform(SpawnDetached(argv, quiet=not state.verbose))


@app.command("curl", context_settings=PASSTHROUGH_SETTINGS)
def curl(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            help="Optional worktree name followed by curl arguments",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
) -> None:
    """Run curl with per-worktree proxy settings.

    Hostnames are resolved inside the container (`socks5h`), so service
    names from its network work too.
    """
    state = get_state(ctx)
    with reported_errors():
        curl_bin = _require("curl", "install curl first")
        _, port, extra = _proxied(state, args or [])
        argv = curl_argv(curl_bin, socks_proxy_url(port, remote_dns=True), extra)
        logger.info("Launching curl: %s", format_argv(argv))
        returncode = perform(RunCommand(argv))
    raise typer.Exit(returncode)

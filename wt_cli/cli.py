"""Shared CLI functionality for wt."""

from __future__ import annotations

from typing import Annotated

import typer

from ._output import reported_errors
from .commands._common import AppState
from .config import command_defaults, load_config, load_settings
from .core.utils import setup_rich_logging

app = typer.Typer(
    name="wt",
    help="""Git worktree manager with devcontainer support.

Worktrees live next to the main checkout as `repo@name`. Commands that take
an optional worktree name default to the worktree you are in.

**Common workflows:**

- `wt add feature` — Create `../repo@feature` off the current HEAD
- `wt cd feature` — Open a shell in it (`-c` creates it first)
- `wt code feature` — Open it in VS Code, attached to its devcontainer
- `wt exec -- make test` — Run a command in the current worktree's container
- `wt curl -- http://localhost:3000/` — Reach a container service via its SOCKS5 proxy
""",
    add_completion=True,
    rich_markup_mode="markdown",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output: log external commands and show output of launched browsers",
        ),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level: debug, info, warning, error"),
    ] = "warning",
    config_file: Annotated[
        str | None,
        typer.Option("--config", "-c", help="Path to config file"),
    ] = None,
) -> None:
    """Git worktree manager with devcontainer support."""
    setup_rich_logging("debug" if verbose else log_level)
    config = load_config(config_file)
    with reported_errors():
        settings = load_settings(config)
    ctx.obj = AppState(settings=settings, verbose=verbose)
    # Per-command option defaults from [defaults] and [<command>] tables
    ctx.default_map = command_defaults(config, list(getattr(ctx.command, "commands", {})))


# Import commands from other modules to register them
from .commands import browser, container, skill, worktrees  # noqa: E402, F401

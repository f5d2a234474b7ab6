"""Commands that create, list, remove and open worktrees."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Annotated

import typer

from wt_cli._output import error, info, reported_errors, success, warn
from wt_cli.cli import app
from wt_cli.core.process import ReplaceProcess, perform
from wt_cli.devcontainer.attach import vscode_attach_action
from wt_cli.errors import WtError
from wt_cli.launch import get_parent_shell
from wt_cli.worktree.naming import validate_worktree_name
from wt_cli.worktree.setup import (
    allow_direnv,
    copy_env_files,
    is_direnv_available,
    setup_devcontainer_env,
)

from ._common import (
    PASSTHROUGH_SETTINGS,
    AppState,
    complete_worktree_name,
    devcontainer_config,
    get_state,
    resolve_name_arg,
)

logger = logging.getLogger(__name__)


def _check_target_free(path: Path) -> None:
    """Refuse to create a worktree over an existing file or directory."""
    if path.is_dir():
        if (path / ".git").exists():
            error(
                f"'{path.name}' already exists with a .git entry; "
                "choose a different name or remove it first",
            )
        error(
            f"'{path.name}' already exists but is not a git worktree; "
            "choose a different name or remove it first",
        )
    if path.exists():
        error(f"'{path.name}' already exists as a file; choose a different name or remove it first")


def create_worktree(state: AppState, name: str, *, fetch: bool = True) -> Path:
    """Create the worktree ``name`` off the current HEAD and set up its environment."""
    validate_worktree_name(name)
    locator = state.locator()
    path = locator.resolve_path(name)
    _check_target_free(path)

    try:
        source = locator.current_worktree_root()
    except WtError:
        source = Path.cwd()

    git = locator.git
    # Relative gitdir links keep the worktree usable when mounted in a container
    git.set_config("worktree.useRelativePaths", "true")

    if fetch:
        if not git.has_remote("origin"):
            warn("git remote 'origin' not configured; skipping fetch")
        elif not git.fetch("origin"):
            warn("git fetch origin failed")

    info(f"Creating worktree '{name}' at {path}")
    git.add_worktree(path)

    copied = copy_env_files(source, path)
    if copied:
        success(f"Copied env file(s): {', '.join(f.name for f in copied)}")
    if any(f.name == ".envrc" for f in copied) and is_direnv_available():
        ok, msg = allow_direnv(path)
        if not ok:
            warn(msg)

    env_path = setup_devcontainer_env(source, path, name)
    if env_path is not None:
        info(f"Set GIT_WORKTREE={name} in {env_path.relative_to(path)}")
    return path


def _add_fetch_default(ctx: typer.Context) -> bool:
    """Return the configured ``wt add --fetch/--no-fetch`` default."""
    default_map = ctx.find_root().default_map or {}
    return bool(default_map.get("add", {}).get("fetch", True))


def _resolve_worktree_dir(ctx: typer.Context, name: str | None, *, create: bool) -> Path:
    """Resolve ``name`` to a directory, creating the worktree when missing.

    Without a name this is the main checkout. New worktrees follow the
    `[add]` config defaults.
    """
    state = get_state(ctx)
    locator = state.locator()
    if name is None:
        return locator.project_root()

    name = resolve_name_arg(name, locator)
    path = locator.resolve_path(name)
    if not path.exists():
        if not create and not typer.confirm(
            f"Worktree '{name}' doesn't exist. Create it now?",
            default=False,
        ):
            error("aborted")
        create_worktree(state, name, fetch=_add_fetch_default(ctx))
    return path


@app.command("add")
def add(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Worktree name; creates ../REPO@NAME as a sibling of the main checkout"),
    ],
    fetch: Annotated[
        bool,
        typer.Option(
            "--fetch/--no-fetch",
            help="Run 'git fetch origin' before creating the worktree",
        ),
    ] = True,
) -> None:
    """Create a new worktree (sibling of the main repo, e.g. `repo@name`).

    The worktree starts detached at the current HEAD. `.env` and `.envrc`
    are copied from the current checkout, and when the worktree has a
    `.devcontainer/`, `GIT_WORKTREE=<name>` is written to its `.env`.

    Prints the new worktree's path.
    """
    state = get_state(ctx)
    with reported_errors():
        path = create_worktree(state, name, fetch=fetch)
    print(path)


@app.command("ls")
@app.command("list", hidden=True)
def list_worktrees(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON. Fields: name, path"),
    ] = False,
) -> None:
    """List all sibling worktrees.

    Worktrees registered elsewhere (not as `repo@name` siblings) are not shown.
    """
    locator = get_state(ctx).locator()
    with reported_errors():
        names = locator.enumerate("")
        if json_output:
            data = [{"name": n, "path": locator.resolve_path(n).as_posix()} for n in names]
            print(json.dumps({"worktrees": data}))
            return
    for name in names:
        print(name)


@app.command("rm", context_settings=PASSTHROUGH_SETTINGS)
@app.command("remove", context_settings=PASSTHROUGH_SETTINGS, hidden=True)
def remove(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(
            help="Worktree to remove ('.' for the current one)",
            autocompletion=complete_worktree_name,
        ),
    ],
    extra: Annotated[
        list[str] | None,
        typer.Argument(help="Extra arguments for 'git worktree remove', e.g. --force"),
    ] = None,
) -> None:
    """Remove a worktree, then delete any files left in its directory."""
    locator = get_state(ctx).locator()
    with reported_errors():
        name = resolve_name_arg(name, locator)
        path = locator.resolve_path(name)
        returncode = locator.git.remove_worktree(path, extra or [])
    if returncode != 0:
        raise typer.Exit(returncode)

    # Untracked leftovers such as .vscode-profile
    if path.exists():
        try:
            shutil.rmtree(path)
        except OSError as e:
            warn(f"failed to remove {path}: {e}")
    success(f"Removed worktree: {name}")


@app.command("cd")
def cd(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(
            help="Worktree to enter ('.' for the current one); the main checkout if omitted",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
    create: Annotated[
        bool,
        typer.Option("--create", "-c", help="Create the worktree if it doesn't exist"),
    ] = False,
) -> None:
    """Open a new shell in the worktree directory."""
    with reported_errors():
        path = _resolve_worktree_dir(ctx, name, create=create)
        perform(ReplaceProcess([get_parent_shell()], cwd=path))


@app.command("code")
def code(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(
            help="Worktree to open ('.' for the current one); the main checkout if omitted",
            autocompletion=complete_worktree_name,
        ),
    ] = None,
    create: Annotated[
        bool,
        typer.Option("--create", "-c", help="Create the worktree if it doesn't exist"),
    ] = False,
) -> None:
    """Open the worktree directory in VS Code.

    With a `.devcontainer/devcontainer.json` and the devcontainer CLI
    installed, the container is brought up first and VS Code attaches to it,
    using a per-worktree profile and the container's SOCKS5 proxy.
    """
    state = get_state(ctx)
    with reported_errors():
        path = _resolve_worktree_dir(ctx, name, create=create)
        devcontainer = state.devcontainer()
        if devcontainer_config(path).is_file() and devcontainer.available():
            action = vscode_attach_action(path, devcontainer, state.sessions())
        else:
            action = ReplaceProcess(["code", str(path)])
        perform(action)


@app.command("name")
def name_cmd(ctx: typer.Context) -> None:
    """Print the name of the current worktree."""
    locator = get_state(ctx).locator()
    with reported_errors():
        print(locator.current_worktree_name())


@app.command("dir")
def dir_cmd(ctx: typer.Context) -> None:
    """Print the root directory of the current worktree or git project."""
    locator = get_state(ctx).locator()
    with reported_errors():
        print(locator.current_worktree_root())

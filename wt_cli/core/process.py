"""Running external commands and the terminal actions commands end with.

Commands that hand control to another program (a shell, VS Code, the
devcontainer CLI) do not call ``os.exec*`` themselves. They build a
terminal action and hand it to `perform`, which is the only place that
replaces the process, spawns detached children, or runs a command to
completion on the user's terminal.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from wt_cli.errors import ToolNotFoundError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)


def format_argv(argv: Sequence[str | Path]) -> str:
    """Render an argument vector as a copy-pasteable shell command."""
    return shlex.join(str(a) for a in argv)


def run_command(
    argv: Sequence[str | Path],
    *,
    cwd: Path | None = None,
    capture_output: bool = True,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command without raising on a non-zero exit status.

    A missing executable raises `ToolNotFoundError`.
    """
    args = [str(a) for a in argv]
    logger.debug("Running: %s", format_argv(args))
    try:
        return subprocess.run(  # noqa: S603
            args,
            cwd=cwd,
            capture_output=capture_output,
            text=True,
            check=False,
            env=dict(env) if env is not None else None,
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(args[0]) from e


# --- Terminal actions ---


@dataclass(frozen=True)
class RunCommand:
    """Run a command on the user's terminal and exit with its status."""

    argv: list[str]
    cwd: Path | None = None
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ReplaceProcess:
    """Replace the current process with ``argv`` (``exec``)."""

    argv: list[str]
    cwd: Path | None = None
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SpawnDetached:
    """Start a long-running program (a browser) and return immediately."""

    argv: list[str]
    quiet: bool = True


TerminalAction = RunCommand | ReplaceProcess | SpawnDetached


def _which(executable: str) -> str:
    if os.sep in executable:
        return executable
    path = shutil.which(executable)
    if path is None:
        raise ToolNotFoundError(executable)
    return path


def perform(action: TerminalAction) -> int:
    """Carry out a terminal action and return the exit status for the CLI.

    `ReplaceProcess` never returns.
    """
    executable = _which(action.argv[0])
    if isinstance(action, ReplaceProcess):
        logger.debug("Exec: %s", format_argv(action.argv))
        if action.cwd is not None:
            os.chdir(action.cwd)
        env = {**os.environ, **action.env}
        os.execve(executable, action.argv, env)  # noqa: S606
    if isinstance(action, SpawnDetached):
        logger.debug("Spawning: %s", format_argv(action.argv))
        output = subprocess.DEVNULL if action.quiet else None
        subprocess.Popen(  # noqa: S603
            [executable, *action.argv[1:]],
            stdout=output,
            stderr=output,
            start_new_session=True,
        )
        return 0
    logger.debug("Running: %s", format_argv(action.argv))
    result = subprocess.run(  # noqa: S603
        [executable, *action.argv[1:]],
        cwd=action.cwd,
        env={**os.environ, **action.env},
        check=False,
    )
    return result.returncode

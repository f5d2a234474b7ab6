"""Exceptions raised while resolving worktrees and devcontainer sessions.

Core modules raise these; the CLI reports them in one place
(`wt_cli._output.reported_errors`) and exits with status 1.
"""

from __future__ import annotations


class WtError(Exception):
    """Base class for all wt errors."""


class InvalidNameError(WtError):
    """A worktree name failed validation."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        self.name = name
        if not name:
            msg = "worktree name cannot be empty"
        elif reason:
            msg = f"invalid worktree name {name!r}: {reason}"
        else:
            msg = f"invalid worktree name {name!r}"
        super().__init__(msg)


class NotARepositoryError(WtError):
    """The current directory is not inside a git repository."""

    def __init__(self, detail: str | None = None) -> None:
        msg = "not in a git repository"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class NotInNamedWorktreeError(WtError):
    """The current directory is the primary checkout or an unrecognized directory."""


class WorktreeNotFoundError(WtError):
    """An explicit reference names a worktree that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"worktree not found: {name}")


class NoRunningSessionError(WtError):
    """No devcontainer is running for the worktree."""

    def __init__(self, worktree: str, *, include_stopped: bool = False) -> None:
        self.worktree = worktree
        kind = "devcontainer" if include_stopped else "running devcontainer"
        super().__init__(f"no {kind} found for {worktree!r}")


class NoProxyMappingError(WtError):
    """The devcontainer is running but its proxy port is not published."""

    def __init__(self, worktree: str, container_port: int) -> None:
        self.worktree = worktree
        self.container_port = container_port
        super().__init__(
            f"no proxy port mapped for devcontainer {worktree!r} (container port {container_port})",
        )


class ToolOutputError(WtError):
    """An external tool produced output that violates its expected format."""

    def __init__(self, msg: str, raw: str) -> None:
        self.raw = raw
        super().__init__(msg)


class MalformedSessionOutputError(ToolOutputError):
    """The `devcontainer up` summary line could not be decoded."""


class MalformedPortOutputError(ToolOutputError):
    """A `docker port` line is not a host:port pair."""


class NoStructuredOutputError(ToolOutputError):
    """`devcontainer up` printed no JSON summary line."""


class ToolNotFoundError(WtError):
    """A required executable is not on PATH."""

    def __init__(self, executable: str, hint: str | None = None) -> None:
        self.executable = executable
        msg = f"could not find {executable!r}"
        if hint:
            msg = f"{msg}; {hint}"
        super().__init__(msg)


class CommandFailedError(WtError):
    """An external command exited with a non-zero status."""

    def __init__(self, argv: list[str], returncode: int, stderr: str = "") -> None:
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr
        msg = f"{argv[0]} {argv[1] if len(argv) > 1 else ''}".strip()
        msg = f"{msg} failed with exit code {returncode}"
        if stderr.strip():
            msg = f"{msg}: {stderr.strip()}"
        super().__init__(msg)


class DevcontainerExistsError(WtError):
    """``.devcontainer/`` is already present and overwriting was not requested."""

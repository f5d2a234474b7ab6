"""Container runtime adapter (docker or podman) and parsers for its output."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wt_cli.core.process import run_command
from wt_cli.errors import CommandFailedError, MalformedPortOutputError

if TYPE_CHECKING:
    import subprocess

    from wt_cli.config import Settings

logger = logging.getLogger(__name__)


def first_container_id(output: str) -> str | None:
    """Return the first container ID from ``docker ps -q`` output.

    Duplicate containers for one folder can linger, so several IDs may be
    listed; the runtime lists the most recent first.
    """
    lines = output.split("\n")
    container_id = lines[0].strip()
    return container_id or None


def split_host_port(addr: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[v6host]:port``.

    Raises ValueError when ``addr`` is not a host:port pair.
    """
    host, sep, port = addr.rpartition(":")
    if not sep:
        msg = "missing port in address"
        raise ValueError(msg)
    if host.startswith("["):
        if not host.endswith("]"):
            msg = "missing ']' in address"
            raise ValueError(msg)
        host = host[1:-1]
    elif ":" in host:
        msg = "too many colons in address"
        raise ValueError(msg)
    return host, port


def parse_published_port(output: str) -> int | None:
    """Return the host port from ``docker port <id> <port>`` output.

    One line is printed per address family (``0.0.0.0:32768`` and
    ``[::]:32768``); the first is used. Empty output means no mapping.
    """
    addr = output.split("\n")[0].strip()
    if not addr:
        return None
    try:
        _, port = split_host_port(addr)
        value = int(port)
    except ValueError as e:
        msg = f"failed to parse port from {addr!r}: {e}"
        raise MalformedPortOutputError(msg, addr) from e
    if not 0 < value < 65536:  # noqa: PLR2004
        msg = f"failed to parse port from {addr!r}: out of range"
        raise MalformedPortOutputError(msg, addr)
    return value


class ContainerRuntime:
    """Queries the container runtime for devcontainer instances."""

    def __init__(self, settings: Settings) -> None:
        self.executable = settings.container_runtime

    def _run(self, *args: str, capture_output: bool = True) -> subprocess.CompletedProcess[str]:
        return run_command([self.executable, *args], capture_output=capture_output)

    def find_by_label(self, label: str, *, include_stopped: bool = False) -> str:
        """Return raw ``ps -q`` output for containers carrying ``label``."""
        args = ["ps", "-aq" if include_stopped else "-q", "--filter", f"label={label}"]
        result = self._run(*args)
        if result.returncode != 0:
            raise CommandFailedError([self.executable, *args], result.returncode, result.stderr)
        return result.stdout

    def published_port(self, container_id: str, internal_port: int) -> str | None:
        """Return raw ``port`` output, or None when the port is not published."""
        result = self._run("port", container_id, str(internal_port))
        if result.returncode != 0:
            logger.debug(
                "No published port %s for %s: %s",
                internal_port,
                container_id,
                result.stderr.strip(),
            )
            return None
        return result.stdout

    def remove(self, container_id: str) -> int:
        """Force-remove a container, streaming the runtime's output."""
        return self._run("rm", "-f", container_id, capture_output=False).returncode

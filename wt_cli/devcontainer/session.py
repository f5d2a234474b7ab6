"""Find the devcontainer running for a worktree and its proxy port."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wt_cli.errors import NoProxyMappingError, NoRunningSessionError

from .runtime import first_container_id, parse_published_port

if TYPE_CHECKING:
    from pathlib import Path

    from wt_cli.config import Settings

    from .runtime import ContainerRuntime

logger = logging.getLogger(__name__)


class SessionResolver:
    """Look up devcontainer sessions by the workspace folder label.

    The devcontainer CLI labels each container with the host folder it was
    started for, so the worktree path is the lookup key. Absence of a
    container is reported, never retried.
    """

    def __init__(self, runtime: ContainerRuntime, settings: Settings) -> None:
        self.runtime = runtime
        self.settings = settings

    def label_for(self, workspace: Path) -> str:
        """Return the label filter identifying ``workspace``'s container."""
        return f"{self.settings.folder_label}={workspace}"

    def find_container(self, workspace: Path, *, include_stopped: bool = False) -> str:
        """Return the container ID for ``workspace``."""
        output = self.runtime.find_by_label(
            self.label_for(workspace),
            include_stopped=include_stopped,
        )
        container_id = first_container_id(output)
        if container_id is None:
            raise NoRunningSessionError(workspace.name, include_stopped=include_stopped)
        logger.debug("Found container %s for %s", container_id, workspace)
        return container_id

    def proxy_port(self, workspace: Path) -> int:
        """Return the host port published for the container's SOCKS5 proxy."""
        container_id = self.find_container(workspace)
        output = self.runtime.published_port(container_id, self.settings.proxy_port)
        port = parse_published_port(output) if output is not None else None
        if port is None:
            raise NoProxyMappingError(workspace.name, self.settings.proxy_port)
        return port

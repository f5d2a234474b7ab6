"""Open VS Code attached to a worktree's devcontainer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wt_cli.core.process import ReplaceProcess
from wt_cli.errors import NoProxyMappingError, NoRunningSessionError
from wt_cli.launch import vscode_attach_argv
from wt_cli.proxy import socks_proxy_url

from .tool import attached_container_uri, parse_up_transcript

if TYPE_CHECKING:
    from pathlib import Path

    from .session import SessionResolver
    from .tool import DevcontainerCli

logger = logging.getLogger(__name__)


def vscode_attach_action(
    workspace: Path,
    devcontainer: DevcontainerCli,
    sessions: SessionResolver,
    code: str = "code",
) -> ReplaceProcess:
    """Bring the devcontainer up and return the action that opens VS Code in it.

    The proxy is optional here: without a published proxy port, VS Code
    opens without ``--proxy-server``.
    """
    transcript = devcontainer.up(workspace)
    session = parse_up_transcript(transcript)
    folder_uri = attached_container_uri(session)
    logger.debug("Attaching to %s", folder_uri)

    proxy_url = None
    try:
        proxy_url = socks_proxy_url(sessions.proxy_port(workspace))
    except (NoRunningSessionError, NoProxyMappingError) as e:
        logger.info("Opening without proxy: %s", e)

    return ReplaceProcess(vscode_attach_argv(code, workspace, folder_uri, proxy_url))

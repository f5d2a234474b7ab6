"""Adapter for the devcontainer CLI and parsing of ``devcontainer up`` output."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import TYPE_CHECKING, TextIO

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wt_cli.constants import ATTACHED_CONTAINER_URI
from wt_cli.core.process import format_argv
from wt_cli.errors import (
    CommandFailedError,
    MalformedSessionOutputError,
    NoStructuredOutputError,
    ToolNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from wt_cli.config import Settings

logger = logging.getLogger(__name__)


class SessionDescriptor(BaseModel):
    """The summary ``devcontainer up`` prints once the container is ready."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    container_id: str = Field(alias="containerId")
    remote_workspace_folder: str = Field(alias="remoteWorkspaceFolder")


def find_summary_line(transcript: str) -> str:
    """Return the last line of ``transcript`` that looks like a JSON object.

    Progress text is interleaved with the JSON summary, and some versions
    print partial JSON before the final one, so later lines win.
    """
    summary = None
    for line in transcript.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith("{"):
            summary = trimmed
    if summary is None:
        msg = "devcontainer up produced no JSON output"
        raise NoStructuredOutputError(msg, transcript)
    return summary


def parse_up_transcript(transcript: str) -> SessionDescriptor:
    """Decode the session summary from a ``devcontainer up`` transcript."""
    line = find_summary_line(transcript)
    try:
        return SessionDescriptor.model_validate_json(line)
    except ValidationError as e:
        msg = f"failed to parse devcontainer up output {line!r}: {e.error_count()} error(s)"
        raise MalformedSessionOutputError(msg, line) from e


def attached_container_uri(session: SessionDescriptor) -> str:
    """Build the VS Code folder URI for attaching to ``session``'s container.

    The container ID is hex-encoded so it is safe in the URI's authority.
    """
    return ATTACHED_CONTAINER_URI.format(
        hex_id=session.container_id.encode().hex(),
        folder=session.remote_workspace_folder,
    )


class DevcontainerCli:
    """Runs the devcontainer CLI for a workspace folder."""

    def __init__(self, settings: Settings) -> None:
        self.executable = settings.devcontainer

    def available(self) -> bool:
        """Check if the devcontainer CLI is installed."""
        return shutil.which(self.executable) is not None

    def argv(self, subcommand: str, workspace: Path, extra: Sequence[str] = ()) -> list[str]:
        """Return the command line for ``devcontainer <subcommand>``."""
        return [self.executable, subcommand, "--workspace-folder", str(workspace), *extra]

    def up(self, workspace: Path, *, echo: TextIO | None = None) -> str:
        """Run ``devcontainer up`` and return its combined output.

        Output is echoed to ``echo`` (stdout by default) line by line while
        being captured.
        """
        echo = echo or sys.stdout
        argv = self.argv("up", workspace)
        logger.debug("Running: %s", format_argv(argv))
        lines: list[str] = []
        try:
            proc = subprocess.Popen(  # noqa: S603
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(self.executable) from e
        with proc:
            assert proc.stdout is not None
            for line in proc.stdout:
                echo.write(line)
                echo.flush()
                lines.append(line)
        if proc.returncode != 0:
            raise CommandFailedError(argv, proc.returncode)
        return "".join(lines)

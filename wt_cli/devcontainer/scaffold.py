"""Write a minimal ``.devcontainer/`` with a SOCKS5 proxy on port 1080."""

from __future__ import annotations

import logging
from importlib import resources
from typing import TYPE_CHECKING

from wt_cli.errors import DevcontainerExistsError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

TEMPLATE_FILES = ("devcontainer.json", "Dockerfile", "supervisord.conf")


def read_template(name: str) -> str:
    """Return the bundled template ``name``."""
    return resources.files("wt_cli.devcontainer").joinpath("templates", name).read_text()


def write_devcontainer(project_dir: Path, *, force: bool = False) -> list[Path]:
    """Write the template files into ``project_dir/.devcontainer``.

    Returns the written paths.
    """
    target = project_dir / ".devcontainer"
    if target.is_dir():
        if not force:
            msg = ".devcontainer/ already exists; use --force to overwrite"
            raise DevcontainerExistsError(msg)
        logger.info("Overwriting existing .devcontainer/ directory")
    target.mkdir(parents=True, exist_ok=True)

    written = []
    for name in TEMPLATE_FILES:
        path = target / name
        logger.info("Writing .devcontainer/%s", name)
        path.write_text(read_template(name))
        written.append(path)
    return written

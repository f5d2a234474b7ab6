"""wt - git worktrees as sibling directories, with devcontainer session discovery."""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("wt-cli")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"

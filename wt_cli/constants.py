"""Default configuration settings for the wt package."""

from __future__ import annotations

# --- Worktree layout ---
WORKTREE_DELIMITER = "@"  # repo -> repo@name
CURRENT_WORKTREE_MARKER = "."
PAYLOAD_SEPARATOR = "--"

# --- Devcontainer ---
DEVCONTAINER_FOLDER_LABEL = "devcontainer.local_folder"
PROXY_CONTAINER_PORT = 1080  # SOCKS5 proxy inside the container
LOOPBACK_ADDRESS = "127.0.0.1"

# --- VS Code attachment ---
ATTACHED_CONTAINER_URI = "vscode-remote://attached-container+{hex_id}{folder}"
VSCODE_PROFILE_DIR = ".vscode-profile"
CHROME_PROFILE_DIR = ".chrome-profile"

# Interactive shell used by `wt exec` inside a container when no command is given
DEFAULT_CONTAINER_SHELL = [
    "/bin/sh",
    "-c",
    "command -v bash >/dev/null 2>&1 && exec bash || exec sh",
]

"""Build the command lines for shells, editors and browsers opened on a worktree."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path

import psutil

from wt_cli.constants import CHROME_PROFILE_DIR, VSCODE_PROFILE_DIR
from wt_cli.errors import ToolNotFoundError

logger = logging.getLogger(__name__)

_CHROME_COMMANDS = ("google-chrome", "google-chrome-stable", "chromium-browser", "chromium")
_CHROME_MACOS = Path("/Applications/Google Chrome.app/Contents/MacOS/Google Chrome")


def get_parent_shell() -> str:
    """Return the shell that invoked wt, falling back to ``$SHELL`` and ``/bin/sh``."""
    try:
        name = psutil.Process(os.getppid()).name()
    except psutil.Error:
        name = ""
    # Login shells show up as "-zsh" or "-bash"
    name = name.removeprefix("-")
    if name:
        return name
    return os.environ.get("SHELL") or "/bin/sh"


def find_chrome_binary() -> str:
    """Locate Google Chrome or Chromium."""
    for name in _CHROME_COMMANDS:
        if path := shutil.which(name):
            return path
    if sys.platform == "darwin" and _CHROME_MACOS.exists():
        return str(_CHROME_MACOS)
    raise ToolNotFoundError(
        "Chrome",
        "install Google Chrome or add it to your PATH",
    )


def chrome_argv(
    chrome: str,
    worktree_dir: Path,
    proxy_url: str,
    extra: list[str],
) -> list[str]:
    """Chrome with a per-worktree profile, forcing all traffic through the proxy."""
    profile_dir = worktree_dir / CHROME_PROFILE_DIR
    profile_dir.mkdir(parents=True, exist_ok=True)
    return [
        chrome,
        f"--user-data-dir={profile_dir}",
        # Skip onboarding UI in fresh profiles
        "--no-first-run",
        "--no-default-browser-check",
        "--disable-sync",
        "--disable-features=ChromeSignin",
        f"--proxy-server={proxy_url}",
        # Loopback targets go through the proxy too
        "--proxy-bypass-list=<-loopback>",
        *extra,
    ]


def playwright_argv(npx: str, proxy_url: str, extra: list[str]) -> list[str]:
    """``npx playwright open`` behind the worktree's proxy."""
    return [npx, "playwright", "open", f"--proxy-server={proxy_url}", *extra]


def curl_argv(curl: str, proxy_url: str, extra: list[str]) -> list[str]:
    """Curl through the proxy; ``--noproxy ''`` overrides NO_PROXY from the environment."""
    return [curl, "--proxy", proxy_url, "--noproxy", "", *extra]


# --- VS Code ---


def default_vscode_user_data_dir() -> Path | None:
    """Return VS Code's default user data directory for this platform."""
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "Code"
    if sys.platform.startswith("linux"):
        return home / ".config" / "Code"
    return None


def default_vscode_extensions_dir() -> Path:
    """Return VS Code's default extensions directory."""
    return Path.home() / ".vscode" / "extensions"


def setup_vscode_profile(user_data_dir: Path) -> None:
    """Share settings with the default VS Code profile by symlinking its ``User`` dir.

    Failures are logged, since the editor works without shared settings.
    """
    default_dir = default_vscode_user_data_dir()
    if default_dir is None:
        return
    default_user = default_dir / "User"
    if not default_user.is_dir():
        return
    link = user_data_dir / "User"
    try:
        user_data_dir.mkdir(parents=True, exist_ok=True)
        if not link.exists() and not link.is_symlink():
            link.symlink_to(default_user)
    except OSError as e:
        logger.warning("Could not link VS Code settings into %s: %s", user_data_dir, e)


def vscode_attach_argv(
    code: str,
    worktree_dir: Path,
    folder_uri: str,
    proxy_url: str | None,
) -> list[str]:
    """VS Code attached to a container, with a per-worktree profile."""
    user_data_dir = worktree_dir / VSCODE_PROFILE_DIR
    setup_vscode_profile(user_data_dir)
    argv = [code, "--user-data-dir", str(user_data_dir), "--folder-uri", folder_uri]
    extensions_dir = default_vscode_extensions_dir()
    if extensions_dir.is_dir():
        argv += ["--extensions-dir", str(extensions_dir)]
    if proxy_url is not None:
        argv.append(f"--proxy-server={proxy_url}")
    return argv

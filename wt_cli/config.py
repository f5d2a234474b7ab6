"""Settings model and config file loading for wt."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from wt_cli import constants
from wt_cli.core.utils import err_console

# --- Config File Loading ---

CONFIG_PATH = Path.home() / ".config" / "wt" / "config.toml"
CONFIG_PATH_2 = Path("wt-config.toml")


def _replace_dashed_keys_recursive(d: dict[str, Any]) -> dict[str, Any]:
    """Recursively replace dashed keys with underscores in a dictionary."""
    new_dict = {}
    for k, v in d.items():
        new_key = k.replace("-", "_")
        if isinstance(v, dict):
            new_dict[new_key] = _replace_dashed_keys_recursive(v)
        else:
            new_dict[new_key] = v
    return new_dict


def load_config(config_path_str: str | None = None) -> dict[str, Any]:
    """Load the TOML configuration file and normalize its keys."""
    if config_path_str:
        config_path = Path(config_path_str).expanduser()
    elif CONFIG_PATH.exists():
        config_path = CONFIG_PATH
    elif CONFIG_PATH_2.exists():
        config_path = CONFIG_PATH_2
    else:
        return {}

    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                return _replace_dashed_keys_recursive(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            err_console.print(
                f"[bold red]Error parsing config file {config_path}: {e}[/bold red]",
            )
            return {}

    # Report error only if an explicit path was given
    if config_path_str:
        err_console.print(
            f"[bold red]Config file not found at {config_path_str}[/bold red]",
        )
    return {}


def command_defaults(config: dict[str, Any], commands: list[str]) -> dict[str, dict[str, Any]]:
    """Build a click ``default_map`` for the given subcommands.

    ``[defaults]`` applies to every command, ``[<command>]`` overrides it.
    """
    wildcard = config.get("defaults", {})
    default_map: dict[str, dict[str, Any]] = {}
    for name in commands:
        section = config.get(name.replace("-", "_"), {})
        if not isinstance(section, dict):
            section = {}
        merged = {**wildcard, **section}
        if merged:
            default_map[name] = merged
    return default_map


# --- Pydantic Models for Configuration ---


class Settings(BaseModel):
    """Resolver configuration, passed explicitly to every component."""

    delimiter: str = constants.WORKTREE_DELIMITER
    proxy_port: int = Field(default=constants.PROXY_CONTAINER_PORT, ge=1, le=65535)
    git: str = "git"
    container_runtime: str = "docker"
    devcontainer: str = "devcontainer"
    folder_label: str = constants.DEVCONTAINER_FOLDER_LABEL

    @field_validator("delimiter")
    @classmethod
    def _single_safe_character(cls, v: str) -> str:
        if len(v) != 1:
            msg = "delimiter must be a single character"
            raise ValueError(msg)
        if v in ("/", "\\", "."):
            msg = f"delimiter {v!r} cannot be a path character"
            raise ValueError(msg)
        return v


def load_settings(config: dict[str, Any]) -> Settings:
    """Create `Settings` from the ``[settings]`` table of a loaded config."""
    return Settings.model_validate(config.get("settings", {}))

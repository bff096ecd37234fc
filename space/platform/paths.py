"""User-level directory lookup.

Project-local state lives next to the project (see ``space.project.state``);
these paths are for per-user files: config.toml and the access token.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

__all__ = [
    "home",
    "user_config_dir",
    "token_file",
    "clear_caches",
]

APP_NAME = "space"

# Shared with the other Space tooling; not namespaced by APP_NAME.
TOKEN_DIR = ".detaspace"
TOKEN_FILE = "space_tokens"


def _is_windows() -> bool:
    return os.name == "nt"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory.

    Honours USERPROFILE on Windows and HOME elsewhere before falling back to
    Path.home(), so containers and tests can redirect it.
    """
    if _is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Location of config.toml.

    ~/.config/space/ (Linux/macOS, or $XDG_CONFIG_HOME/space) and
    %APPDATA%/space on Windows.
    """
    if _is_windows():
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def token_file() -> Path:
    return home() / TOKEN_DIR / TOKEN_FILE


def clear_caches() -> None:
    """Forget cached paths (tests change HOME/XDG_CONFIG_HOME)."""
    home.cache_clear()
    user_config_dir.cache_clear()

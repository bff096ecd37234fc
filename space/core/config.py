"""Typed client configuration.

Names of the hidden state directory, the release channel and the service
URLs are values on ``SpaceConfig`` rather than module constants, so tests and
alternate deployments can inject their own. Defaults can be overridden in
``<user-config-dir>/config.toml``:

    [space]
    api_url = "https://v1.deta.sh"
    builder_url = "https://deta.space/builder"
    release_channel = "experimental"
    timeout = 30

and by the ``SPACE_API_URL`` / ``SPACE_BUILDER_URL`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table

__all__ = [
    "SpaceConfig",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "apply_env_overrides",
    "DEFAULT_API_URL",
    "DEFAULT_BUILDER_URL",
    "DEFAULT_RELEASE_CHANNEL",
]

DEFAULT_API_URL = "https://v1.deta.sh"
DEFAULT_BUILDER_URL = "https://deta.space/builder"
# Releases always go out on the experimental channel for now.
DEFAULT_RELEASE_CHANNEL = "experimental"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class SpaceConfig:
    """Client configuration.

    Attributes:
        state_dir: Hidden per-project directory holding local metadata.
        meta_file: Name of the metadata file inside ``state_dir``.
        readme_file: Name of the warning note inside ``state_dir``.
        release_channel: Channel every release request is submitted on.
        revision_window: How many recent revisions are offered for selection.
        api_url: Base URL of the Space API.
        builder_url: Base URL of the web builder (used in messages).
        timeout: Timeout in seconds for non-streaming API requests.
    """

    state_dir: str = ".space"
    meta_file: str = "meta"
    readme_file: str = "README"
    release_channel: str = DEFAULT_RELEASE_CHANNEL
    revision_window: int = 5
    api_url: str = DEFAULT_API_URL
    builder_url: str = DEFAULT_BUILDER_URL
    timeout: float = 30.0

    def develop_url(self, project_id: str) -> str:
        return f"{self.builder_url.rstrip('/')}/{project_id}/develop"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> SpaceConfig:
        """Create config from a parsed TOML mapping."""
        table: StrDict = get_table(data, "space") or {}
        defaults = cls()

        window = get_int(table, "revision_window")
        if window is not None and window < 1:
            raise ValueError("revision_window must be >= 1")

        return cls(
            state_dir=get_str(table, "state_dir") or defaults.state_dir,
            meta_file=get_str(table, "meta_file") or defaults.meta_file,
            readme_file=get_str(table, "readme_file") or defaults.readme_file,
            release_channel=get_str(table, "release_channel") or defaults.release_channel,
            revision_window=window or defaults.revision_window,
            api_url=get_str(table, "api_url") or defaults.api_url,
            builder_url=get_str(table, "builder_url") or defaults.builder_url,
            timeout=get_float(table, "timeout") or defaults.timeout,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data = as_str_dict(tomllib.loads(content.decode("utf-8")))
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except (UnicodeDecodeError, OSError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[SpaceConfig, ConfigError]:
    """Load configuration from a TOML file.

    Returns:
        Ok(SpaceConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(SpaceConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def apply_env_overrides(
    config: SpaceConfig, environ: Mapping[str, str] | None = None
) -> SpaceConfig:
    env = os.environ if environ is None else environ
    api_url = env.get("SPACE_API_URL", "").strip()
    builder_url = env.get("SPACE_BUILDER_URL", "").strip()
    if api_url:
        config = replace(config, api_url=api_url)
    if builder_url:
        config = replace(config, builder_url=builder_url)
    return config


def load_config_or_default(path: Path) -> Result[SpaceConfig, ConfigError]:
    """Load config.toml if present, else defaults; env overrides always apply.

    A missing file is not an error. A broken file is returned as Err so the
    caller can warn before falling back to ``SpaceConfig()``.
    """
    if not path.exists():
        return Ok(apply_env_overrides(SpaceConfig()))

    result = load_config(path)
    if isinstance(result, Err):
        return result
    return Ok(apply_env_overrides(result.value))

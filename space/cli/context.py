from __future__ import annotations

from dataclasses import dataclass

from space.api.client import SpaceClient
from space.api.http import HttpSpaceClient
from space.core.config import SpaceConfig, load_config_or_default
from space.core.result import Err
from space.output.console import ConsoleProtocol, RichConsole
from space.platform.paths import user_config_dir


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: SpaceConfig
    console: ConsoleProtocol
    client: SpaceClient


def build_context() -> CLIContext:
    console = RichConsole()

    config_path = user_config_dir() / "config.toml"
    loaded = load_config_or_default(config_path)
    if isinstance(loaded, Err):
        console.warning(f"{loaded.error.message}; using defaults")
        config = SpaceConfig()
    else:
        config = loaded.value

    return CLIContext(
        config=config,
        console=console,
        client=HttpSpaceClient(config),
    )

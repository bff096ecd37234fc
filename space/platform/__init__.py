"""Platform abstraction layer."""

from .files import DIR_MODE, FILE_MODE, atomic_write_text
from .paths import (
    clear_caches,
    home,
    token_file,
    user_config_dir,
)

__all__ = [
    # files
    "DIR_MODE",
    "FILE_MODE",
    "atomic_write_text",
    # paths
    "clear_caches",
    "home",
    "token_file",
    "user_config_dir",
]

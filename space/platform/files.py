"""Filesystem helpers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "FILE_MODE", "DIR_MODE"]

# rw-rw----
FILE_MODE = 0o660
# rwxrwx---
DIR_MODE = 0o770


def atomic_write_text(
    path: Path,
    content: str,
    *,
    mode: int = FILE_MODE,
    encoding: str = "utf-8",
) -> None:
    """Write text to path atomically with explicit permission bits.

    The temp file is created next to ``path``, chmod'ed to ``mode`` and then
    moved over the target, so readers never observe a partial write and the
    final permissions do not depend on the umask. The parent directory must
    already exist.

    Raises:
        OSError: If the temp file cannot be written or moved into place.
    """
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)

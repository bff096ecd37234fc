from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from space.platform.files import FILE_MODE, atomic_write_text


def test_atomic_write_text_replaces_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "meta"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_atomic_write_text_sets_mode(tmp_path: Path) -> None:
    path = tmp_path / "meta"
    atomic_write_text(path, "{}", mode=FILE_MODE)

    assert stat.S_IMODE(path.stat().st_mode) == 0o660


def test_atomic_write_text_requires_parent(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        atomic_write_text(tmp_path / "missing" / "meta", "{}")


def test_atomic_write_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "meta"

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "payload")

    assert list(tmp_path.glob(".meta.*.tmp")) == []

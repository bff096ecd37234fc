from __future__ import annotations

from pathlib import Path

from space.api.auth import load_access_token
from space.core.result import Err, Ok


def test_env_token_wins(tmp_path: Path) -> None:
    result = load_access_token(
        environ={"SPACE_ACCESS_TOKEN": " env-token "},
        path=tmp_path / "space_tokens",
    )
    assert result == Ok("env-token")


def test_token_file(tmp_path: Path) -> None:
    path = tmp_path / "space_tokens"
    path.write_text('{"access_token": "file-token"}', encoding="utf-8")

    assert load_access_token(environ={}, path=path) == Ok("file-token")


def test_missing_token_is_unauthenticated(tmp_path: Path) -> None:
    result = load_access_token(environ={}, path=tmp_path / "space_tokens")
    assert isinstance(result, Err)
    assert result.error.is_unauthenticated


def test_token_file_without_token(tmp_path: Path) -> None:
    path = tmp_path / "space_tokens"
    path.write_text('{"other": 1}', encoding="utf-8")

    result = load_access_token(environ={}, path=path)
    assert isinstance(result, Err)
    assert result.error.kind == "unauthenticated"


def test_corrupt_token_file(tmp_path: Path) -> None:
    path = tmp_path / "space_tokens"
    path.write_text("{", encoding="utf-8")

    result = load_access_token(environ={}, path=path)
    assert isinstance(result, Err)
    assert "invalid token file" in result.error.message


def test_non_utf8_token_file(tmp_path: Path) -> None:
    path = tmp_path / "space_tokens"
    path.write_bytes(b'{"access_token": "\xff\xfe"}')

    result = load_access_token(environ={}, path=path)
    assert isinstance(result, Err)
    assert result.error.kind == "unauthenticated"
    assert "invalid token file" in result.error.message

"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from space.core.errors import ErrorCode
from space.output.console import ConsoleProtocol, Style


def exit_with_error(
    console: ConsoleProtocol,
    message: str,
    *,
    code: ErrorCode,
    hint: str | None = None,
) -> NoReturn:
    console.error(message)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)
    raise typer.Exit(code=int(code))


def release_error_code(kind: str) -> ErrorCode:
    if kind in {"auth_required", "project_not_initialized"}:
        return ErrorCode.ENV_ERROR
    if kind in {"revisions_failed", "submit_failed", "stream_failed", "status_unknown"}:
        return ErrorCode.NETWORK_ERROR
    if kind in {"state_failed"}:
        return ErrorCode.IO_ERROR
    if kind in {"release_failed"}:
        return ErrorCode.RELEASE_FAILED
    return ErrorCode.USER_ERROR


def require_not_blank(console: ConsoleProtocol, **values: str | None) -> None:
    """Reject flags that were passed but are empty (``--rid ""``)."""
    for name, value in values.items():
        if value is not None and not value.strip():
            exit_with_error(
                console,
                f"--{name} must not be empty",
                code=ErrorCode.USER_ERROR,
            )

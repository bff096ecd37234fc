"""Access token lookup.

The token comes from ``SPACE_ACCESS_TOKEN`` or, failing that, from the token
file written by ``space login`` (``~/.detaspace/space_tokens``):

    {"access_token": "..."}

No token is the "unauthenticated" condition; callers print login guidance.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from space.api.errors import ApiError
from space.core.result import Err, Ok, Result
from space.core.structured import as_str_dict, get_str
from space.platform.paths import token_file

__all__ = ["ACCESS_TOKEN_ENV", "load_access_token", "login_info"]

ACCESS_TOKEN_ENV = "SPACE_ACCESS_TOKEN"


def login_info() -> str:
    return (
        "No auth token found. Generate an access token in your Space settings "
        "and run `space login` to authenticate."
    )


def load_access_token(
    *,
    environ: Mapping[str, str] | None = None,
    path: Path | None = None,
) -> Result[str, ApiError]:
    env = os.environ if environ is None else environ
    from_env = env.get(ACCESS_TOKEN_ENV, "").strip()
    if from_env:
        return Ok(from_env)

    token_path = path or token_file()
    try:
        raw = token_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ApiError(kind="unauthenticated", message="no access token found"))
    except OSError as e:
        return Err(ApiError(kind="unauthenticated", message=f"cannot read {token_path}: {e}"))
    except UnicodeDecodeError as e:
        return Err(ApiError(kind="unauthenticated", message=f"invalid token file: {e}"))

    try:
        data = as_str_dict(json.loads(raw))
    except json.JSONDecodeError as e:
        return Err(ApiError(kind="unauthenticated", message=f"invalid token file: {e}"))

    token = get_str(data, "access_token") if data is not None else None
    if token is None:
        return Err(ApiError(kind="unauthenticated", message="no access token found"))
    return Ok(token)

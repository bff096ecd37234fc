from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "auth_required",
    "no_revisions",
    "revisions_failed",
    "project_not_initialized",
    "invalid_input",
    "state_failed",
    "submit_failed",
    "stream_failed",
    "status_unknown",
    "release_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

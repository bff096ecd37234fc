from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ReleaseState(StrEnum):
    RESOLVING_REVISION = "resolving_revision"
    SUBMITTING = "submitting"
    STREAMING_LOGS = "streaming_logs"
    POLLING_PROMOTION = "polling_promotion"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    # Stopped before anything was released because the user must log in.
    LOGIN_REQUIRED = "login_required"


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    """Non-failing end of a release run."""

    state: ReleaseState
    project_id: str
    release_id: str | None = None
    status: str | None = None

    @property
    def login_required(self) -> bool:
        return self.state == ReleaseState.LOGIN_REQUIRED

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ApiErrorKind = Literal[
    "unauthenticated",
    "not_found",
    "http",
    "network",
    "decode",
]


@dataclass(frozen=True, slots=True)
class ApiError:
    """Failure talking to the Space API.

    Attributes:
        kind: Error category; ``unauthenticated`` covers both a missing token
            and a 401/403 response.
        message: Human-readable error message
        status: HTTP status code (0 when no response was received)
        url: The URL that failed, when known
    """

    kind: ApiErrorKind
    message: str
    status: int = 0
    url: str | None = None

    @property
    def is_unauthenticated(self) -> bool:
        return self.kind == "unauthenticated"

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message}"
        return self.message

"""Process exit codes.

Every command ends with one of these codes. They are part of the CLI contract
(scripts and CI jobs branch on them) and must stay stable:
- 0: Success (including "login required", which is not a hard failure)
- 1: User error (missing or conflicting flags, bad input)
- 2: Environment error (not logged in, project not initialized)
- 4: Network error (remote service unreachable or rejected a request)
- 5: I/O error (local project state could not be read or written)
- 6: Release failed (the service reported a non-success promotion status)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
    RELEASE_FAILED = 6

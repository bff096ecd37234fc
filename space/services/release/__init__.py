"""Release orchestration service."""

from .errors import ReleaseError
from .model import ReleaseOutcome, ReleaseState
from .orchestrator import ReleaseOrchestrator
from .selector import RevisionSelector

__all__ = [
    "ReleaseError",
    "ReleaseOrchestrator",
    "ReleaseOutcome",
    "ReleaseState",
    "RevisionSelector",
]

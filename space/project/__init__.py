"""Local project state."""

from .state import ProjectMeta, ProjectStateStore, StateError

__all__ = [
    "ProjectMeta",
    "ProjectStateStore",
    "StateError",
]

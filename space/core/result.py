"""Result type for explicit error handling.

Fallible operations return ``Ok(value)`` or ``Err(error)`` instead of raising,
so callers decide at each step whether to continue, report, or exit:

    meta = store.get_meta()
    if isinstance(meta, Err):
        console.error(meta.error.message)
        return meta
    if meta.value is None:
        ...  # not initialized yet

Pattern matching works too:

    match client.get_revisions(project_id):
        case Ok(revisions):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]

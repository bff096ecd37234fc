from __future__ import annotations

from collections import Counter
from collections.abc import Callable

from space.api.client import SpaceClient
from space.api.models import Revision
from space.core.result import Err, Ok, Result
from space.services.release.errors import ReleaseError
from space.services.release.messages import CHOOSE_REVISION_PROMPT, NO_REVISIONS_HINT

ChooseOne = Callable[[str, list[str]], str]

DEFAULT_WINDOW = 5


def revision_labels(revisions: list[Revision]) -> list[str]:
    """Display labels for ``revisions``, one per entry and all distinct.

    Tags are used as-is; a tag shared by several revisions gets the revision
    id appended so every label maps back to exactly one revision.
    """
    counts = Counter(r.tag for r in revisions)
    return [r.tag if counts[r.tag] == 1 else f"{r.tag} ({r.id})" for r in revisions]


class RevisionSelector:
    """Resolve a project's revisions to the single revision to release."""

    def __init__(
        self,
        *,
        client: SpaceClient,
        choose: ChooseOne,
        window: int = DEFAULT_WINDOW,
    ) -> None:
        self.client = client
        self.choose = choose
        self.window = window

    def select(self, project_id: str, *, use_latest: bool) -> Result[Revision, ReleaseError]:
        fetched = self.client.get_revisions(project_id)
        if isinstance(fetched, Err):
            e = fetched.error
            if e.is_unauthenticated:
                return Err(ReleaseError(kind="auth_required", message=str(e)))
            return Err(
                ReleaseError(kind="revisions_failed", message=f"Failed to get revisions: {e}")
            )

        revisions = fetched.value
        if not revisions:
            return Err(
                ReleaseError(
                    kind="no_revisions",
                    message="No revisions found.",
                    hint=NO_REVISIONS_HINT,
                )
            )

        # Newest first, as returned by the service.
        if use_latest:
            return Ok(revisions[0])

        recent = revisions[: self.window]
        labels = revision_labels(recent)
        by_label = dict(zip(labels, recent, strict=True))

        chosen = self.choose(CHOOSE_REVISION_PROMPT, labels)
        revision = by_label.get(chosen)
        if revision is None:
            return Err(
                ReleaseError(kind="invalid_input", message=f"unknown revision selected: {chosen}")
            )
        return Ok(revision)

from __future__ import annotations

from space.api.client import MockSpaceClient
from space.api.errors import ApiError
from space.api.models import Revision
from space.core.result import Err, Ok
from space.services.release.selector import RevisionSelector, revision_labels


class RecordingChooser:
    def __init__(self, pick: int = 0, answer: str | None = None) -> None:
        self.pick = pick
        self.answer = answer
        self.calls: list[tuple[str, list[str]]] = []

    def __call__(self, prompt: str, options: list[str]) -> str:
        self.calls.append((prompt, list(options)))
        if self.answer is not None:
            return self.answer
        return options[self.pick]


def _revisions(n: int) -> list[Revision]:
    return [Revision(id=f"r{i}", tag=f"tag-{i}") for i in range(n)]


def _selector(client: MockSpaceClient, chooser: RecordingChooser) -> RevisionSelector:
    return RevisionSelector(client=client, choose=chooser)


def test_latest_returns_first_without_chooser() -> None:
    client = MockSpaceClient()
    client.set_revisions("p1", _revisions(3))
    chooser = RecordingChooser()

    result = _selector(client, chooser).select("p1", use_latest=True)

    assert result == Ok(Revision(id="r0", tag="tag-0"))
    assert chooser.calls == []


def test_empty_list_fails_without_chooser() -> None:
    client = MockSpaceClient()
    client.set_revisions("p1", [])
    chooser = RecordingChooser()

    result = _selector(client, chooser).select("p1", use_latest=False)

    assert isinstance(result, Err)
    assert result.error.kind == "no_revisions"
    assert result.error.hint is not None and "space push" in result.error.hint
    assert chooser.calls == []


def test_window_truncated_to_five_in_order() -> None:
    client = MockSpaceClient()
    client.set_revisions("p1", _revisions(8))
    chooser = RecordingChooser(pick=3)

    result = _selector(client, chooser).select("p1", use_latest=False)

    assert len(chooser.calls) == 1
    _, options = chooser.calls[0]
    assert options == ["tag-0", "tag-1", "tag-2", "tag-3", "tag-4"]
    assert result == Ok(Revision(id="r3", tag="tag-3"))


def test_window_is_configurable() -> None:
    client = MockSpaceClient()
    client.set_revisions("p1", _revisions(8))
    chooser = RecordingChooser()

    RevisionSelector(client=client, choose=chooser, window=2).select("p1", use_latest=False)

    assert chooser.calls[0][1] == ["tag-0", "tag-1"]


def test_unauthenticated_is_distinct() -> None:
    client = MockSpaceClient()
    client.set_revisions("p1", ApiError(kind="unauthenticated", message="no token"))

    result = _selector(client, RecordingChooser()).select("p1", use_latest=True)

    assert isinstance(result, Err)
    assert result.error.kind == "auth_required"


def test_other_fetch_errors() -> None:
    client = MockSpaceClient()
    client.set_revisions("p1", ApiError(kind="http", status=500, message="boom"))

    result = _selector(client, RecordingChooser()).select("p1", use_latest=True)

    assert isinstance(result, Err)
    assert result.error.kind == "revisions_failed"
    assert "Failed to get revisions" in result.error.message


def test_duplicate_tags_are_disambiguated() -> None:
    client = MockSpaceClient()
    client.set_revisions(
        "p1",
        [Revision(id="a", tag="same"), Revision(id="b", tag="same"), Revision(id="c", tag="x")],
    )
    chooser = RecordingChooser(pick=1)

    result = _selector(client, chooser).select("p1", use_latest=False)

    assert chooser.calls[0][1] == ["same (a)", "same (b)", "x"]
    assert result == Ok(Revision(id="b", tag="same"))


def test_unknown_choice_is_rejected() -> None:
    client = MockSpaceClient()
    client.set_revisions("p1", _revisions(2))

    result = _selector(client, RecordingChooser(answer="bogus")).select("p1", use_latest=False)

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_input"


def test_revision_labels_unique_tags_unchanged() -> None:
    assert revision_labels(_revisions(2)) == ["tag-0", "tag-1"]

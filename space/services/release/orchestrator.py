"""Release orchestration.

One run walks a fixed sequence of states:

    RESOLVING_REVISION -> SUBMITTING -> STREAMING_LOGS -> POLLING_PROMOTION
        -> SUCCEEDED | FAILED

plus LOGIN_REQUIRED when the service rejects the release request for lack of
credentials. Every step is attempted once; retrying is left to the user.

Logs are drained completely before the promotion status is queried: the
status only becomes final once the pipeline whose logs we are following has
finished. The orchestrator prints exactly one message for every terminal
failure, so callers only translate the returned error into an exit code.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from space.api.auth import login_info
from space.api.client import SpaceClient
from space.api.models import ReleaseRequest
from space.core.config import SpaceConfig
from space.core.result import Err, Ok, Result
from space.output.console import ConsoleProtocol, Style
from space.project.state import ProjectStateStore
from space.services.release.errors import ReleaseError
from space.services.release.messages import (
    RELEASE_FAILED_MSG,
    USE_LATEST_PROMPT,
    creating_release_msg,
    status_unknown_msg,
    success_summary,
)
from space.services.release.model import ReleaseOutcome, ReleaseState
from space.services.release.selector import RevisionSelector

Confirm = Callable[[str], bool]


class ReleaseOrchestrator:
    def __init__(
        self,
        *,
        client: SpaceClient,
        selector: RevisionSelector,
        console: ConsoleProtocol,
        confirm: Confirm,
        config: SpaceConfig | None = None,
    ) -> None:
        self.client = client
        self.selector = selector
        self.console = console
        self.confirm = confirm
        self.config = config or SpaceConfig()
        self.history: list[ReleaseState] = []

    @property
    def state(self) -> ReleaseState | None:
        return self.history[-1] if self.history else None

    def _enter(self, state: ReleaseState) -> None:
        self.history.append(state)

    def run(
        self,
        *,
        project_dir: Path | None,
        project_id: str | None,
        revision_id: str | None,
        version: str | None,
        listed: bool,
        notes: str | None,
        use_latest: bool | None = None,
    ) -> Result[ReleaseOutcome, ReleaseError]:
        """Release a revision of a project.

        Args:
            project_dir: Project root holding the state directory; only read
                when ``project_id`` is None. None means the current directory.
            project_id: Explicit project id, else taken from the meta file.
            revision_id: Explicit revision id, else selected from the
                project's recent revisions.
            version: Release version string.
            listed: Whether to list the release on Discovery.
            notes: Release notes.
            use_latest: Take the newest revision without asking; None asks
                the user first. Ignored when ``revision_id`` is given.

        Returns:
            Ok(ReleaseOutcome) when the release succeeded or the user needs to
            log in first; Err(ReleaseError) for every failure.
        """
        self.history.clear()
        self._enter(ReleaseState.RESOLVING_REVISION)

        resolved_project = self._resolve_project_id(project_dir, project_id)
        if isinstance(resolved_project, Err):
            return self._fail(resolved_project.error)
        pid = resolved_project.value

        latest = False
        if revision_id is None:
            latest = use_latest if use_latest is not None else self.confirm(USE_LATEST_PROMPT)
            selected = self.selector.select(pid, use_latest=latest)
            if isinstance(selected, Err):
                return self._fail(selected.error)
            self.console.newline()
            self.console.info(f"Selected revision: {selected.value.tag}")
            revision_id = selected.value.id

        self.console.newline()
        self.console.print(creating_release_msg(listed=listed, latest=latest), Style.BOLD)
        self.console.newline()

        self._enter(ReleaseState.SUBMITTING)
        created = self.client.create_release(
            ReleaseRequest(
                revision_id=revision_id,
                project_id=pid,
                version=version,
                release_notes=notes,
                discovery_listed=listed,
                channel=self.config.release_channel,
            )
        )
        if isinstance(created, Err):
            e = created.error
            if e.is_unauthenticated:
                self._enter(ReleaseState.LOGIN_REQUIRED)
                self.console.print(login_info(), Style.WARNING)
                return Ok(ReleaseOutcome(state=ReleaseState.LOGIN_REQUIRED, project_id=pid))
            return self._fail(
                ReleaseError(kind="submit_failed", message=f"Failed to create release: {e}")
            )
        release_id = created.value.id

        self._enter(ReleaseState.STREAMING_LOGS)
        streamed = self._stream_logs(release_id)
        if isinstance(streamed, Err):
            return self._fail(streamed.error)

        self._enter(ReleaseState.POLLING_PROMOTION)
        promotion = self.client.get_release_promotion(release_id)
        if isinstance(promotion, Err):
            develop_url = self.config.develop_url(pid)
            return self._fail(
                ReleaseError(
                    kind="status_unknown",
                    message=status_unknown_msg(develop_url),
                    hint=str(promotion.error),
                )
            )

        status = promotion.value.status
        if not promotion.value.is_complete:
            return self._fail(
                ReleaseError(kind="release_failed", message=f"release failed: {status}"),
                display=RELEASE_FAILED_MSG,
            )

        self._enter(ReleaseState.SUCCEEDED)
        self.console.newline()
        for line in success_summary(listed=listed):
            self.console.success(line)
        return Ok(
            ReleaseOutcome(
                state=ReleaseState.SUCCEEDED,
                project_id=pid,
                release_id=release_id,
                status=status,
            )
        )

    def _resolve_project_id(
        self, project_dir: Path | None, project_id: str | None
    ) -> Result[str, ReleaseError]:
        if project_id is not None:
            return Ok(project_id)

        opened = ProjectStateStore.open(project_dir, config=self.config)
        if isinstance(opened, Err):
            return Err(ReleaseError(kind="state_failed", message=opened.error.message))

        meta = opened.value.get_meta()
        if isinstance(meta, Err):
            return Err(ReleaseError(kind="state_failed", message=meta.error.message))
        if meta.value is None:
            return Err(
                ReleaseError(
                    kind="project_not_initialized",
                    message=f"no project found in {opened.value.root}",
                    hint="run `space link --id <project-id>` or pass --id",
                )
            )
        return Ok(meta.value.id)

    def _stream_logs(self, release_id: str) -> Result[None, ReleaseError]:
        opened = self.client.open_release_logs(release_id)
        if isinstance(opened, Err):
            return Err(ReleaseError(kind="stream_failed", message=f"Error: {opened.error}"))

        with opened.value as stream:
            try:
                for line in stream:
                    self.console.raw(line)
            except OSError as e:
                return Err(ReleaseError(kind="stream_failed", message=f"Error: {e}"))
        return Ok(None)

    def _fail(
        self, error: ReleaseError, *, display: str | None = None
    ) -> Err[ReleaseError]:
        self._enter(ReleaseState.FAILED)
        if error.kind == "auth_required":
            self.console.print(login_info(), Style.WARNING)
            return Err(error)

        self.console.error(display or error.message)
        if display is not None:
            self.console.print(error.message, Style.DIM)
        if error.hint:
            self.console.print(f"hint: {error.hint}", Style.DIM)
        return Err(error)

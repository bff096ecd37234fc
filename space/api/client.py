"""Space API client abstraction.

This module provides:
- SpaceClient: Protocol for the remote operations the CLI needs
- LogStream: Protocol for a line-oriented, closeable release log stream
- MockSpaceClient: Scripted implementation for tests that records every call

The real implementation lives in ``space.api.http``.
"""

from __future__ import annotations

from collections.abc import Iterator
from types import TracebackType
from typing import Protocol, Self, runtime_checkable

from space.api.errors import ApiError
from space.api.models import (
    CreatedRelease,
    ProjectInfo,
    ReleasePromotion,
    ReleaseRequest,
    Revision,
)
from space.core.result import Err, Ok, Result

__all__ = [
    "SpaceClient",
    "LogStream",
    "MockSpaceClient",
    "MockLogStream",
]


@runtime_checkable
class LogStream(Protocol):
    """Release log stream.

    Iterating yields lines without their trailing newline, in arrival order,
    and blocks until the next line is available. A transport failure while
    reading raises ``OSError``. Use as a context manager so the underlying
    connection is closed on every path.
    """

    def __iter__(self) -> Iterator[str]: ...

    def close(self) -> None: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


@runtime_checkable
class SpaceClient(Protocol):
    def get_project(self, project_id: str) -> Result[ProjectInfo, ApiError]: ...

    def get_revisions(self, project_id: str) -> Result[list[Revision], ApiError]:
        """List revisions of a project, newest first."""
        ...

    def create_release(self, request: ReleaseRequest) -> Result[CreatedRelease, ApiError]: ...

    def open_release_logs(self, release_id: str) -> Result[LogStream, ApiError]: ...

    def get_release_promotion(self, release_id: str) -> Result[ReleasePromotion, ApiError]: ...


class MockLogStream:
    """Log stream over a fixed list of lines.

    ``fail_after`` makes iteration raise ``OSError`` once that many lines have
    been yielded. Lifecycle events are appended to ``calls`` so tests can check
    ordering against the client's other calls.
    """

    def __init__(
        self,
        release_id: str,
        lines: list[str],
        calls: list[tuple[str, str]],
        *,
        fail_after: int | None = None,
    ) -> None:
        self.release_id = release_id
        self.lines = lines
        self.calls = calls
        self.fail_after = fail_after
        self.closed = False

    def __iter__(self) -> Iterator[str]:
        for i, line in enumerate(self.lines):
            if self.fail_after is not None and i >= self.fail_after:
                raise OSError("connection reset by peer")
            self.calls.append(("log_line", line))
            yield line
        if self.fail_after is not None and self.fail_after >= len(self.lines):
            raise OSError("connection reset by peer")
        self.calls.append(("logs_exhausted", self.release_id))

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.calls.append(("close_logs", self.release_id))

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class MockSpaceClient:
    """Scripted client for tests.

    Usage:
        client = MockSpaceClient()
        client.set_revisions("p1", [Revision(id="r1", tag="v1")])
        client.set_release(CreatedRelease(id="rel1"), logs=["building..."])
        client.set_promotion("rel1", "COMPLETE")
    """

    def __init__(self) -> None:
        self._projects: dict[str, ProjectInfo | ApiError] = {}
        self._revisions: dict[str, list[Revision] | ApiError] = {}
        self._release: CreatedRelease | ApiError = ApiError(
            kind="http", status=500, message="no release scripted (mock)"
        )
        self._logs: dict[str, list[str] | ApiError] = {}
        self._log_fail_after: dict[str, int] = {}
        self._promotions: dict[str, str | ApiError] = {}
        self.calls: list[tuple[str, str]] = []
        self.requests: list[ReleaseRequest] = []
        self.streams: list[MockLogStream] = []

    def set_project(self, project_id: str, response: ProjectInfo | ApiError) -> None:
        self._projects[project_id] = response

    def set_revisions(self, project_id: str, response: list[Revision] | ApiError) -> None:
        self._revisions[project_id] = response

    def set_release(
        self,
        response: CreatedRelease | ApiError,
        *,
        logs: list[str] | ApiError | None = None,
        fail_after: int | None = None,
    ) -> None:
        self._release = response
        if isinstance(response, CreatedRelease):
            self._logs[response.id] = [] if logs is None else logs
            if fail_after is not None:
                self._log_fail_after[response.id] = fail_after

    def set_promotion(self, release_id: str, response: str | ApiError) -> None:
        self._promotions[release_id] = response

    def get_project(self, project_id: str) -> Result[ProjectInfo, ApiError]:
        self.calls.append(("get_project", project_id))
        response = self._projects.get(project_id)
        if response is None:
            return Err(ApiError(kind="not_found", status=404, message="Not found (mock)"))
        if isinstance(response, ApiError):
            return Err(response)
        return Ok(response)

    def get_revisions(self, project_id: str) -> Result[list[Revision], ApiError]:
        self.calls.append(("get_revisions", project_id))
        response = self._revisions.get(project_id, [])
        if isinstance(response, ApiError):
            return Err(response)
        return Ok(list(response))

    def create_release(self, request: ReleaseRequest) -> Result[CreatedRelease, ApiError]:
        self.calls.append(("create_release", request.revision_id))
        self.requests.append(request)
        if isinstance(self._release, ApiError):
            return Err(self._release)
        return Ok(self._release)

    def open_release_logs(self, release_id: str) -> Result[LogStream, ApiError]:
        self.calls.append(("open_release_logs", release_id))
        logs = self._logs.get(release_id, [])
        if isinstance(logs, ApiError):
            return Err(logs)
        stream = MockLogStream(
            release_id,
            logs,
            self.calls,
            fail_after=self._log_fail_after.get(release_id),
        )
        self.streams.append(stream)
        return Ok(stream)

    def get_release_promotion(self, release_id: str) -> Result[ReleasePromotion, ApiError]:
        self.calls.append(("get_release_promotion", release_id))
        response = self._promotions.get(release_id)
        if response is None:
            return Err(ApiError(kind="not_found", status=404, message="Not found (mock)"))
        if isinstance(response, ApiError):
            return Err(response)
        return Ok(ReleasePromotion(id=release_id, status=response))

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

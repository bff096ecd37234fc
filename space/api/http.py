"""Space API client over HTTP (urllib).

Non-streaming requests use ``SpaceConfig.timeout``. The release log stream is
opened without a timeout: it stays open for as long as the build runs and the
server decides when it ends.
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Callable, Iterator
from http.client import HTTPException, HTTPResponse
from types import TracebackType
from typing import Self

from space import __version__
from space.api.auth import load_access_token
from space.api.client import LogStream
from space.api.errors import ApiError
from space.api.models import (
    CreatedRelease,
    ProjectInfo,
    ReleasePromotion,
    ReleaseRequest,
    Revision,
)
from space.core.config import SpaceConfig
from space.core.result import Err, Ok, Result
from space.core.structured import StrDict, as_obj_list, as_str_dict, get_str

__all__ = ["HttpSpaceClient", "HttpLogStream", "ACCESS_TOKEN_HEADER"]

ACCESS_TOKEN_HEADER = "X-Space-Access-Token"

TokenLoader = Callable[[], Result[str, ApiError]]


class HttpLogStream:
    """Line iterator over a streamed HTTP response."""

    def __init__(self, response: HTTPResponse) -> None:
        self._response = response

    def __iter__(self) -> Iterator[str]:
        # A dropped chunked response surfaces as http.client.IncompleteRead.
        try:
            for raw in self._response:
                yield raw.decode("utf-8", errors="replace").rstrip("\r\n")
        except HTTPException as e:
            raise OSError(f"log stream interrupted: {e!r}") from e

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class HttpSpaceClient:
    """SpaceClient backed by the Space HTTP API."""

    def __init__(
        self,
        config: SpaceConfig,
        *,
        token_loader: TokenLoader = load_access_token,
    ) -> None:
        self.config = config
        self.base_url = config.api_url.rstrip("/")
        self.user_agent = f"space-cli/{__version__}"
        self._token_loader = token_loader
        self._ssl_context = ssl.create_default_context()

    def _open(
        self,
        method: str,
        path: str,
        *,
        body: StrDict | None = None,
        timeout: float | None,
    ) -> Result[HTTPResponse, ApiError]:
        url = f"{self.base_url}{path}"
        token = self._token_loader()
        if isinstance(token, Err):
            return token

        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
            ACCESS_TOKEN_HEADER: token.value,
        }
        data: bytes | None = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            response = urllib.request.urlopen(req, timeout=timeout, context=self._ssl_context)
        except urllib.error.HTTPError as e:
            if e.code in (401, 403):
                return Err(
                    ApiError(kind="unauthenticated", status=e.code, message=str(e.reason), url=url)
                )
            if e.code == 404:
                return Err(ApiError(kind="not_found", status=e.code, message="not found", url=url))
            return Err(ApiError(kind="http", status=e.code, message=_error_detail(e), url=url))
        except urllib.error.URLError as e:
            return Err(ApiError(kind="network", message=str(e.reason), url=url))
        except TimeoutError:
            return Err(ApiError(kind="network", message="Request timed out", url=url))
        except OSError as e:
            return Err(ApiError(kind="network", message=str(e), url=url))
        return Ok(response)

    def _json(
        self, method: str, path: str, *, body: StrDict | None = None
    ) -> Result[StrDict, ApiError]:
        opened = self._open(method, path, body=body, timeout=self.config.timeout)
        if isinstance(opened, Err):
            return opened

        url = f"{self.base_url}{path}"
        try:
            with opened.value as response:
                payload = response.read()
        except OSError as e:
            return Err(ApiError(kind="network", message=str(e), url=url))

        try:
            data = as_str_dict(json.loads(payload.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(ApiError(kind="decode", message=f"JSON parse error: {e}", url=url))
        if data is None:
            return Err(ApiError(kind="decode", message="Expected JSON object", url=url))
        return Ok(data)

    def get_project(self, project_id: str) -> Result[ProjectInfo, ApiError]:
        result = self._json("GET", f"/v0/apps/{project_id}")
        if isinstance(result, Err):
            return result
        data = result.value
        return Ok(
            ProjectInfo(
                id=get_str(data, "id") or project_id,
                name=get_str(data, "name"),
                alias=get_str(data, "alias"),
            )
        )

    def get_revisions(self, project_id: str) -> Result[list[Revision], ApiError]:
        result = self._json("GET", f"/v0/apps/{project_id}/revisions")
        if isinstance(result, Err):
            return result

        items = as_obj_list(result.value.get("revisions"))
        if items is None:
            return Err(ApiError(kind="decode", message="unexpected revisions payload"))

        revisions: list[Revision] = []
        for item in items:
            revision = Revision.from_obj(item)
            if revision is not None:
                revisions.append(revision)
        return Ok(revisions)

    def create_release(self, request: ReleaseRequest) -> Result[CreatedRelease, ApiError]:
        result = self._json("POST", "/v0/releases", body=request.to_payload())
        if isinstance(result, Err):
            return result

        release_id = get_str(result.value, "id")
        if release_id is None:
            return Err(ApiError(kind="decode", message="release response has no id"))
        return Ok(CreatedRelease(id=release_id))

    def open_release_logs(self, release_id: str) -> Result[LogStream, ApiError]:
        opened = self._open("GET", f"/v0/releases/{release_id}/logs", timeout=None)
        if isinstance(opened, Err):
            return opened
        return Ok(HttpLogStream(opened.value))

    def get_release_promotion(self, release_id: str) -> Result[ReleasePromotion, ApiError]:
        result = self._json("GET", f"/v0/promotions/{release_id}")
        if isinstance(result, Err):
            return result

        status = get_str(result.value, "status")
        if status is None:
            return Err(ApiError(kind="decode", message="promotion response has no status"))
        return Ok(ReleasePromotion(id=release_id, status=status))


def _error_detail(error: urllib.error.HTTPError) -> str:
    """Prefer the API's own error messages over the HTTP reason phrase."""
    try:
        body = as_str_dict(json.loads(error.read().decode("utf-8")))
    except (OSError, ValueError):
        return str(error.reason)
    if body is None:
        return str(error.reason)

    errors = as_obj_list(body.get("errors"))
    if errors:
        return "; ".join(str(e) for e in errors)
    return get_str(body, "detail") or str(error.reason)

"""JSON-over-HTTP for the Jira REST API.

`HttpClient` is the seam the tracker code depends on; `RealHttpClient` talks
to the network with urllib, `MockHttpClient` answers from a URL table.
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from rf import __version__
from rf.core.result import Err, Ok, Result

__all__ = ["HttpClient", "HttpError", "MockHttpClient", "RealHttpClient"]


@dataclass(frozen=True, slots=True)
class HttpError:
    """`status` is 0 when no HTTP response was received."""

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    def get_json(self, url: str, *, headers: dict[str, str]) -> Result[object, HttpError]: ...

    def post_json(
        self, url: str, payload: object, *, headers: dict[str, str]
    ) -> Result[None, HttpError]:
        """POST `payload` as JSON; the response body is ignored."""
        ...


class RealHttpClient:
    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout
        self._context = ssl.create_default_context()
        self._base_headers = {"User-Agent": f"rf/{__version__}", "Accept": "application/json"}

    def _send(self, request: urllib.request.Request) -> Result[bytes, HttpError]:
        url = request.full_url
        try:
            with urllib.request.urlopen(
                request, timeout=self.timeout, context=self._context
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url, e.code, str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url, 0, str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url, 0, "request timed out"))
        except OSError as e:
            return Err(HttpError(url, 0, str(e)))

    def get_json(self, url: str, *, headers: dict[str, str]) -> Result[object, HttpError]:
        request = urllib.request.Request(url, headers={**self._base_headers, **headers})
        body = self._send(request)
        if isinstance(body, Err):
            return body
        try:
            return Ok(json.loads(body.value))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url, 0, f"invalid JSON response: {e}"))

    def post_json(
        self, url: str, payload: object, *, headers: dict[str, str]
    ) -> Result[None, HttpError]:
        request = urllib.request.Request(
            url,
            data=json.dumps(payload).encode("utf-8"),
            headers={**self._base_headers, "Content-Type": "application/json", **headers},
            method="POST",
        )
        sent = self._send(request)
        if isinstance(sent, Err):
            return sent
        return Ok(None)


class MockHttpClient:
    """In-memory client. Unknown GET URLs answer 404; POSTs succeed unless failed.

    Usage:
        http = MockHttpClient()
        http.set_json(jira.search_url(config, "Backlog"), {"issues": []})
    """

    def __init__(self) -> None:
        self._responses: dict[str, object | HttpError] = {}
        self._post_failures: dict[str, HttpError] = {}
        self.calls: list[tuple[str, str]] = []
        self.posted: list[tuple[str, object]] = []
        self.headers: list[dict[str, str]] = []

    def set_json(self, url: str, response: object | HttpError) -> None:
        self._responses[url] = response

    def fail_post(self, url: str, error: HttpError) -> None:
        self._post_failures[url] = error

    def get_json(self, url: str, *, headers: dict[str, str]) -> Result[object, HttpError]:
        self.calls.append(("get_json", url))
        self.headers.append(headers)
        response = self._responses.get(url, HttpError(url, 404, "Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def post_json(
        self, url: str, payload: object, *, headers: dict[str, str]
    ) -> Result[None, HttpError]:
        self.calls.append(("post_json", url))
        self.headers.append(headers)
        if url in self._post_failures:
            return Err(self._post_failures[url])
        self.posted.append((url, payload))
        return Ok(None)

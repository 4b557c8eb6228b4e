"""JSON-over-HTTPS transport for the GitHub REST API.

Only what release creation needs: an authenticated JSON POST whose failures
come back as `HttpError` values carrying GitHub's error codes. `MockHttpClient`
replays canned replies in tests.
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Protocol, cast, runtime_checkable

from reltag import __version__
from reltag.core.result import Err, Ok, Result
from reltag.core.structured import as_obj_list, as_str_dict, get_str
from reltag.core.timeouts import API_TIMEOUT_SECONDS

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """A failed request.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
        codes: Machine-readable codes from a GitHub error payload
            (`errors[].code`, e.g. "already_exists")
    """

    url: str
    status: int
    message: str
    codes: tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """What the release publisher needs from a transport."""

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        *,
        token: str,
    ) -> Result[dict[str, Any], HttpError]:
        """POST `payload` as JSON with a bearer token; parse a JSON object reply."""
        ...


def _error_from_body(url: str, status: int, reason: str, raw: bytes) -> HttpError:
    """Build an HttpError from a GitHub error response body.

    GitHub replies `{"message": ..., "errors": [{"code": ...}, ...]}`.
    """
    try:
        obj: object = json.loads(raw.decode("utf-8")) if raw else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        obj = None

    data = as_str_dict(obj)
    if data is None:
        return HttpError(url=url, status=status, message=reason)

    message = get_str(data, "message") or reason
    codes: list[str] = []
    for item in as_obj_list(data.get("errors")) or []:
        entry = as_str_dict(item)
        code = get_str(entry, "code") if entry is not None else None
        if code is not None:
            codes.append(code)

    if codes:
        message = f"{message} ({', '.join(codes)})"
    return HttpError(url=url, status=status, message=message, codes=tuple(codes))


class RealHttpClient:
    """urllib client sending GitHub REST headers with bearer auth."""

    def __init__(
        self,
        timeout: float = API_TIMEOUT_SECONDS,
        user_agent: str = f"reltag/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        *,
        token: str,
    ) -> Result[dict[str, Any], HttpError]:
        try:
            req = urllib.request.Request(
                url,
                data=json.dumps(payload).encode("utf-8"),
                method="POST",
                headers={
                    "Accept": "application/vnd.github+json",
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                    "User-Agent": self.user_agent,
                    "X-GitHub-Api-Version": "2022-11-28",
                },
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            body = e.read() if e.fp is not None else b""
            return Err(_error_from_body(url, e.code, str(e.reason), body))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            data = as_str_dict(json.loads(raw.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        # Values are dynamic; preserve as Any for callers.
        return Ok(cast(dict[str, Any], data))


class MockHttpClient:
    """Canned replies keyed by URL; every call is recorded in `calls`.

    Usage:
        client = MockHttpClient()
        client.set_post("https://api.github.com/repos/o/r/releases", {"html_url": "..."})
        result = client.post_json(url, {...}, token="t")
    """

    def __init__(self) -> None:
        self._post_responses: dict[str, list[dict[str, Any] | HttpError]] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def set_post(self, url: str, *responses: dict[str, Any] | HttpError) -> None:
        """Queue responses for URL; the last one repeats once the queue drains."""
        self._post_responses[url] = list(responses)

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        *,
        token: str,
    ) -> Result[dict[str, Any], HttpError]:
        self.calls.append(("post_json", url, payload))

        queue = self._post_responses.get(url)
        if not queue:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

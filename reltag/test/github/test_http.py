"""Tests for github/http.py - HTTP client abstraction."""

from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from email.message import Message
from typing import Any

import pytest

from reltag.core.result import Err, Ok
from reltag.github.http import (
    HttpClient,
    HttpError,
    MockHttpClient,
    RealHttpClient,
    _error_from_body,  # pyright: ignore[reportPrivateUsage]
)

URL = "https://api.github.com/repos/acme/monorepo/releases"


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url=URL, status=422, message="Validation Failed")
        assert str(error) == f"HTTP 422: Validation Failed ({URL})"

    def test_str_without_status(self) -> None:
        error = HttpError(url=URL, status=0, message="Request timed out")
        assert str(error) == f"Request timed out ({URL})"

    def test_is_frozen(self) -> None:
        error = HttpError(url=URL, status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 500  # type: ignore[misc]


class TestErrorFromBody:
    def test_github_validation_payload(self) -> None:
        body = json.dumps(
            {
                "message": "Validation Failed",
                "errors": [{"resource": "Release", "code": "already_exists", "field": "tag_name"}],
            }
        ).encode()

        error = _error_from_body(URL, 422, "Unprocessable Entity", body)

        assert error.status == 422
        assert error.codes == ("already_exists",)
        assert error.message == "Validation Failed (already_exists)"

    def test_message_only(self) -> None:
        body = b'{"message": "Bad credentials"}'
        error = _error_from_body(URL, 401, "Unauthorized", body)
        assert error.message == "Bad credentials"
        assert error.codes == ()

    @pytest.mark.parametrize("body", [b"", b"<html>oops</html>", b"[1, 2]"])
    def test_non_object_body_uses_reason(self, body: bytes) -> None:
        error = _error_from_body(URL, 502, "Bad Gateway", body)
        assert error.message == "Bad Gateway"
        assert error.codes == ()


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_post_json_success(self) -> None:
        client = MockHttpClient()
        client.set_post(URL, {"html_url": "https://github.com/acme/monorepo/releases/1"})

        result = client.post_json(URL, {"tag_name": "a@1.0.0"}, token="t")

        assert result == Ok({"html_url": "https://github.com/acme/monorepo/releases/1"})
        assert client.calls == [("post_json", URL, {"tag_name": "a@1.0.0"})]

    def test_unknown_url_is_404(self) -> None:
        result = MockHttpClient().post_json(URL, {}, token="t")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_queued_responses_then_last_repeats(self) -> None:
        client = MockHttpClient()
        failure = HttpError(url=URL, status=500, message="boom")
        client.set_post(URL, failure, {"html_url": "u"})

        first = client.post_json(URL, {}, token="t")
        second = client.post_json(URL, {}, token="t")
        third = client.post_json(URL, {}, token="t")

        assert first == Err(failure)
        assert second == Ok({"html_url": "u"})
        assert third == Ok({"html_url": "u"})
        assert len(client.calls) == 3


class _FakeResponse:
    def __init__(self, raw: bytes) -> None:
        self._raw = raw

    def read(self) -> bytes:
        return self._raw

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


class TestRealHttpClient:
    def test_posts_json_with_github_headers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[urllib.request.Request] = []

        def fake_urlopen(req: urllib.request.Request, **_: Any) -> _FakeResponse:
            seen.append(req)
            return _FakeResponse(b'{"html_url": "https://github.com/acme/monorepo/releases/7"}')

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient().post_json(URL, {"tag_name": "a@1.0.0"}, token="t0ken")

        assert result == Ok({"html_url": "https://github.com/acme/monorepo/releases/7"})
        req = seen[0]
        assert req.get_method() == "POST"
        assert req.get_header("Authorization") == "Bearer t0ken"
        assert req.get_header("Accept") == "application/vnd.github+json"
        assert req.get_header("Content-type") == "application/json"
        assert req.get_header("User-agent", "").startswith("reltag/")
        assert req.data == json.dumps({"tag_name": "a@1.0.0"}).encode("utf-8")

    def test_http_error_keeps_github_codes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        body = b'{"message": "Validation Failed", "errors": [{"code": "already_exists"}]}'

        def fake_urlopen(req: urllib.request.Request, **_: Any) -> _FakeResponse:
            raise urllib.error.HTTPError(
                req.full_url, 422, "Unprocessable Entity", Message(), io.BytesIO(body)
            )

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient().post_json(URL, {}, token="t")

        assert isinstance(result, Err)
        assert result.error.status == 422
        assert result.error.codes == ("already_exists",)

    def test_network_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **_: Any) -> _FakeResponse:
            raise urllib.error.URLError("Name or service not known")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient().post_json(URL, {}, token="t")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert "Name or service not known" in result.error.message

    def test_non_object_reply(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **_: Any) -> _FakeResponse:
            return _FakeResponse(b"[]")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient().post_json(URL, {}, token="t")

        assert isinstance(result, Err)
        assert result.error.message == "Expected JSON object"

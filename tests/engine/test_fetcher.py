from __future__ import annotations

import httpx
import pytest

from course_harvester.engine import Fetcher
from course_harvester.errors import FetchError


def _response(status: int, url: str, content: bytes = b"") -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", url), content=content)


def test_fetch_returns_content(monkeypatch: pytest.MonkeyPatch) -> None:
    fetcher = Fetcher(timeout=5)
    monkeypatch.setattr(fetcher._client, "get", lambda url: _response(200, url, b"<html>ok</html>"))

    response = fetcher.fetch("https://example.com/page")
    fetcher.close()

    assert response.url == "https://example.com/page"
    assert response.content == b"<html>ok</html>"
    assert response.text == "<html>ok</html>"


def test_fetch_raises_on_error_status(monkeypatch: pytest.MonkeyPatch) -> None:
    fetcher = Fetcher()
    monkeypatch.setattr(fetcher._client, "get", lambda url: _response(404, url))

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch_bytes("https://example.com/missing")
    fetcher.close()

    assert excinfo.value.url == "https://example.com/missing"
    assert "404" in excinfo.value.reason


def test_fetch_wraps_transport_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    fetcher = Fetcher()

    def boom(url):
        raise httpx.ConnectError("refused", request=httpx.Request("GET", url))

    monkeypatch.setattr(fetcher._client, "get", boom)
    with pytest.raises(FetchError):
        fetcher.fetch("https://example.com/down")
    fetcher.close()


def test_fetcher_failure_classification() -> None:
    class Dummy:
        def __init__(self, status_code):
            self.status_code = status_code

    assert Fetcher._is_failure(Dummy(500))
    assert Fetcher._is_failure(Dummy(401))
    assert not Fetcher._is_failure(Dummy(200))

"""HTTP fetching for course pages."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
import structlog

from ..errors import FetchError


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    url: str
    content: bytes
    raw: httpx.Response | None = field(repr=False, default=None)

    @property
    def text(self) -> str:
        if self.raw is not None:
            return self.raw.text
        return self.content.decode("utf-8", errors="replace")


class Fetcher:
    """Thin wrapper around a shared ``httpx.Client``; safe to use from worker threads."""

    def __init__(
        self,
        timeout: float = 15.0,
        user_agent: str | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.logger = logger or structlog.get_logger("course_harvester.fetcher")
        self._client = httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": user_agent} if user_agent else None,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch(self, url: str) -> FetchResponse:
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            self.logger.warning("fetch_error", url=url, error=str(exc))
            raise FetchError(url, str(exc)) from exc
        if self._is_failure(response):
            self.logger.warning("fetch_status", url=url, status=response.status_code)
            raise FetchError(url, f"unexpected status {response.status_code}")
        return FetchResponse(
            url=str(response.url),
            content=response.content,
            raw=response,
        )

    def fetch_bytes(self, url: str) -> bytes:
        return self.fetch(url).content

    @staticmethod
    def _is_failure(response) -> bool:
        return response.status_code >= 400


__all__ = ["FetchResponse", "Fetcher"]

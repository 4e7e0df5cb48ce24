"""Pytest configuration providing shared fixtures."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Iterable

import pytest
from rich.console import Console

from course_harvester.config import ConfigLocator, ConfigRepository, HarvestConfig
from course_harvester.engine import CacheStore, FetchResponse, TaskExecutor, ThreadPoolManager
from course_harvester.errors import FetchError


class FakeFetcher:
    """In-memory stand-in for :class:`Fetcher` keyed by URL."""

    def __init__(self, pages: dict[str, bytes] | None = None) -> None:
        self.pages = dict(pages or {})
        self.calls: list[str] = []
        self.closed = False

    def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(url, "unexpected status 404")
        return FetchResponse(url=url, content=self.pages[url])

    def fetch_bytes(self, url: str) -> bytes:
        return self.fetch(url).content

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def thread_pool() -> Iterable[ThreadPoolManager]:
    manager = ThreadPoolManager(default_workers=4)
    yield manager
    manager.shutdown()


@pytest.fixture
def cache(tmp_path: Path) -> CacheStore:
    return CacheStore(tmp_path / "cache")


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def executor(thread_pool, cache, fake_fetcher, console) -> TaskExecutor:
    return TaskExecutor(
        thread_pool,
        cache=cache,
        fetcher=fake_fetcher,
        progress_enabled=False,
        console=console,
    )


@pytest.fixture
def sample_config(tmp_path: Path) -> HarvestConfig:
    return HarvestConfig(
        base_url="https://courses.example.com/ds",
        cache_dir=tmp_path / "cache",
        output_path=tmp_path / "out" / "result.json",
        subtitle_delay_range=(0, 0),
        enable_progress_bar=False,
    )


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterable[ConfigRepository]:
    monkeypatch.setenv("COURSE_HARVESTER_HOME", str(tmp_path))
    monkeypatch.delenv("YT_DLP_PATH", raising=False)
    locator = ConfigLocator(project_root=tmp_path)
    repository = ConfigRepository(locator)
    yield repository


@pytest.fixture
def make_fetcher():
    return FakeFetcher

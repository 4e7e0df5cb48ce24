from __future__ import annotations

import pytest

from course_harvester.engine import CacheStore


def test_ensure_skips_existing_files(cache: CacheStore) -> None:
    calls: list[str] = []

    def load() -> bytes:
        calls.append("load")
        return b"payload"

    first = cache.ensure_bytes("a/b.bin", load)
    second = cache.ensure_bytes("a/b.bin", load)

    assert first == second
    assert first.read_bytes() == b"payload"
    assert calls == ["load"]


def test_existing_file_is_never_rewritten(cache: CacheStore) -> None:
    target = cache.path("kept.txt")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text("original", encoding="utf-8")

    cache.ensure_text("kept.txt", lambda: "replacement")

    assert target.read_text(encoding="utf-8") == "original"


def test_failed_producer_leaves_no_file(cache: CacheStore) -> None:
    def load() -> str:
        raise OSError("network down")

    with pytest.raises(OSError):
        cache.ensure_text("broken.txt", load)
    assert not cache.path("broken.txt").exists()


def test_lock_is_shared_per_path(cache: CacheStore) -> None:
    assert cache.lock_for(cache.path("x")) is cache.lock_for(cache.path("x"))
    assert cache.lock_for(cache.path("x")) is not cache.lock_for(cache.path("y"))


def test_locks_are_released_once_files_exist(cache: CacheStore) -> None:
    def fail(path) -> None:
        raise RuntimeError("no output")

    cache.ensure_text("done.txt", lambda: "ok")
    with pytest.raises(RuntimeError):
        cache.ensure("missing.txt", fail)

    assert list(cache._locks) == [cache.path("missing.txt")]

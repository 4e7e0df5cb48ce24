"""Existence-based file cache shared by task processors."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Callable, Dict

import structlog


class CacheStore:
    """Resolve cache paths and make check-then-write atomic per path."""

    def __init__(self, root: Path, logger: structlog.BoundLogger | None = None) -> None:
        self.root = Path(root)
        self.logger = logger or structlog.get_logger("course_harvester.cache")
        self._locks: Dict[Path, Lock] = {}
        self._registry_lock = Lock()

    def path(self, relative: str | Path) -> Path:
        return (self.root / relative).resolve()

    def lock_for(self, path: Path) -> Lock:
        with self._registry_lock:
            lock = self._locks.get(path)
            if lock is None:
                lock = self._locks[path] = Lock()
            return lock

    def ensure(self, relative: str | Path, produce: Callable[[Path], None]) -> Path:
        """Run ``produce(path)`` only if the cached file does not exist yet.

        ``produce`` must leave the file at ``path``; a file already present is
        never rewritten.
        """

        path = self.path(relative)
        with self.lock_for(path):
            if path.exists():
                self.logger.debug("cache_hit", path=str(path))
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                produce(path)
        self._release(path)
        return path

    def _release(self, path: Path) -> None:
        # Only paths still being produced keep a lock.
        with self._registry_lock:
            if path.exists():
                self._locks.pop(path, None)

    def ensure_bytes(self, relative: str | Path, load: Callable[[], bytes]) -> Path:
        return self.ensure(relative, lambda path: path.write_bytes(load()))

    def ensure_text(self, relative: str | Path, load: Callable[[], str]) -> Path:
        return self.ensure(relative, lambda path: path.write_text(load(), encoding="utf-8"))


__all__ = ["CacheStore"]

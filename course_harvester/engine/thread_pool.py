"""Worker pool management sized to host parallelism."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Dict


def host_parallelism() -> int:
    return os.cpu_count() or 1


class ThreadPoolManager:
    """Manage the shared worker pool and optional per-stage pools."""

    def __init__(self, default_workers: int | None = None) -> None:
        if default_workers is not None and default_workers < 1:
            raise ValueError("default_workers must be >= 1")
        self.default_workers = default_workers or host_parallelism()
        self._default_executor: ThreadPoolExecutor | None = None
        self._executors: Dict[str, ThreadPoolExecutor] = {}
        self._lock = Lock()

    def get(self, stage: str | None = None, max_workers: int | None = None) -> ThreadPoolExecutor:
        with self._lock:
            if stage is None:
                if self._default_executor is None:
                    self._default_executor = ThreadPoolExecutor(
                        max_workers=self.default_workers, thread_name_prefix="harvester"
                    )
                return self._default_executor
            if stage not in self._executors:
                workers = max_workers or self.default_workers
                self._executors[stage] = ThreadPoolExecutor(
                    max_workers=workers, thread_name_prefix=f"harvester-{stage}"
                )
            return self._executors[stage]

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            if self._default_executor is not None:
                self._default_executor.shutdown(wait=wait)
                self._default_executor = None
            for executor in self._executors.values():
                executor.shutdown(wait=wait)
            self._executors.clear()


__all__ = ["ThreadPoolManager", "host_parallelism"]

"""Parallel stage execution with per-task failure isolation and live progress."""

from __future__ import annotations

import time
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence, TypeVar

import structlog
from rich.console import Console

from ..ui import ProgressReporter, StageCounters
from .cache import CacheStore
from .fetcher import Fetcher
from .results import Failure, Success, TaskResult
from .thread_pool import ThreadPoolManager

T = TypeVar("T")
R = TypeVar("R")
R2 = TypeVar("R2")


def _guarded(task: Any, call: Callable[..., Any], *args: Any) -> TaskResult:
    try:
        return Success(task, call(*args))
    except Exception as exc:  # noqa: BLE001
        return Failure(task, exc)


class TaskExecutor:
    """Run ordered task batches on the shared worker pool.

    Every call is a barrier: it returns only once all tasks have finished,
    with one result per input in input order.
    """

    def __init__(
        self,
        thread_pool: ThreadPoolManager,
        cache: CacheStore | None = None,
        fetcher: Fetcher | None = None,
        progress_enabled: bool = True,
        console: Console | None = None,
        bar_width: int = 50,
        stage_workers: Mapping[str, int] | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.thread_pool = thread_pool
        self.cache = cache
        self.fetcher = fetcher
        self.progress_enabled = progress_enabled
        self.console = console or Console()
        self.bar_width = bar_width
        self.stage_workers = dict(stage_workers or {})
        self.logger = logger or structlog.get_logger("course_harvester.executor")

    # ------------------------------------------------------------------
    # Stage primitives
    # ------------------------------------------------------------------
    def execute(
        self, tasks: Sequence[T], label: str, processor: Callable[[T], R]
    ) -> list[TaskResult[T, R]]:
        """Apply ``processor`` to every task concurrently."""

        return self._run_stage(list(tasks), label, lambda task: _guarded(task, processor, task))

    def execute_results(
        self,
        results: Sequence[TaskResult[T, R]],
        label: str,
        processor: Callable[[T, R], R2],
    ) -> list[TaskResult[T, R2]]:
        """Re-process prior successes; prior failures pass through untouched."""

        def step(result: TaskResult[T, R]) -> TaskResult[T, R2]:
            if isinstance(result, Failure):
                return Failure(result.task, result.error)
            return _guarded(result.task, processor, result.task, result.value)

        return self._run_stage(list(results), label, step)

    def scrape(
        self, tasks: Sequence[T], label: str, locate: Callable[[T], tuple[str, str]]
    ) -> list[TaskResult[T, Path]]:
        """Download each task's ``(url, cache path)`` unless already cached."""

        return self.execute(tasks, label, lambda task: self._download(*locate(task)))

    def scrape_results(
        self,
        results: Sequence[TaskResult[T, R]],
        label: str,
        locate: Callable[[T, R], tuple[str, str]],
    ) -> list[TaskResult[T, Path]]:
        return self.execute_results(
            results, label, lambda task, value: self._download(*locate(task, value))
        )

    # ------------------------------------------------------------------
    def _download(self, url: str, relative_path: str) -> Path:
        if self.cache is None or self.fetcher is None:
            raise RuntimeError("TaskExecutor.scrape requires a cache and a fetcher")
        return self.cache.ensure_bytes(relative_path, lambda: self.fetcher.fetch_bytes(url))

    def _pool_for(self, label: str):
        limit = self.stage_workers.get(label)
        if limit:
            return self.thread_pool.get(label, max_workers=limit)
        return self.thread_pool.get()

    def _run_stage(
        self,
        items: list[Any],
        label: str,
        attempt: Callable[[Any], TaskResult],
    ) -> list[TaskResult]:
        counters = StageCounters(total=len(items))
        reporter = ProgressReporter(
            label,
            len(items),
            enabled=self.progress_enabled,
            console=self.console,
            bar_width=self.bar_width,
        )
        executor = self._pool_for(label)
        started = time.perf_counter()
        reporter.start()
        try:
            futures: list[Future[TaskResult]] = [
                executor.submit(self._attempt, item, attempt, counters, reporter) for item in items
            ]
            # Collect by submission index, not by completion order.
            results = [future.result() for future in futures]
        finally:
            reporter.close()
        elapsed = time.perf_counter() - started
        reporter.summary(elapsed, counters.success, counters.failed)
        self.logger.info(
            "stage_completed",
            stage=label,
            total=len(items),
            success=counters.success,
            failed=counters.failed,
            elapsed=round(elapsed, 3),
        )
        return results

    @staticmethod
    def _attempt(
        item: Any,
        attempt: Callable[[Any], TaskResult],
        counters: StageCounters,
        reporter: ProgressReporter,
    ) -> TaskResult:
        result = attempt(item)
        counters.record(result.ok, reporter.notify)
        return result


__all__ = ["TaskExecutor"]

"""Combinators chaining executor stages while preserving task identity."""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

import structlog

from .results import Failure, Success, TaskResult

T = TypeVar("T")
R = TypeVar("R")


def flatten_results(
    results: Sequence[TaskResult[T, Iterable[R]]],
) -> list[TaskResult]:
    """Expand collection-valued successes into one success per element.

    Each element becomes ``Success((task, element), element)``. A failure
    expands to exactly one failure that keeps the original task, however
    many elements it would have held.
    """

    expanded: list[TaskResult] = []
    for result in results:
        if isinstance(result, Failure):
            expanded.append(Failure(result.task, result.error))
            continue
        expanded.extend(Success((result.task, element), element) for element in result.value)
    return expanded


def filter_successful(
    results: Sequence[TaskResult[T, R]],
    logger: structlog.BoundLogger | None = None,
) -> list[Success[T, R]]:
    """Drop failures, logging each one with its task and error."""

    log = logger or structlog.get_logger("course_harvester.pipeline")
    successes: list[Success[T, R]] = []
    for result in results:
        if isinstance(result, Failure):
            log.error(
                "task_failed",
                task=repr(result.task),
                error=f"{type(result.error).__name__}: {result.error}",
                exc_info=result.error,
            )
            continue
        successes.append(result)
    return successes


def successful_values(
    results: Sequence[TaskResult[T, R]],
    logger: structlog.BoundLogger | None = None,
) -> list[R]:
    return [success.value for success in filter_successful(results, logger)]


__all__ = [
    "filter_successful",
    "flatten_results",
    "successful_values",
]

"""Tagged per-task outcomes flowing between executor stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
R = TypeVar("R")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Success(Generic[T, R]):
    """A task that produced a value."""

    task: T
    value: R

    @property
    def ok(self) -> bool:
        return True

    def map_result(self, transform: Callable[[R], U]) -> "Success[T, U]":
        return Success(self.task, transform(self.value))

    def fold(
        self,
        on_success: Callable[["Success[T, R]"], U],
        on_failure: Callable[["Failure[T, R]"], U],
    ) -> U:
        return on_success(self)


@dataclass(frozen=True, slots=True)
class Failure(Generic[T, R]):
    """A task whose processor raised; keeps the originating task for tracing."""

    task: T
    error: Exception

    @property
    def ok(self) -> bool:
        return False

    def map_result(self, transform: Callable[[R], U]) -> "Failure[T, U]":
        # Payload type changes, task and error are carried unchanged.
        return Failure(self.task, self.error)

    def fold(
        self,
        on_success: Callable[["Success[T, R]"], U],
        on_failure: Callable[["Failure[T, R]"], U],
    ) -> U:
        return on_failure(self)


TaskResult = Union[Success[T, R], Failure[T, R]]


__all__ = ["Failure", "Success", "TaskResult"]

"""Textual stage progress rendered by a single consumer thread."""

from __future__ import annotations

import queue
from dataclasses import dataclass, field
from threading import Lock, Thread
from typing import Callable

from rich.console import Console
from rich.markup import escape

_CLOSE = object()


@dataclass
class StageCounters:
    """Success/failure tallies scoped to one executor invocation."""

    total: int
    success: int = 0
    failed: int = 0
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def record(
        self, ok: bool, listener: Callable[[int, int], None] | None = None
    ) -> tuple[int, int]:
        """Count one outcome; ``listener`` sees the new totals under the lock."""

        with self._lock:
            if ok:
                self.success += 1
            else:
                self.failed += 1
            if listener is not None:
                listener(self.success, self.failed)
            return self.success, self.failed

    @property
    def completed(self) -> int:
        return self.success + self.failed


def render_progress_line(header: str, success: int, failed: int, total: int, width: int = 50) -> str:
    """Return the one-line textual bar shown while a stage runs."""

    completed = success + failed
    percent = completed * 100 // total if total > 0 else 100
    complete_width = width * percent // 100
    bar = "[" + "=" * complete_width + " " * (width - complete_width) + "]"
    return f"{header} | Progress: {bar} {percent}% | Success: {success} | Errors: {failed}"


class ProgressReporter:
    """Sole writer of the progress line for one stage.

    Producers call :meth:`notify` from worker threads; events are queued and
    rendered by a dedicated consumer thread so lines never interleave.
    """

    def __init__(
        self,
        label: str,
        total: int,
        enabled: bool = True,
        console: Console | None = None,
        bar_width: int = 50,
    ) -> None:
        self.label = label
        self.total = total
        self.enabled = enabled
        self.console = console or Console()
        self.bar_width = bar_width
        self.header = f"Task: {label} | Count: {total}"
        self.lines_rendered = 0
        self._events: "queue.Queue[object]" = queue.Queue()
        self._consumer: Thread | None = None

    def start(self) -> None:
        if not self.enabled or self._consumer is not None:
            return
        self._consumer = Thread(target=self._consume, name="harvester-progress", daemon=True)
        self._consumer.start()

    def notify(self, success: int, failed: int) -> None:
        if self._consumer is not None:
            self._events.put((success, failed))

    def close(self) -> None:
        """Close the event stream and wait until every queued event is drawn."""

        if self._consumer is None:
            return
        self._events.put(_CLOSE)
        self._consumer.join()
        self._consumer = None

    def summary(self, elapsed: float, success: int, failed: int) -> None:
        if self.lines_rendered:
            self._write("\r\x1b[2K" if self.console.is_terminal else "\n")
        self.console.print(
            f"{escape(self.header)} | Completed in {elapsed:.3f} seconds"
            f" | Results: [green]{success} successful[/green], [red]{failed} failed[/red]",
            highlight=False,
        )

    def _consume(self) -> None:
        while True:
            event = self._events.get()
            if event is _CLOSE:
                return
            success, failed = event  # type: ignore[misc]
            line = render_progress_line(self.header, success, failed, self.total, self.bar_width)
            self._write("\r" + line)
            self.lines_rendered += 1

    def _write(self, text: str) -> None:
        self.console.file.write(text)
        self.console.file.flush()


__all__ = ["ProgressReporter", "StageCounters", "render_progress_line"]

"""Exporter contract for the harvest artifact."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Mapping


class BaseExporter(ABC):
    """Destination for course records; written once the run is complete."""

    path: Path | None = None

    @abstractmethod
    def export(self, record: Mapping[str, Any]) -> None:
        """Queue one record for the artifact."""

    def export_many(self, records: Iterable[Mapping[str, Any]]) -> int:
        count = 0
        for record in records:
            self.export(record)
            count += 1
        return count

    @abstractmethod
    def close(self) -> None:
        """Finalize the artifact. Later exports are rejected."""

    def __enter__(self) -> "BaseExporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["BaseExporter"]

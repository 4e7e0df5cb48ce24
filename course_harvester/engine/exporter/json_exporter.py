"""Single-document JSON exporter."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from .base import BaseExporter


class JsonDocumentExporter(BaseExporter):
    """Collect records and write them as one pretty-printed JSON array."""

    def __init__(self, path: Path, indent: int = 2) -> None:
        self.path = Path(path)
        self.indent = indent
        self._records: list[Mapping[str, Any]] = []
        self._closed = False

    def export(self, record: Mapping[str, Any]) -> None:
        if self._closed:
            raise RuntimeError(f"Exporter for {self.path} already closed")
        self._records.append(record)

    def flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as stream:
            json.dump(self._records, stream, ensure_ascii=False, indent=self.indent)
            stream.write("\n")

    def close(self) -> None:
        if not self._closed:
            self.flush()
            self._closed = True


__all__ = ["JsonDocumentExporter"]

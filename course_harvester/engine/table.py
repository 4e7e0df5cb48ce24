"""Span-aware HTML table decoding.

Tables are first read into plain :class:`TableCell` rows so the decoding
logic is independent of the HTML parser. Decoding reconstructs the logical
grid: ``colspan`` fills adjacent columns, ``rowspan`` carries a value into
the following rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from selectolax.parser import Node

# Header cells spanning this many columns or more yield a single label.
HEADER_COLLAPSE_THRESHOLD = 4

CELL_TAGS = frozenset({"td", "th"})


@dataclass(frozen=True, slots=True)
class TableCell:
    """One cell as written in the markup.

    ``colspan`` keeps the declared attribute (``None`` when absent or not a
    number); header synthesis depends on whether it was given at all.
    """

    text: str
    colspan: int | None = None
    rowspan: int = 1

    @property
    def width(self) -> int:
        return max(self.colspan or 1, 1)


def _declared(value: str | None) -> int | None:
    try:
        return int((value or "").strip())
    except ValueError:
        return None


def _span(value: str | None) -> int:
    return max(_declared(value) or 1, 1)


def _cell_text(node: Node) -> str:
    return " ".join(node.text(deep=True, separator=" ").split())


def read_table(table: Node) -> list[list[TableCell]]:
    """Read ``<tr>`` rows of a table node into cells, in document order."""

    rows: list[list[TableCell]] = []
    for row in table.css("tr"):
        cells = [
            TableCell(
                text=_cell_text(cell),
                colspan=_declared(cell.attributes.get("colspan")),
                rowspan=_span(cell.attributes.get("rowspan")),
            )
            for cell in row.iter()
            if cell.tag in CELL_TAGS
        ]
        rows.append(cells)
    return rows


def parse_headers(rows: Sequence[Sequence[TableCell]]) -> list[str]:
    """Synthesize column labels from the first row.

    A header with a declared ``colspan`` below the collapse threshold expands
    to ``text0``, ``text1``... (``colspan="1"`` gives ``text0``, zero or
    negative gives no label). Wider or undeclared spans keep the bare text.
    """

    if not rows:
        return []
    labels: list[str] = []
    for cell in rows[0]:
        if cell.colspan is not None and cell.colspan < HEADER_COLLAPSE_THRESHOLD:
            labels.extend(f"{cell.text}{index}" for index in range(cell.colspan))
        else:
            labels.append(cell.text)
    return labels


def parse_table(
    rows: Sequence[Sequence[TableCell]], headers: Sequence[str] | None = None
) -> list[list[str]]:
    """Decode every row (header row included) into ``len(headers)`` strings."""

    if headers is None:
        headers = parse_headers(rows)
    width = len(headers)
    carry_counts = [0] * width
    carry_values = [""] * width
    decoded: list[list[str]] = []
    for row in rows:
        values: list[str | None] = [None] * width
        carried = [False] * width
        for column in range(width):
            if carry_counts[column] > 0:
                values[column] = carry_values[column]
                carried[column] = True
                carry_counts[column] -= 1

        cursor = 0
        for cell in row:
            while cursor < width and values[cursor] is not None:
                cursor += 1
            # Columns past the header width are dropped.
            for target in range(cursor, min(cursor + cell.width, width)):
                if carried[target]:
                    continue
                values[target] = cell.text
                if cell.rowspan > 1:
                    carry_counts[target] = cell.rowspan - 1
                    carry_values[target] = cell.text
            cursor += cell.width
        decoded.append([value if value is not None else "" for value in values])
    return decoded


def table_to_records(
    table: Node | Sequence[Sequence[TableCell]], headers: Sequence[str] | None = None
) -> list[dict[str, str]]:
    """Project data rows onto header labels, one mapping per row."""

    rows = read_table(table) if isinstance(table, Node) else table
    if headers is None:
        headers = parse_headers(rows)
    return [dict(zip(headers, row)) for row in parse_table(rows, headers)[1:]]


__all__ = [
    "HEADER_COLLAPSE_THRESHOLD",
    "TableCell",
    "parse_headers",
    "parse_table",
    "read_table",
    "table_to_records",
]

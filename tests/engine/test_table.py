from __future__ import annotations

from selectolax.parser import HTMLParser

from course_harvester.engine.table import (
    TableCell,
    parse_headers,
    parse_table,
    read_table,
    table_to_records,
)


def _table(html: str):
    return HTMLParser(html).css_first("table")


def test_header_synthesis_expands_small_spans_and_collapses_wide_ones() -> None:
    rows = read_table(
        _table(
            "<table><tr><th colspan='2'>A</th><th colspan='5'>B</th><th>C</th></tr></table>"
        )
    )
    assert parse_headers(rows) == ["A0", "A1", "B", "C"]


def test_header_span_of_three_expands_and_four_collapses() -> None:
    rows = [[TableCell("X", colspan=3), TableCell("Y", colspan=4)]]
    assert parse_headers(rows) == ["X0", "X1", "X2", "Y"]


def test_declared_single_colspan_expands_with_index() -> None:
    rows = read_table(_table("<table><tr><th colspan='1'>A</th><th>B</th></tr></table>"))
    assert parse_headers(rows) == ["A0", "B"]


def test_declared_zero_colspan_yields_no_label() -> None:
    rows = read_table(
        _table("<table><tr><th colspan='0'>Gone</th><th>B</th></tr><tr><td>x</td><td>y</td></tr></table>")
    )
    assert parse_headers(rows) == ["B"]
    assert parse_table(rows)[1] == ["x"]


def test_non_numeric_header_colspan_keeps_plain_label() -> None:
    rows = read_table(_table("<table><tr><th colspan='wide'>A</th><th>B</th></tr></table>"))
    assert parse_headers(rows) == ["A", "B"]


def test_rowspan_carries_value_into_next_row() -> None:
    table = _table(
        """
        <table>
          <tr><th>Week</th><th>Topic</th></tr>
          <tr><td rowspan="2">X</td><td>Intro</td></tr>
          <tr><td>Arrays</td></tr>
          <tr><td>3</td><td>Trees</td></tr>
        </table>
        """
    )
    assert parse_table(read_table(table)) == [
        ["Week", "Topic"],
        ["X", "Intro"],
        ["X", "Arrays"],
        ["3", "Trees"],
    ]


def test_table_projection_yields_mappings_in_order() -> None:
    table = _table(
        "<table><tr><th>Week</th><th>Topic</th></tr>"
        "<tr><td>1</td><td>Intro</td></tr><tr><td>2</td><td>Arrays</td></tr></table>"
    )
    assert table_to_records(table) == [
        {"Week": "1", "Topic": "Intro"},
        {"Week": "2", "Topic": "Arrays"},
    ]


def test_colspan_overflow_is_dropped() -> None:
    rows = [
        [TableCell("A"), TableCell("B")],
        [TableCell("Z", colspan=3)],
        [TableCell("1"), TableCell("2"), TableCell("3")],
    ]
    assert parse_table(rows) == [["A", "B"], ["Z", "Z"], ["1", "2"]]


def test_missing_cells_are_empty_strings() -> None:
    rows = [[TableCell("A"), TableCell("B"), TableCell("C")], [TableCell("only")]]
    assert parse_table(rows)[1] == ["only", "", ""]


def test_carried_column_is_not_overwritten_by_colspan() -> None:
    rows = [
        [TableCell("A"), TableCell("B"), TableCell("C")],
        [TableCell("a"), TableCell("b", rowspan=2), TableCell("c")],
        [TableCell("d", colspan=2), TableCell("e")],
    ]
    assert parse_table(rows)[2] == ["d", "b", "e"]


def test_rowspan_with_colspan_carries_every_column() -> None:
    rows = [
        [TableCell("A"), TableCell("B"), TableCell("C")],
        [TableCell("wide", colspan=2, rowspan=2), TableCell("x")],
        [TableCell("y")],
    ]
    assert parse_table(rows)[2] == ["wide", "wide", "y"]


def test_duplicate_header_labels_keep_last_value() -> None:
    rows = [[TableCell("Name"), TableCell("Name")], [TableCell("first"), TableCell("second")]]
    assert table_to_records(rows) == [{"Name": "second"}]


def test_read_table_normalises_text_and_bad_spans() -> None:
    table = _table(
        "<table><tr><td colspan='abc'>  Intro \n  to   <b>Python</b> </td>"
        "<td rowspan='0'>x</td></tr></table>"
    )
    assert read_table(table) == [[TableCell("Intro to Python"), TableCell("x")]]


def test_explicit_headers_override_first_row() -> None:
    rows = [[TableCell("ignored")], [TableCell("1"), TableCell("2")]]
    assert parse_table(rows, headers=["a", "b"]) == [["ignored", ""], ["1", "2"]]

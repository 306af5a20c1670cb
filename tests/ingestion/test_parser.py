import pytest

from booking_toolkit.ingestion.parser import parse_line, parse_rows


def test_quoted_cell_keeps_embedded_comma():
    assert parse_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_parse_rows_skips_blank_lines_and_strips_cells():
    content = "Customer , Date\r\n\r\n   \n Jane Doe ,2025-01-15\r\n"

    assert parse_rows(content) == [["Customer", "Date"], ["Jane Doe", "2025-01-15"]]


def test_unbalanced_quote_degrades_without_raising():
    assert parse_line('a,"b,c') == ["a", "b,c"]


def test_empty_content_yields_no_rows():
    assert parse_rows("") == []
    assert parse_rows("\n\n  \n") == []


@pytest.mark.parametrize(
    "content",
    ['"""', ",,,\n,,,", "\x00\x01\x02", "\ufffd\ufffdPNG\r\n\x1a\n", '"a,b\nc",d'],
)
def test_parse_rows_is_total(content):
    rows = parse_rows(content)

    assert isinstance(rows, list)
    assert all(isinstance(cell, str) for row in rows for cell in row)

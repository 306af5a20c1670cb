"""Minimal delimited-text parser used for uploaded appointment exports."""
from __future__ import annotations

from typing import List

from ..models import RawRow


def parse_rows(content: str) -> List[RawRow]:
    """Split ``content`` into rows of stripped cells.

    Blank lines are skipped. Double quotes toggle a quoted section in which
    commas are kept as part of the cell; the quote characters themselves are
    dropped. Unbalanced quotes never raise, the remainder of the line simply
    ends up in the last cell.
    """

    if not content:
        return []
    lines = (line.strip() for line in content.split("\n"))
    return [parse_line(line) for line in lines if line]


def parse_line(line: str) -> RawRow:
    cells: RawRow = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    cells.append("".join(current).strip())
    return cells


__all__ = ["parse_rows", "parse_line"]

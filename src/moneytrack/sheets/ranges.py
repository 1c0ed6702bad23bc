"""A1-notation ranges for sheet reads."""

from dataclasses import dataclass
from typing import Optional, Sequence
import re

from moneytrack.domain.errors import ValidationError, invalid_range

_CELL_RE = re.compile(r"^([A-Za-z]*)(\d*)$")


@dataclass(frozen=True)
class SheetRange:
    """Rectangular block of a sheet.

    Rows are 1-based with the header as row 1; columns are 0-based. Bounds are
    inclusive and ``None`` means open-ended.
    """

    start_row: int = 1
    end_row: Optional[int] = None
    start_col: int = 0
    end_col: Optional[int] = None

    def apply(self, rows: Sequence[Sequence[str]]) -> list[list[str]]:
        selected = rows[self.start_row - 1 : self.end_row]
        stop = None if self.end_col is None else self.end_col + 1
        return [list(row[self.start_col : stop]) for row in selected]


def column_index(letters: str) -> int:
    """Convert column letters to a 0-based index ("A" -> 0, "AA" -> 26)."""
    index = 0
    for letter in letters.upper():
        index = index * 26 + (ord(letter) - ord("A") + 1)
    return index - 1


def _parse_cell(cell: str, range_str: str) -> tuple[Optional[int], Optional[int]]:
    match = _CELL_RE.match(cell.strip())
    if match is None or not (match.group(1) or match.group(2)):
        raise ValidationError(invalid_range(range_str))
    col = column_index(match.group(1)) if match.group(1) else None
    row = int(match.group(2)) if match.group(2) else None
    if row is not None and row < 1:
        raise ValidationError(invalid_range(range_str))
    return col, row


def parse_range(range_str: Optional[str]) -> SheetRange:
    """Parse ranges like "A1:E", "A2:C10", "1:1", "B:B" or "Sheet1!A1:E".

    A single reference ("A", "3", "B2") selects just that column, row or cell.
    ``None`` or an empty string selects everything.

    Raises:
        ValidationError: If the range is malformed
    """
    if range_str is None or not range_str.strip():
        return SheetRange()

    body = range_str.strip().rsplit("!", 1)[-1]
    start, _, end = body.partition(":")
    start_col, start_row = _parse_cell(start, range_str)
    if end:
        end_col, end_row = _parse_cell(end, range_str)
    else:
        end_col, end_row = start_col, start_row

    sheet_range = SheetRange(
        start_row=start_row or 1,
        end_row=end_row,
        start_col=start_col or 0,
        end_col=end_col,
    )
    if sheet_range.end_row is not None and sheet_range.end_row < sheet_range.start_row:
        raise ValidationError(invalid_range(range_str))
    if sheet_range.end_col is not None and sheet_range.end_col < sheet_range.start_col:
        raise ValidationError(invalid_range(range_str))
    return sheet_range

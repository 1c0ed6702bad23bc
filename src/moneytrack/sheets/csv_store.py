"""CSV file sheet store."""

import csv
from pathlib import Path
from typing import Optional, Sequence

from moneytrack.domain.errors import (
    ConflictError,
    SheetStoreError,
    sheet_already_initialized,
    sheet_has_no_header,
)
from moneytrack.logging_setup import get_logger
from moneytrack.sheets.base import Row, SheetStore
from moneytrack.sheets.ranges import parse_range

_logger = get_logger("moneytrack.sheets.csv_store")

_DELIMITERS = ",;\t|"


class CSVSheetStore(SheetStore):
    """Sheet kept in a CSV file; the file's first row is the header."""

    def __init__(self, path: str):
        """Initialize CSV sheet store.

        Args:
            path: Path to the CSV file (created by :meth:`create` if missing)
        """
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def _delimiter(self, sample: str) -> str:
        if not sample.strip():
            return ","
        try:
            return csv.Sniffer().sniff(sample, delimiters=_DELIMITERS).delimiter
        except csv.Error:
            return ","

    def _read_all(self) -> tuple[list[list[str]], str]:
        if not self.path.exists():
            return [], ","
        try:
            with open(self.path, "r", encoding="utf-8-sig", newline="") as f:
                sample = f.read(1024)
                f.seek(0)
                delimiter = self._delimiter(sample)
                reader = csv.reader(f, delimiter=delimiter)
                rows = [row for row in reader if any(cell.strip() for cell in row)]
        except (OSError, csv.Error) as e:
            raise SheetStoreError(f"Could not read {self.path}: {e}") from e
        return rows, delimiter

    def create(self, schema: Sequence[str]) -> str:
        rows, _ = self._read_all()
        if rows:
            raise ConflictError(sheet_already_initialized(self.location))

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8", newline="") as f:
                csv.writer(f).writerow(list(schema))
        except OSError as e:
            raise SheetStoreError(f"Could not create {self.path}: {e}") from e

        _logger.info("Created sheet %s with columns %s", self.path, ", ".join(schema))
        return str(self.path)

    def read(self, cell_range: Optional[str] = None) -> list[list[str]]:
        sheet_range = parse_range(cell_range)
        rows, _ = self._read_all()
        return sheet_range.apply(rows)

    def append(self, rows: Sequence[Row]) -> int:
        existing, delimiter = self._read_all()
        if not existing:
            raise SheetStoreError(sheet_has_no_header(self.location))
        if not rows:
            return 0

        headers = [header.strip() for header in existing[0]]
        try:
            needs_newline = not self.path.read_bytes().endswith(b"\n")
            with open(self.path, "a", encoding="utf-8", newline="") as f:
                if needs_newline:
                    f.write("\r\n")
                writer = csv.writer(f, delimiter=delimiter)
                for row in rows:
                    writer.writerow(self._cells(row, headers))
        except OSError as e:
            raise SheetStoreError(f"Could not append to {self.path}: {e}") from e

        _logger.info("Appended %d row(s) to %s", len(rows), self.path)
        return len(rows)

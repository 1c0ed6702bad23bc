"""Abstract sheet store interface."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence, Union

Row = Union[Sequence[Any], Mapping[str, Any]]


class SheetStore(ABC):
    """A single sheet of rows whose first row is the header."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable identifier of the sheet (path or URL)."""
        pass

    @abstractmethod
    def create(self, schema: Sequence[str]) -> str:
        """Create the sheet with ``schema`` as its header row. Returns sheet ID.

        Raises:
            ConflictError: If the sheet already has a header row
        """
        pass

    @abstractmethod
    def read(self, cell_range: Optional[str] = None) -> list[list[str]]:
        """Read rows, header first, optionally restricted to an A1 range.

        Blank rows are skipped.
        """
        pass

    @abstractmethod
    def append(self, rows: Sequence[Row]) -> int:
        """Append rows after the last one. Returns number of rows appended.

        Rows may be sequences in header order or mappings keyed by header.

        Raises:
            SheetStoreError: If the sheet has no header row or cannot be written
        """
        pass

    def headers(self) -> list[str]:
        """Header row, or an empty list for a sheet that was never created."""
        rows = self.read("1:1")
        return [header.strip() for header in rows[0]] if rows else []

    @staticmethod
    def _cells(row: Row, headers: Sequence[str]) -> list[str]:
        """Render a row as strings laid out in header order."""
        if isinstance(row, Mapping):
            values = [row.get(header, "") for header in headers]
        else:
            values = list(row)[: len(headers)]
            values += [""] * (len(headers) - len(values))
        return ["" if value is None else str(value) for value in values]

"""SQLAlchemy-backed sheet store."""

from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moneytrack.domain.errors import (
    ConflictError,
    SheetStoreError,
    sheet_already_initialized,
    sheet_has_no_header,
)
from moneytrack.logging_setup import get_logger
from moneytrack.sheets.base import Row, SheetStore
from moneytrack.sheets.models import SheetColumn, SheetRow, create_session_factory
from moneytrack.sheets.ranges import parse_range

_logger = get_logger("moneytrack.sheets.sqlalchemy_store")

DEFAULT_SHEET_NAME = "transactions"


class SQLAlchemySheetStore(SheetStore):
    """Sheet stored in a database; several named sheets can share one database."""

    def __init__(self, database_url: str, sheet_name: str = DEFAULT_SHEET_NAME):
        """Initialize SQLAlchemy sheet store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
            sheet_name: Name of the sheet within the database
        """
        self.database_url = database_url
        self.sheet_name = sheet_name
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    @property
    def location(self) -> str:
        return f"{self.database_url}#{self.sheet_name}"

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def disconnect(self) -> None:
        """Close the session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def _header_rows(self, session: Session) -> list[SheetColumn]:
        return (
            session.query(SheetColumn)
            .filter(SheetColumn.sheet_name == self.sheet_name)
            .order_by(SheetColumn.position)
            .all()
        )

    def create(self, schema: Sequence[str]) -> str:
        session = self._get_session()
        if self._header_rows(session):
            raise ConflictError(sheet_already_initialized(self.location))

        try:
            for position, name in enumerate(schema):
                session.add(SheetColumn(sheet_name=self.sheet_name, position=position, name=name))
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise SheetStoreError(f"Could not create sheet {self.location}: {e}") from e

        _logger.info("Created sheet %s with columns %s", self.location, ", ".join(schema))
        return self.sheet_name

    def read(self, cell_range: Optional[str] = None) -> list[list[str]]:
        sheet_range = parse_range(cell_range)
        session = self._get_session()
        headers = [column.name for column in self._header_rows(session)]
        if not headers:
            return []

        rows = [headers]
        for sheet_row in (
            session.query(SheetRow)
            .filter(SheetRow.sheet_name == self.sheet_name)
            .order_by(SheetRow.id)
            .all()
        ):
            cells = [str(cell) for cell in sheet_row.cells or []]
            if any(cell.strip() for cell in cells):
                rows.append(cells)
        return sheet_range.apply(rows)

    def append(self, rows: Sequence[Row]) -> int:
        session = self._get_session()
        headers = [column.name for column in self._header_rows(session)]
        if not headers:
            raise SheetStoreError(sheet_has_no_header(self.location))
        if not rows:
            return 0

        try:
            for row in rows:
                session.add(SheetRow(sheet_name=self.sheet_name, cells=self._cells(row, headers)))
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise SheetStoreError(f"Could not append to sheet {self.location}: {e}") from e

        _logger.info("Appended %d row(s) to %s", len(rows), self.location)
        return len(rows)

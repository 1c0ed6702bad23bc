"""Sheet store factory functions."""

import os
from pathlib import Path
from typing import Optional

from moneytrack.sheets.base import SheetStore
from moneytrack.sheets.csv_store import CSVSheetStore
from moneytrack.sheets.sqlalchemy_store import SQLAlchemySheetStore

_DATABASE_SUFFIXES = {".db", ".sqlite", ".sqlite3"}


def default_sheet_path() -> Path:
    """MONEYTRACK_SHEET_PATH, else ~/.moneytrack/money-tracker.csv."""
    env_path = os.environ.get("MONEYTRACK_SHEET_PATH")
    if env_path:
        return Path(env_path)
    return Path.home() / ".moneytrack" / "money-tracker.csv"


def create_sheet_store(sheet_path: Optional[str] = None) -> SheetStore:
    """Create a sheet store for a file.

    Args:
        sheet_path: Path to the sheet. Files ending in .db, .sqlite or .sqlite3
            are opened as SQLite databases, anything else as CSV. If None,
            :func:`default_sheet_path` is used.

    Returns:
        SheetStore instance
    """
    path = Path(sheet_path) if sheet_path else default_sheet_path()

    if path.suffix.lower() in _DATABASE_SUFFIXES:
        path.parent.mkdir(parents=True, exist_ok=True)
        return SQLAlchemySheetStore(f"sqlite:///{path}")
    return CSVSheetStore(str(path))

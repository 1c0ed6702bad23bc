"""Sheet stores for moneytrack."""

from moneytrack.sheets.base import SheetStore
from moneytrack.sheets.factories import create_sheet_store

__all__ = ["SheetStore", "create_sheet_store"]

"""Domain layer for moneytrack application."""

from moneytrack.domain.column_roles import resolve_column_roles
from moneytrack.domain.text_parser import TextTransactionParser, parse_block, parse_line
from moneytrack.domain.extraction import TransactionExtractionService
from moneytrack.domain.ledger import LedgerService

__all__ = [
    "resolve_column_roles",
    "TextTransactionParser",
    "parse_line",
    "parse_block",
    "TransactionExtractionService",
    "LedgerService",
]

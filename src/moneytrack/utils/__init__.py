"""Utility functions for moneytrack."""

from moneytrack.utils.amount_parser import coerce_amount, find_amount, parse_amount
from moneytrack.utils.date_parser import DateFormat, detect_date_format, parse_date
from moneytrack.utils.number_format import format_indian_number

__all__ = [
    "coerce_amount",
    "find_amount",
    "parse_amount",
    "DateFormat",
    "detect_date_format",
    "parse_date",
    "format_indian_number",
]

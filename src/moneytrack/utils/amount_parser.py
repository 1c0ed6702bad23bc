"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional
import re

# Currency glyph is recognized but optional; fraction limited to two digits.
AMOUNT_PATTERN = re.compile(r"([$₹€£])?(\d+(?:\.\d{1,2})?)")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45" / "₹123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}") from e

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")

    return -amount if is_negative else amount


def coerce_amount(value: Any) -> Decimal:
    """Coerce any value to a finite, non-negative Decimal.

    Numbers are used as-is, strings go through :func:`parse_amount`. Anything
    that cannot be parsed becomes zero. The sign is dropped since the
    transaction type carries the direction.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        try:
            amount = parse_amount(str(value))
        except ValueError:
            return Decimal(0)

    if not amount.is_finite():
        return Decimal(0)
    return abs(amount)


def find_amount(text: str) -> Optional[re.Match]:
    """Return the first amount-looking match in free text, or None."""
    if not text:
        return None
    return AMOUNT_PATTERN.search(text)

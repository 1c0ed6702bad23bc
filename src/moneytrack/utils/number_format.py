"""Number formatting utilities."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

# Indian numbering: crore (10^7), lakh (10^5), thousand.
_SCALES = (
    (10_000_000, "Cr"),
    (100_000, "L"),
    (1_000, "K"),
)


def format_indian_number(value: Union[int, float, Decimal]) -> str:
    """Abbreviate an amount the way the analysis view shows totals.

    Examples:
        1234567 -> "12.35 L"
        25000000 -> "2.50 Cr"
        950 -> "950.00"
    """
    number = float(value)
    for threshold, suffix in _SCALES:
        if number >= threshold:
            return f"{number / threshold:.2f} {suffix}"
    return f"{number:.2f}"


def format_rupees(value: Union[int, float, Decimal]) -> str:
    """Full amount with Indian digit grouping, e.g. "₹12,34,567.00"."""
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")

    head, groups = whole[:-3], [whole[-3:]]
    while head:
        groups.insert(0, head[-2:])
        head = head[:-2]
    return f"{sign}₹{','.join(groups)}.{fraction}"

"""Tests for number formatting."""

from decimal import Decimal

import pytest

from moneytrack.utils.number_format import format_indian_number, format_rupees


@pytest.mark.parametrize(
    "value,expected",
    [
        (1234567, "12.35 L"),
        (25000000, "2.50 Cr"),
        (Decimal("100000"), "1.00 L"),
        (1500, "1.50 K"),
        (999, "999.00"),
        (Decimal("12.5"), "12.50"),
        (0, "0.00"),
    ],
)
def test_format_indian_number(value, expected):
    assert format_indian_number(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (1234567, "₹12,34,567.00"),
        (Decimal("100000"), "₹1,00,000.00"),
        (Decimal("1200.5"), "₹1,200.50"),
        (999, "₹999.00"),
        (0, "₹0.00"),
        (Decimal("-45"), "-₹45.00"),
    ],
)
def test_format_rupees(value, expected):
    assert format_rupees(value) == expected

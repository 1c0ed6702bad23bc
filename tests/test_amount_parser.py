"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from moneytrack.utils.amount_parser import coerce_amount, find_amount, parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("₹1,234.50", Decimal("1234.50")),
        ("-42", Decimal("-42")),
        ("(19.99)", Decimal("-19.99")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("250", Decimal("250")),
        ("-250", Decimal("250")),
        (99, Decimal("99")),
        (12.5, Decimal("12.5")),
        (Decimal("-3.10"), Decimal("3.10")),
        ("lots", Decimal(0)),
        (None, Decimal(0)),
        (True, Decimal(0)),
        (float("nan"), Decimal(0)),
        (float("inf"), Decimal(0)),
    ],
)
def test_coerce_amount(value, expected):
    assert coerce_amount(value) == expected


def test_find_amount_returns_first_number():
    match = find_amount("paid €20 and then 30")

    assert match.group(1) == "€"
    assert match.group(2) == "20"


def test_find_amount_limits_fraction_digits():
    assert find_amount("12.345").group(2) == "12.34"


def test_find_amount_none():
    assert find_amount("no numbers") is None
    assert find_amount("") is None

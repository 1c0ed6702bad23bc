"""Tests for A1 sheet ranges."""

import pytest

from moneytrack.domain.errors import ValidationError
from moneytrack.sheets.ranges import SheetRange, column_index, parse_range

ROWS = [
    ["Date", "Type", "Amount", "Category", "Description", "Extra"],
    ["01-01-2024", "Expense", "10", "Food", "tea", "x"],
    ["02-01-2024", "Income", "20", "Salary", "pay", "y"],
]


@pytest.mark.parametrize("letters,index", [("A", 0), ("e", 4), ("Z", 25), ("AA", 26), ("AZ", 51)])
def test_column_index(letters, index):
    assert column_index(letters) == index


def test_parse_range_none_selects_everything():
    assert parse_range(None) == SheetRange()
    assert parse_range("") == SheetRange()


def test_header_row():
    assert parse_range("1:1").apply(ROWS) == [ROWS[0]]


def test_columns_a_to_e():
    selected = parse_range("A1:E").apply(ROWS)

    assert selected[0] == ["Date", "Type", "Amount", "Category", "Description"]
    assert len(selected) == 3


def test_single_column_with_sheet_name():
    assert parse_range("Sheet1!C:C").apply(ROWS) == [["Amount"], ["10"], ["20"]]


def test_bounded_block():
    assert parse_range("B2:C3").apply(ROWS) == [["Expense", "10"], ["Income", "20"]]


def test_single_cell():
    assert parse_range("D3").apply(ROWS) == [["Salary"]]


def test_range_beyond_data_is_empty():
    assert parse_range("10:12").apply(ROWS) == []


@pytest.mark.parametrize("range_str", ["A0", "3:1", "C:A", "A1:*", "!!", "1A"])
def test_invalid_ranges(range_str):
    with pytest.raises(ValidationError):
        parse_range(range_str)

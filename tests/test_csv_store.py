"""Tests for the CSV sheet store."""

import pytest

from moneytrack.domain.errors import ConflictError, SheetStoreError
from moneytrack.sheets.csv_store import CSVSheetStore


def test_read_missing_file_is_empty(csv_store):
    assert csv_store.read() == []
    assert csv_store.headers() == []


def test_create_writes_header(csv_store, sheet_path):
    sheet_id = csv_store.create(["Date", "Amount"])

    assert sheet_id == str(sheet_path)
    assert csv_store.headers() == ["Date", "Amount"]


def test_create_existing_sheet_conflicts(csv_store):
    csv_store.create(["Date", "Amount"])

    with pytest.raises(ConflictError):
        csv_store.create(["Date", "Amount"])


def test_create_makes_parent_directory(tmp_path):
    store = CSVSheetStore(str(tmp_path / "nested" / "ledger.csv"))

    store.create(["Amount"])

    assert store.headers() == ["Amount"]


def test_append_mappings_and_sequences(csv_store):
    csv_store.create(["Date", "Amount", "Notes"])

    added = csv_store.append(
        [
            {"Amount": 45, "Notes": "coffee, large", "Unknown": "ignored"},
            ["01-01-2024", "10"],
            ["02-01-2024", "20", "tea", "extra"],
        ]
    )

    assert added == 3
    assert csv_store.read() == [
        ["Date", "Amount", "Notes"],
        ["", "45", "coffee, large"],
        ["01-01-2024", "10", ""],
        ["02-01-2024", "20", "tea"],
    ]


def test_append_without_header_fails(csv_store):
    with pytest.raises(SheetStoreError, match="no header row"):
        csv_store.append([["x"]])


def test_append_nothing(csv_store):
    csv_store.create(["Amount"])

    assert csv_store.append([]) == 0


def test_append_keeps_semicolon_delimiter(write_sheet, csv_store, sheet_path):
    write_sheet("Date;Amount;Notes\n01-01-2024;10;tea\n")

    csv_store.append([{"Date": "02-01-2024", "Amount": "20", "Notes": "milk"}])

    lines = sheet_path.read_text(encoding="utf-8").splitlines()
    assert lines[-1] == "02-01-2024;20;milk"
    assert csv_store.read()[2] == ["02-01-2024", "20", "milk"]


def test_append_after_missing_trailing_newline(write_sheet, csv_store):
    write_sheet("Date,Amount\n01-01-2024,10")

    csv_store.append([["02-01-2024", "20"]])

    assert csv_store.read()[1:] == [["01-01-2024", "10"], ["02-01-2024", "20"]]


def test_read_skips_blank_rows_and_bom(write_sheet, csv_store):
    write_sheet("\ufeffDate,Amount\n\n01-01-2024,10\n,\n")

    assert csv_store.read() == [["Date", "Amount"], ["01-01-2024", "10"]]


def test_read_range(write_sheet, csv_store):
    write_sheet("Date,Amount,Notes\n01-01-2024,10,tea\n")

    assert csv_store.read("B:B") == [["Amount"], ["10"]]

"""Tests for ledger configuration."""

import json

import pytest

from moneytrack.domain.config import (
    DEFAULT_COLUMNS,
    LedgerConfig,
    default_config_path,
    load_config,
    save_config,
)
from moneytrack.domain.entities import TransactionKind, TypeLabels
from moneytrack.domain.errors import ConfigError
from moneytrack.utils.date_parser import DateFormat


def test_defaults():
    config = LedgerConfig()

    assert config.columns == DEFAULT_COLUMNS
    assert config.type_labels == TypeLabels("Income", "Expense")
    assert "Salary" in config.categories.income
    assert "Food" in config.categories.expense
    assert config.date_format == DateFormat("DMY", "-")


def test_missing_file_gives_defaults(config_path):
    assert load_config(str(config_path)) == LedgerConfig()


def test_save_and_load(config_path):
    config = LedgerConfig()
    config = config.with_categories(config.categories.add(TransactionKind.EXPENSE, "Coffee"))

    written = save_config(config, str(config_path))

    assert written == config_path
    assert load_config(str(config_path)) == config


def test_from_dict_overrides():
    config = LedgerConfig.from_dict(
        {
            "columns": ["When", "Amt", "Notes"],
            "transaction_types": ["Credit", "Debit"],
            "income_categories": ["Salary"],
            "expense_categories": ["Food", "food", 5],
            "date_format": "yyyy/mm/dd",
        }
    )

    assert config.columns == ("When", "Amt", "Notes")
    assert config.type_labels == TypeLabels("Credit", "Debit")
    assert config.categories.income == ("Salary",)
    assert config.categories.expense == ("Food",)
    assert config.date_pattern == "YYYY/MM/DD"


def test_from_dict_partial_keeps_defaults():
    config = LedgerConfig.from_dict({"expense_categories": ["Food"]})

    assert config.columns == DEFAULT_COLUMNS
    assert config.categories.expense == ("Food",)
    assert config.categories.income == ()


@pytest.mark.parametrize(
    "data",
    [
        {"columns": "Date,Amount"},
        {"columns": ["Date", ""]},
        {"transaction_types": ["Income"]},
        {"transaction_types": ["In", "in"]},
        {"date_format": "DD-MM-YY"},
        {"date_format": 5},
    ],
)
def test_from_dict_invalid(data):
    with pytest.raises(ConfigError):
        LedgerConfig.from_dict(data)


def test_invalid_json(config_path):
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="not valid JSON"):
        load_config(str(config_path))


def test_non_object_json(config_path):
    config_path.write_text(json.dumps(["Food"]), encoding="utf-8")

    with pytest.raises(ConfigError, match="JSON object"):
        load_config(str(config_path))


def test_default_config_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("MONEYTRACK_CONFIG_PATH", str(tmp_path / "custom.json"))

    assert default_config_path() == tmp_path / "custom.json"

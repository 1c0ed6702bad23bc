"""Ledger configuration.

The configuration is an explicit value handed to the parser and services.
It can be persisted as JSON so that user-added categories survive restarts.
"""

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from moneytrack.domain.entities import CategoryList, Role, TypeLabels
from moneytrack.domain.errors import ConfigError
from moneytrack.utils.date_parser import DateFormat

DEFAULT_COLUMNS: tuple[str, ...] = (
    Role.DATE.value,
    Role.TYPE.value,
    Role.AMOUNT.value,
    Role.CATEGORY.value,
    Role.DESCRIPTION.value,
)

DEFAULT_CATEGORIES = CategoryList(
    income=("Salary", "Freelance", "Business", "Interest", "Other"),
    expense=(
        "Food",
        "Transport",
        "Rent",
        "Utilities",
        "Health",
        "Shopping",
        "Entertainment",
        "Travel",
        "Other",
    ),
)

DEFAULT_DATE_PATTERN = "DD-MM-YYYY"


@dataclass(frozen=True)
class LedgerConfig:
    """Columns, type labels, categories and date pattern for a ledger."""

    columns: tuple[str, ...] = DEFAULT_COLUMNS
    type_labels: TypeLabels = TypeLabels()
    categories: CategoryList = DEFAULT_CATEGORIES
    date_pattern: str = DEFAULT_DATE_PATTERN

    @property
    def date_format(self) -> DateFormat:
        return DateFormat.from_pattern(self.date_pattern)

    def with_categories(self, categories: CategoryList) -> "LedgerConfig":
        return replace(self, categories=categories)

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": list(self.columns),
            "transaction_types": [self.type_labels.income, self.type_labels.expense],
            "income_categories": list(self.categories.income),
            "expense_categories": list(self.categories.expense),
            "date_format": self.date_pattern,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedgerConfig":
        """Build a config from parsed JSON.

        Missing keys keep their defaults. Category lists that are not lists of
        strings are treated as empty.

        Raises:
            ConfigError: If columns, transaction types or the date format are invalid
        """
        config = cls()

        columns = data.get("columns")
        if columns is not None:
            if not isinstance(columns, list) or not all(isinstance(c, str) and c.strip() for c in columns):
                raise ConfigError("'columns' must be a list of non-empty strings")
            config = replace(config, columns=tuple(c.strip() for c in columns))

        types = data.get("transaction_types")
        if types is not None:
            if (
                not isinstance(types, list)
                or len(types) != 2
                or not all(isinstance(t, str) and t.strip() for t in types)
                or types[0].strip().lower() == types[1].strip().lower()
            ):
                raise ConfigError("'transaction_types' must be two distinct strings: [income, expense]")
            config = replace(config, type_labels=TypeLabels(types[0].strip(), types[1].strip()))

        if "income_categories" in data or "expense_categories" in data:
            config = config.with_categories(
                CategoryList.from_lists(
                    data.get("income_categories"), data.get("expense_categories")
                )
            )

        pattern = data.get("date_format")
        if pattern is not None:
            try:
                DateFormat.from_pattern(pattern)
            except (ValueError, AttributeError) as e:
                raise ConfigError(f"Invalid 'date_format': {e}") from e
            config = replace(config, date_pattern=pattern.strip().upper())

        return config


def default_config_path() -> Path:
    """Config file location: MONEYTRACK_CONFIG_PATH, else ~/.moneytrack/config.json."""
    env_path = os.environ.get("MONEYTRACK_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return Path.home() / ".moneytrack" / "config.json"


def load_config(path: Optional[str] = None) -> LedgerConfig:
    """Load configuration, falling back to defaults when the file is absent.

    Args:
        path: Optional config file path (defaults to :func:`default_config_path`)

    Returns:
        LedgerConfig

    Raises:
        ConfigError: If the file exists but is not a valid config
    """
    config_path = Path(path) if path else default_config_path()
    if not config_path.exists():
        return LedgerConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {config_path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    return LedgerConfig.from_dict(data)


def save_config(config: LedgerConfig, path: Optional[str] = None) -> Path:
    """Write configuration as JSON, creating the parent directory if needed."""
    config_path = Path(path) if path else default_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise ConfigError(f"Could not write config file {config_path}: {e}") from e
    return config_path

"""Prompt construction for language-model transaction extraction."""

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from moneytrack.domain.entities import CategoryList, Role, TypeLabels


@dataclass(frozen=True)
class SchemaHint:
    """What the extractor should return: column names and allowed values."""

    columns: tuple[str, ...]
    amount_column: str = Role.AMOUNT.value
    type_column: str = Role.TYPE.value
    category_column: str = Role.CATEGORY.value
    description_column: str = Role.DESCRIPTION.value
    date_column: str = Role.DATE.value
    type_labels: TypeLabels = TypeLabels()
    categories: CategoryList = CategoryList()
    date_pattern: str = "DD-MM-YYYY"
    today: date = date(1970, 1, 1)


def build_system_prompt(hint: SchemaHint) -> str:
    """Instructions listing each field's rules and the exact output keys."""
    income = ", ".join(hint.categories.income) or "(none)"
    expense = ", ".join(hint.categories.expense) or "(none)"
    columns = ", ".join(hint.columns)
    return (
        "Extract the following fields from natural language expense text:\n"
        f"- {hint.amount_column}: number (positive value)\n"
        f'- {hint.type_column}: must be exactly "{hint.type_labels.income}" '
        f'or "{hint.type_labels.expense}"\n'
        f"- {hint.category_column}: select from:\n"
        f"  * For {hint.type_labels.income}: {income}\n"
        f"  * For {hint.type_labels.expense}: {expense}\n"
        f"- {hint.description_column}: short descriptive text which should not include "
        "any other fields. If nothing to describe, leave empty\n"
        f"- {hint.date_column}: format as {hint.date_pattern}, take today as reference "
        f"for day, month and year. Today's date is {hint.today.isoformat()}\n"
        "\n"
        f"Return an array of objects with these exact field names: {columns}. "
        "Use today's date if no date is mentioned. Respond ONLY in valid JSON format."
    )


def build_messages(text: str, hint: SchemaHint) -> list[dict[str, str]]:
    """Chat messages for one extraction request."""
    return [
        {"role": "system", "content": build_system_prompt(hint)},
        {"role": "user", "content": text},
    ]


def strip_code_fence(content: str) -> str:
    """Remove a surrounding Markdown code fence, which chat models often add."""
    stripped = content.strip()
    if not stripped.startswith("```"):
        return stripped
    lines: Sequence[str] = stripped.splitlines()[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()

"""Domain model entities for moneytrack.

Parsing works on records keyed by a closed set of roles. Actual sheet headers
only appear at the edges: the role map says which header plays which role,
and ``TransactionRecord.to_row`` projects a record onto a header list.
"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence


class Role(str, Enum):
    """Semantic meaning of a sheet column; values are the canonical headers."""

    AMOUNT = "Amount"
    TYPE = "Type"
    CATEGORY = "Category"
    DESCRIPTION = "Description"
    DATE = "Date"

    @property
    def attr(self) -> str:
        return self.name.lower()


# Resolution order; an earlier role claims a header before later ones see it.
ROLE_ORDER = (Role.AMOUNT, Role.TYPE, Role.CATEGORY, Role.DESCRIPTION, Role.DATE)


class TransactionKind(str, Enum):
    """Direction of a transaction, independent of how a sheet labels it."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class TypeLabels:
    """The two tokens a sheet uses in its type column."""

    income: str = "Income"
    expense: str = "Expense"

    def label_for(self, kind: TransactionKind) -> str:
        return self.income if kind is TransactionKind.INCOME else self.expense

    def kind_of(self, value: Any) -> Optional[TransactionKind]:
        """Exact, case-insensitive match of a stored value against the labels."""
        if value is None:
            return None
        text = str(value).strip().lower()
        if text == self.income.lower():
            return TransactionKind.INCOME
        if text == self.expense.lower():
            return TransactionKind.EXPENSE
        return None


@dataclass(frozen=True)
class ColumnRoleMap:
    """Which header plays which role; ``None`` when no header matched."""

    amount: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def canonical(cls) -> "ColumnRoleMap":
        """Role map for a sheet that uses the canonical header spellings."""
        return cls(**{role.attr: role.value for role in Role})

    def column_for(self, role: Role) -> Optional[str]:
        return getattr(self, role.attr)

    def is_resolved(self, role: Role) -> bool:
        return self.column_for(role) is not None

    def resolved(self) -> dict[Role, str]:
        return {role: self.column_for(role) for role in ROLE_ORDER if self.is_resolved(role)}

    def unresolved(self) -> list[Role]:
        return [role for role in ROLE_ORDER if not self.is_resolved(role)]


@dataclass
class TransactionRecord:
    """One income or expense entry, keyed by role.

    Mutable so a review step can edit fields before the record is saved.
    ``amount`` is ``None`` only for a blank record awaiting manual input.
    """

    date: str = ""
    type: str = ""
    amount: Optional[Decimal] = None
    category: str = ""
    description: str = ""

    @classmethod
    def empty(cls) -> "TransactionRecord":
        return cls()

    def get(self, role: Role) -> Any:
        return getattr(self, role.attr)

    def set(self, role: Role, value: Any) -> None:
        setattr(self, role.attr, value)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) in (None, "") for f in fields(self))

    def to_row(self, roles: ColumnRoleMap, columns: Sequence[str]) -> dict[str, Any]:
        """Project onto a header list.

        The result has exactly ``columns`` as keys. Columns that play no role
        are left blank.
        """
        row: dict[str, Any] = {column: "" for column in columns}
        for role, column in roles.resolved().items():
            if column in row:
                value = self.get(role)
                row[column] = "" if value is None else value
        return row


def category_names(values: Any) -> tuple[str, ...]:
    """Trimmed names without case-insensitive duplicates.

    Anything other than a list or tuple gives (); non-string items are skipped.
    """
    if not isinstance(values, (list, tuple)):
        return ()
    names: list[str] = []
    seen: set[str] = set()
    for value in values:
        if not isinstance(value, str) or not value.strip():
            continue
        name = value.strip()
        if name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return tuple(names)


@dataclass(frozen=True)
class CategoryList:
    """Known income and expense categories, in display order."""

    income: tuple[str, ...] = ()
    expense: tuple[str, ...] = ()

    @classmethod
    def from_lists(cls, income: Any = None, expense: Any = None) -> "CategoryList":
        """Build from loosely-typed input; anything that is not a list of strings is dropped."""
        return cls(income=category_names(income), expense=category_names(expense))

    def for_kind(self, kind: TransactionKind) -> tuple[str, ...]:
        return self.income if kind is TransactionKind.INCOME else self.expense

    def find(self, kind: TransactionKind, name: str) -> Optional[str]:
        """Return the listed spelling of ``name``, or None if it is not listed."""
        wanted = (name or "").strip().lower()
        for category in self.for_kind(kind):
            if category.lower() == wanted:
                return category
        return None

    def add(self, kind: TransactionKind, name: str) -> "CategoryList":
        """Return a copy with ``name`` appended to the list for ``kind``."""
        if kind is TransactionKind.INCOME:
            return CategoryList.from_lists(self.income + (name,), self.expense)
        return CategoryList.from_lists(self.income, self.expense + (name,))

    def extended(self, kind: TransactionKind, names: Iterable[str]) -> "CategoryList":
        """Return a copy with every name in ``names`` added for ``kind``."""
        result = self
        for name in names:
            result = result.add(kind, name)
        return result


@dataclass(frozen=True)
class LedgerSnapshot:
    """Contents of a sheet at load time."""

    headers: tuple[str, ...]
    rows: tuple[Mapping[str, str], ...]
    roles: ColumnRoleMap
    location: str = ""

    def values(self, column: Optional[str]) -> list[str]:
        """Non-blank trimmed cell values of ``column`` in row order."""
        if column is None:
            return []
        values = []
        for row in self.rows:
            value = (row.get(column) or "").strip()
            if value:
                values.append(value)
        return values


@dataclass(frozen=True)
class CategoryTotal:
    """Summed amount for one category."""

    category: str
    amount: Decimal = field(default=Decimal(0))

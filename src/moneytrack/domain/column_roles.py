"""Column role resolution.

Sheets exported from different tools name their columns differently
("Amount", "amt (INR)", "Transaction Date", "Notes"...). The resolver maps
whatever headers a sheet has onto the roles the parser needs by
case-insensitive substring matching against ordered keyword lists.
"""

from typing import Any, Iterable, Mapping, Optional, Sequence

from moneytrack.domain.entities import ColumnRoleMap, Role, ROLE_ORDER
from moneytrack.domain.errors import UnresolvedRoleError

# Earlier keywords win over later ones for the same role.
ROLE_KEYWORDS: dict[Role, tuple[str, ...]] = {
    Role.AMOUNT: ("amount", "amt", "price", "value"),
    Role.TYPE: ("type", "transaction_type", "debit_credit"),
    Role.CATEGORY: ("category", "cat", "group", "tag"),
    Role.DESCRIPTION: ("note", "description", "comment", "memo", "details"),
    Role.DATE: ("time", "date", "timestamp", "created"),
}

_FREE_TEXT_KEYWORDS = ("note", "description", "comment", "memo")
_LISTED_KEYWORDS = ("category", "type", "account")
_UNLISTED_KEYWORDS = ("date", "amount", "time")
_STRICT_KEYWORDS = ("category", "type")


def _clean_headers(headers: Optional[Iterable[Any]]) -> list[str]:
    if headers is None or isinstance(headers, (str, bytes)):
        return []
    try:
        items = list(headers)
    except TypeError:
        return []
    return [header for header in items if isinstance(header, str) and header.strip()]


def resolve_column_roles(headers: Optional[Sequence[str]]) -> ColumnRoleMap:
    """Infer which header plays which role.

    Roles are resolved in the order Amount, Type, Category, Description, Date.
    For each role the keywords are tried in order; the first header (in header
    order) containing the keyword is taken, unless an earlier role already
    claimed it. Roles with no matching header stay unresolved.

    Args:
        headers: Header strings; ``None`` and non-string entries are ignored

    Returns:
        ColumnRoleMap whose values are all drawn from ``headers``
    """
    candidates = _clean_headers(headers)
    lowered = [header.lower() for header in candidates]
    claimed: set[int] = set()
    assignments: dict[str, str] = {}

    for role in ROLE_ORDER:
        match = _match_role(role, lowered, claimed)
        if match is not None:
            claimed.add(match)
            assignments[role.attr] = candidates[match]

    return ColumnRoleMap(**assignments)


def _match_role(role: Role, lowered: list[str], claimed: set[int]) -> Optional[int]:
    for keyword in ROLE_KEYWORDS[role]:
        for index, header in enumerate(lowered):
            if index not in claimed and keyword in header:
                return index
    return None


def describe_unresolved(roles: ColumnRoleMap) -> list[str]:
    """Human-readable diagnostics for roles no header was matched to."""
    messages = []
    for role in roles.unresolved():
        keywords = ", ".join(ROLE_KEYWORDS[role])
        messages.append(
            f"No column found for {role.value} (looked for a header containing: {keywords})"
        )
    return messages


def require_roles(roles: ColumnRoleMap, required: Iterable[Role], operation: str) -> None:
    """Raise UnresolvedRoleError if any of ``required`` is unresolved."""
    missing = [role for role in required if not roles.is_resolved(role)]
    if missing:
        raise UnresolvedRoleError(missing, operation)


def unique_values(rows: Iterable[Mapping[str, Any]], column: Optional[str]) -> list[str]:
    """Sorted unique non-blank values of a column."""
    if not column:
        return []
    values = set()
    for row in rows:
        value = row.get(column)
        if value is not None and str(value).strip():
            values.add(str(value).strip())
    return sorted(values)


def column_options(column: str, rows: Iterable[Mapping[str, Any]]) -> list[str]:
    """Choices to offer when a user edits ``column`` during review.

    Free-text columns (notes, descriptions) and date/amount/time columns get
    no choices; other columns offer the values already present in the sheet.
    """
    lower = (column or "").lower()
    if any(keyword in lower for keyword in _FREE_TEXT_KEYWORDS):
        return []
    if any(keyword in lower for keyword in _LISTED_KEYWORDS):
        return unique_values(rows, column)
    if any(keyword in lower for keyword in _UNLISTED_KEYWORDS):
        return []
    return unique_values(rows, column)


def is_strict_column(column: str) -> bool:
    """Whether edits to ``column`` must pick one of the offered choices."""
    lower = (column or "").lower()
    return any(keyword in lower for keyword in _STRICT_KEYWORDS)


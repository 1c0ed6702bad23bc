"""Tests for column role resolution."""

import pytest

from moneytrack.domain.column_roles import (
    column_options,
    describe_unresolved,
    is_strict_column,
    require_roles,
    resolve_column_roles,
)
from moneytrack.domain.entities import ColumnRoleMap, Role
from moneytrack.domain.errors import UnresolvedRoleError


def test_resolve_canonical_headers():
    roles = resolve_column_roles(["Date", "Type", "Amount", "Category", "Description"])

    assert roles == ColumnRoleMap.canonical()


def test_resolve_custom_headers():
    roles = resolve_column_roles(["Date", "Txn Type", "Amt (INR)", "Group", "Notes"])

    assert roles.amount == "Amt (INR)"
    assert roles.type == "Txn Type"
    assert roles.category == "Group"
    assert roles.description == "Notes"
    assert roles.date == "Date"


def test_resolve_is_case_insensitive():
    roles = resolve_column_roles(["AMOUNT", "transaction date"])

    assert roles.amount == "AMOUNT"
    assert roles.date == "transaction date"


def test_earlier_keyword_wins_over_header_order():
    # "amount" is tried before "price" even though "Price" comes first.
    roles = resolve_column_roles(["Price", "Amount"])

    assert roles.amount == "Amount"


def test_first_header_wins_for_same_keyword():
    roles = resolve_column_roles(["Amount Paid", "Amount Due"])

    assert roles.amount == "Amount Paid"


def test_header_claimed_by_earlier_role_is_not_reused():
    # "Category Type" contains "type"; Type claims it before Category looks.
    roles = resolve_column_roles(["Category Type"])

    assert roles.type == "Category Type"
    assert roles.category is None


def test_missing_roles_are_unresolved():
    roles = resolve_column_roles(["Amount", "Notes"])

    assert roles.unresolved() == [Role.TYPE, Role.CATEGORY, Role.DATE]


@pytest.mark.parametrize("headers", [None, [], "Amount", 42, ["", "  ", None, 7]])
def test_unusable_headers_resolve_nothing(headers):
    roles = resolve_column_roles(headers)

    assert roles == ColumnRoleMap()


@pytest.mark.parametrize(
    "headers",
    [
        ["Date", "Type", "Amount", "Category", "Description"],
        ["amt", "kind", "tags", "memo", "created at"],
        ["Value", "Value", "Timestamp"],
        ["foo", "bar"],
    ],
)
def test_resolved_columns_come_from_headers(headers):
    roles = resolve_column_roles(headers)

    for column in roles.resolved().values():
        assert column in headers


def test_describe_unresolved_lists_keywords():
    messages = describe_unresolved(resolve_column_roles(["Amount", "Type", "Category", "Notes"]))

    assert len(messages) == 1
    assert messages[0].startswith("No column found for Date")
    assert "timestamp" in messages[0]


def test_require_roles_raises_for_missing():
    roles = resolve_column_roles(["Amount"])

    with pytest.raises(UnresolvedRoleError) as excinfo:
        require_roles(roles, [Role.AMOUNT, Role.CATEGORY], "summarize by category")

    assert excinfo.value.roles == (Role.CATEGORY,)
    assert "summarize by category" in str(excinfo.value)


def test_require_roles_passes_when_resolved():
    require_roles(ColumnRoleMap.canonical(), list(Role), "anything")


def test_column_options():
    rows = [
        {"Category": "Food", "Notes": "lunch", "Date": "01-01-2024", "Account": "Cash"},
        {"Category": "Rent", "Notes": "march", "Date": "02-01-2024", "Account": "Bank"},
        {"Category": "Food", "Notes": "", "Date": "03-01-2024", "Account": " "},
    ]

    assert column_options("Category", rows) == ["Food", "Rent"]
    assert column_options("Account", rows) == ["Bank", "Cash"]
    assert column_options("Notes", rows) == []
    assert column_options("Date", rows) == []


def test_is_strict_column():
    assert is_strict_column("Category")
    assert is_strict_column("Txn Type")
    assert not is_strict_column("Notes")

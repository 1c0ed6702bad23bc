"""CLI helpers for previewing and reviewing parsed entries."""

from typing import Sequence

import click

from moneytrack.domain.entities import (
    ROLE_ORDER,
    ColumnRoleMap,
    LedgerSnapshot,
    Role,
    TransactionRecord,
)
from moneytrack.domain.ledger import LedgerService
from moneytrack.llm.extractor import create_extractor
from moneytrack.utils.amount_parser import coerce_amount


def get_extractor(ctx: click.Context, local: bool):
    """Extractor for this invocation, or None to parse locally.

    Tests and embedding applications may place one in ``ctx.obj["extractor"]``.
    """
    if local:
        return None
    if "extractor" not in ctx.obj:
        ctx.obj["extractor"] = create_extractor()
    return ctx.obj["extractor"]


def echo_records(
    records: Sequence[TransactionRecord], columns: Sequence[str], roles: ColumnRoleMap
) -> None:
    """Print records keyed by the sheet's own headers."""
    for index, record in enumerate(records, start=1):
        click.echo(f"Entry {index}:")
        for column, value in record.to_row(roles, columns).items():
            click.echo(f"  {column}: {value}")


def review_record(
    ledger: LedgerService, snapshot: LedgerSnapshot, record: TransactionRecord
) -> TransactionRecord:
    """Let the user edit each field of a record in place."""
    _, roles = ledger.layout(snapshot)
    labels = ledger.type_labels(snapshot)

    for role in ROLE_ORDER:
        column = roles.column_for(role)
        if column is None:
            continue

        choices, strict = ledger.field_choices(snapshot, role, labels.kind_of(record.type))
        current = record.get(role)
        default = "" if current is None else str(current)

        if strict:
            value = click.prompt(
                column,
                type=click.Choice(choices, case_sensitive=False),
                default=default if default in choices else None,
            )
        else:
            value = click.prompt(column, default=default, show_default=bool(default))

        if role is Role.AMOUNT:
            record.set(role, coerce_amount(value))
        else:
            record.set(role, value.strip())

    return record

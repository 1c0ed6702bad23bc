"""Entry listing command."""

import click

from moneytrack.cli.date_filters import period_options, resolve_date_range
from moneytrack.cli.error_handling import handle_domain_error
from moneytrack.domain.entities import TransactionKind
from moneytrack.domain.errors import DomainError
from moneytrack.domain.ledger import UNCATEGORIZED
from moneytrack.utils.number_format import format_rupees


@click.command("view")
@click.option("--income", "kind", flag_value=TransactionKind.INCOME.value, help="Only income")
@click.option("--expense", "kind", flag_value=TransactionKind.EXPENSE.value, help="Only expenses")
@click.option("--category", help="Only this category (case-insensitive)")
@period_options
@click.pass_context
def view_entries(ctx, kind: str | None, category: str | None, start_date, end_date, **period_flags):
    """List entries in the sheet, newest first.

    Examples:
        moneytrack view
        moneytrack view --expense --category Food --this-month
    """
    start, end = resolve_date_range(ctx, start_date, end_date, **period_flags)
    ledger = ctx.obj["ledger"]
    kind = TransactionKind(kind) if kind else None

    try:
        snapshot = ledger.load()
        records = ledger.list_records(
            snapshot, kind=kind, category=category, start_date=start, end_date=end
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if (start is not None or end is not None) and snapshot.roles.date is None:
        click.echo("Warning: the sheet has no date column; showing all rows.", err=True)

    if not records:
        click.echo("No entries found.")
        return

    noun = "entry" if len(records) == 1 else "entries"
    click.echo(f"\nFound {len(records)} {noun}:")
    click.echo("-" * 90)
    click.echo(
        f"{'Date':<12} {'Type':<9} {'Amount':>14}  {'Category':<20} {'Description':<30}"
    )
    click.echo("-" * 90)

    for record in records:
        click.echo(
            f"{record.date:<12} {record.type:<9} {format_rupees(record.amount):>14}  "
            f"{(record.category or UNCATEGORIZED)[:20]:<20} {record.description[:30]:<30}"
        )

    if kind is not None:
        total = sum(record.amount for record in records)
        click.echo("-" * 90)
        click.echo(f"{'Total':<22} {format_rupees(total):>14}")


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_entries)

"""Category summary command."""

import click

from moneytrack.cli.date_filters import period_options, resolve_date_range
from moneytrack.cli.error_handling import handle_domain_error
from moneytrack.domain.entities import TransactionKind
from moneytrack.domain.errors import DomainError
from moneytrack.domain.ledger import total_amount
from moneytrack.utils.number_format import format_indian_number


@click.command("summary")
@click.option("--income", "kind", flag_value=TransactionKind.INCOME.value, help="Summarize income")
@click.option(
    "--expense",
    "kind",
    flag_value=TransactionKind.EXPENSE.value,
    help="Summarize expenses (default)",
)
@period_options
@click.pass_context
def summary(ctx, kind: str, start_date, end_date, **period_flags):
    """Show totals per category.

    Examples:
        moneytrack summary
        moneytrack summary --income --this-year
        moneytrack summary --start-date 2024-01-01 --end-date 2024-03-31
    """
    start, end = resolve_date_range(ctx, start_date, end_date, **period_flags)
    ledger = ctx.obj["ledger"]
    kind = TransactionKind(kind or TransactionKind.EXPENSE.value)

    try:
        snapshot = ledger.load()
        totals = ledger.category_totals(snapshot, kind, start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if (start is not None or end is not None) and snapshot.roles.date is None:
        click.echo("Warning: the sheet has no date column; showing all rows.", err=True)

    title = "Income" if kind is TransactionKind.INCOME else "Expenses"
    if start or end:
        title += f" ({start or '...'} to {end or '...'})"
    click.echo(f"\n{title} by category:")

    if not totals:
        click.echo("  No entries found.")
        return

    width = max(len(total.category) for total in totals)
    for total in totals:
        click.echo(f"  {total.category:<{width}}  {format_indian_number(total.amount):>12}")
    click.echo(f"  {'Total':<{width}}  {format_indian_number(total_amount(totals)):>12}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)

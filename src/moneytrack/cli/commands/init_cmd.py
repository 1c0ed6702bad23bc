"""Sheet initialization command."""

import click

from moneytrack.cli.error_handling import handle_domain_error
from moneytrack.domain.errors import DomainError


@click.command("init")
@click.pass_context
def init_sheet(ctx):
    """Create the sheet with the configured columns."""
    ledger = ctx.obj["ledger"]

    try:
        created = ledger.initialize()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if created:
        click.echo(f"Created {ledger.store.location}")
        click.echo(f"  Columns: {', '.join(ledger.config.columns)}")
    else:
        click.echo(f"{ledger.store.location} already has a header row; nothing to do.")


def register_commands(cli):
    """Register init command with main CLI."""
    cli.add_command(init_sheet)

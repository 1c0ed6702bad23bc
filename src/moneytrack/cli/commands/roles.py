"""Column role inspection command."""

import click

from moneytrack.cli.error_handling import handle_domain_error
from moneytrack.domain.entities import ROLE_ORDER
from moneytrack.domain.errors import DomainError


@click.command("roles")
@click.pass_context
def show_roles(ctx):
    """Show which sheet column is used for each field."""
    ledger = ctx.obj["ledger"]

    try:
        snapshot = ledger.load()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if snapshot.headers:
        click.echo(f"\nColumns in {snapshot.location}:")
        for role in ROLE_ORDER:
            column = snapshot.roles.column_for(role)
            click.echo(f"  {role.value:<12} {column if column is not None else '(not found)'}")

    problems = ledger.diagnostics(snapshot)
    if problems:
        click.echo("\nWarnings:", err=True)
        for problem in problems:
            click.echo(f"  {problem}", err=True)


def register_commands(cli):
    """Register roles command with main CLI."""
    cli.add_command(show_roles)

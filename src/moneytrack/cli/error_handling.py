"""CLI error handling helpers."""

import click

from moneytrack.domain.errors import DomainError, UnresolvedRoleError

ROLES_HINT = "Run 'moneytrack roles' to see how the sheet's columns were matched."


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Errors about missing column roles also point at the ``roles`` command.
    """
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, UnresolvedRoleError):
        click.echo(ROLES_HINT, err=True)
    ctx.exit(1)

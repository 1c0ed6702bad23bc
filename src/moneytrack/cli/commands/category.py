"""Category management commands."""

import click

from moneytrack.cli.error_handling import handle_domain_error
from moneytrack.domain.config import save_config
from moneytrack.domain.entities import TransactionKind
from moneytrack.domain.errors import DomainError


@click.group()
def category():
    """Manage known categories."""
    pass


@category.command("list")
@click.option(
    "--type",
    "kind",
    type=click.Choice([kind.value for kind in TransactionKind]),
    help="Only list categories of this type",
)
@click.pass_context
def list_categories(ctx, kind):
    """List configured categories and those already used in the sheet."""
    ledger = ctx.obj["ledger"]

    try:
        categories = ledger.known_categories(ledger.load())
    except DomainError as e:
        handle_domain_error(ctx, e)

    kinds = [TransactionKind(kind)] if kind else list(TransactionKind)
    for current in kinds:
        click.echo(f"\n{current.value.capitalize()} categories:")
        names = categories.for_kind(current)
        if not names:
            click.echo("  (none)")
        for name in names:
            click.echo(f"  {name}")


@category.command("add")
@click.argument("name")
@click.option(
    "--type",
    "kind",
    type=click.Choice([kind.value for kind in TransactionKind]),
    default=TransactionKind.EXPENSE.value,
    show_default=True,
    help="Whether this is an income or expense category",
)
@click.pass_context
def add_category(ctx, name: str, kind: str):
    """Add a category to the configuration."""
    ledger = ctx.obj["ledger"]
    kind = TransactionKind(kind)

    existing = ledger.config.categories.find(kind, name)
    if existing is not None:
        click.echo(f"{kind.value.capitalize()} category '{existing}' already exists.")
        return

    try:
        config = ledger.add_category(kind, name)
        path = save_config(config, ctx.obj.get("config_path"))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added {kind.value} category '{name.strip()}' ({path})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category)

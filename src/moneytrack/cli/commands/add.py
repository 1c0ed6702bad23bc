"""Add transactions command."""

import click

from moneytrack.cli.error_handling import handle_domain_error
from moneytrack.cli.review import echo_records, get_extractor, review_record
from moneytrack.domain.errors import DomainError


@click.command("add")
@click.argument("text")
@click.option("--local", is_flag=True, help="Use the built-in parser even if a language model is configured")
@click.option("--review", is_flag=True, help="Edit each entry field by field before saving")
@click.option("--yes", "-y", is_flag=True, help="Save without asking for confirmation")
@click.pass_context
def add_entries(ctx, text: str, local: bool, review: bool, yes: bool):
    """Parse TEXT into entries and append them to the sheet.

    Examples:
        moneytrack add "spent 45 on coffee"
        moneytrack add --review "150 on bus and 200 from grocery store for food"
    """
    ledger = ctx.obj["ledger"]
    if not text.strip():
        click.echo("Nothing to add.")
        return

    try:
        snapshot = ledger.load()
        service = ledger.extraction_service(snapshot, extractor=get_extractor(ctx, local))
        records = service.preview(text)
    except DomainError as e:
        handle_domain_error(ctx, e)

    columns, roles = ledger.layout(snapshot)
    if review:
        for index, record in enumerate(records, start=1):
            click.echo(f"\nEntry {index} of {len(records)}:")
            review_record(ledger, snapshot, record)
        click.echo()

    echo_records(records, columns, roles)

    if not yes and not click.confirm(f"Add {len(records)} entr{'y' if len(records) == 1 else 'ies'}?", default=True):
        click.echo("Nothing saved.")
        return

    try:
        added = ledger.append_records(records, snapshot)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added {added} entr{'y' if added == 1 else 'ies'} to {ledger.store.location}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_entries)

"""Preview command: parse text without saving."""

import click

from moneytrack.cli.error_handling import handle_domain_error
from moneytrack.cli.review import echo_records, get_extractor
from moneytrack.domain.errors import DomainError


@click.command("parse")
@click.argument("text")
@click.option("--local", is_flag=True, help="Use the built-in parser even if a language model is configured")
@click.pass_context
def parse_text(ctx, text: str, local: bool):
    """Show the entries TEXT would produce, without saving them.

    Examples:
        moneytrack parse "spent 45 on coffee"
        moneytrack parse "salary received 50000, 200 from grocery store for food"
    """
    ledger = ctx.obj["ledger"]
    if not text.strip():
        click.echo("Nothing to parse.")
        return

    try:
        snapshot = ledger.load()
        service = ledger.extraction_service(snapshot, extractor=get_extractor(ctx, local))
        records = service.preview(text)
    except DomainError as e:
        handle_domain_error(ctx, e)

    columns, roles = ledger.layout(snapshot)
    echo_records(records, columns, roles)


def register_commands(cli):
    """Register parse command with main CLI."""
    cli.add_command(parse_text)

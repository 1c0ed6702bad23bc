"""Main CLI entry point."""

import click

from moneytrack.domain.config import load_config
from moneytrack.domain.errors import DomainError
from moneytrack.domain.ledger import LedgerService
from moneytrack.logging_setup import configure_logging
from moneytrack.sheets.factories import create_sheet_store
from moneytrack.cli.error_handling import handle_domain_error

# Import and register all commands at module level
from moneytrack.cli.commands import (
    init_cmd,
    roles,
    parse,
    add,
    summary,
    view,
    category,
)


@click.group()
@click.option(
    "--sheet",
    "sheet_path",
    type=click.Path(dir_okay=False),
    help="Path to the ledger sheet, .csv or .db (overrides MONEYTRACK_SHEET_PATH)",
    envvar="MONEYTRACK_SHEET_PATH",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to the JSON config file (overrides MONEYTRACK_CONFIG_PATH)",
    envvar="MONEYTRACK_CONFIG_PATH",
)
@click.option(
    "--log-level",
    help="Logging level, e.g. INFO or DEBUG (overrides MONEYTRACK_LOG_LEVEL)",
    envvar="MONEYTRACK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, sheet_path: str | None, config_path: str | None, log_level: str | None):
    """moneytrack - Personal income and expense tracker.

    Record transactions by describing them in plain language
    ("spent 45 on coffee") and keep them in a CSV file or SQLite database
    with whatever column names you like.
    """
    ctx.ensure_object(dict)

    # Open the sheet only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        configure_logging(log_level)
        try:
            config = load_config(config_path)
        except DomainError as e:
            handle_domain_error(ctx, e)
        ctx.obj["config_path"] = config_path
        ctx.obj["ledger"] = LedgerService(create_sheet_store(sheet_path), config)


# Register all commands
init_cmd.register_commands(cli)
roles.register_commands(cli)
parse.register_commands(cli)
add.register_commands(cli)
summary.register_commands(cli)
view.register_commands(cli)
category.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

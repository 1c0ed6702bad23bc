"""Date range options shared by reporting commands."""

from datetime import date
from typing import Optional

import click

from moneytrack.utils.date_parser import get_date_range, parse_date

PERIODS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def period_options(command):
    """Add --start-date, --end-date and one flag per named period to a command."""
    for period in reversed(PERIODS):
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Limit to {period.replace('-', ' ')}",
        )(command)
    command = click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")(command)
    command = click.option(
        "--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')"
    )(command)
    return command


def resolve_date_range(
    ctx: click.Context,
    start_date: Optional[str],
    end_date: Optional[str],
    **period_flags: bool,
) -> tuple[Optional[date], Optional[date]]:
    """Turn date options into an inclusive (start, end) pair; either may be None."""
    chosen = [name.replace("_", "-") for name, is_set in period_flags.items() if is_set]

    if len(chosen) > 1:
        click.echo(
            f"Error: Choose at most one period option (got --{', --'.join(chosen)}).", err=True
        )
        ctx.exit(1)
    if chosen and (start_date or end_date):
        click.echo(
            f"Error: --{chosen[0]} cannot be combined with --start-date or --end-date.", err=True
        )
        ctx.exit(1)

    if chosen:
        return get_date_range(chosen[0])

    bounds: list[Optional[date]] = []
    for label, value in (("start", start_date), ("end", end_date)):
        if not value:
            bounds.append(None)
            continue
        try:
            bounds.append(parse_date(value))
        except ValueError as e:
            click.echo(f"Error: Invalid {label} date: {e}", err=True)
            ctx.exit(1)
    return bounds[0], bounds[1]

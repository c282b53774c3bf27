"""CLI helpers for period resolution."""

from typing import Callable, Optional

import click

from lessonledger.domain.aggregation import (
    period_all,
    period_month,
    period_range,
    period_this_month,
)
from lessonledger.domain.entities import PeriodKind, PeriodSpec
from lessonledger.domain.errors import ValidationError
from lessonledger.utils.date_parser import parse_date, parse_month


def period_options(f: Callable) -> Callable:
    """Add the shared period filter options to a command."""
    options = [
        click.option("--this-month", is_flag=True, help="Filter to current month"),
        click.option("--month", help="Filter to a month (YYYY-MM)"),
        click.option("--start-date", help="Start date (YYYY-MM-DD, dd.mm.yyyy or 'today')"),
        click.option("--end-date", help="End date (YYYY-MM-DD, dd.mm.yyyy or 'today')"),
        click.option("--all", "all_entries", is_flag=True, help="Do not filter by date"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def resolve_cli_period(
    ctx,
    *,
    this_month: bool,
    month: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    all_entries: bool,
    default: Optional[PeriodSpec] = None,
) -> PeriodSpec:
    """Resolve a PeriodSpec from CLI options.

    At most one of --this-month, --month, --all and an explicit date range may
    be given. An explicit range needs both ends.
    """
    has_range = bool(start_date or end_date)
    chosen = sum(1 for is_set in (this_month, bool(month), all_entries, has_range) if is_set)

    if chosen > 1:
        click.echo(
            "Error: Only one of --this-month, --month, --all or --start-date/--end-date can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if this_month:
        return period_this_month()

    if all_entries:
        return period_all()

    if month:
        try:
            return period_month(parse_month(month))
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    if has_range:
        if not (start_date and end_date):
            click.echo("Error: --start-date and --end-date must be given together.", err=True)
            ctx.exit(1)
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)
        try:
            return period_range(start, end)
        except ValidationError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    return default if default is not None else period_this_month()


def describe_period(period: PeriodSpec) -> str:
    """Human-readable description of a period."""
    if period.kind == PeriodKind.ALL:
        return "all entries"
    if period.kind == PeriodKind.THIS_MONTH:
        return "this month"
    if period.kind == PeriodKind.MONTH:
        return period.month.strftime("%Y-%m")
    return f"{period.start} to {period.end}"

"""Entry viewing command."""

import click
from lessonledger.cli.date_filters import describe_period, period_options, resolve_cli_period


@click.command("view")
@period_options
@click.option("--verbose", "-v", is_flag=True, help="Show entry IDs")
@click.pass_context
def view_entries(
    ctx,
    this_month: bool,
    month: str | None,
    start_date: str | None,
    end_date: str | None,
    all_entries: bool,
    verbose: bool,
):
    """View entries, most recent first. Defaults to the current month.

    Use --verbose to show entry IDs for editing or deleting.
    """
    entry_service = ctx.obj["entry_service"]
    period = resolve_cli_period(
        ctx,
        this_month=this_month,
        month=month,
        start_date=start_date,
        end_date=end_date,
        all_entries=all_entries,
    )

    entries = entry_service.list_entries(period)
    if not entries:
        click.echo(f"No entries found for {describe_period(period)}.")
        return

    click.echo(f"\nFound {len(entries)} entry(ies) for {describe_period(period)}:")
    id_header = f"{'ID':<34}" if verbose else ""
    click.echo("-" * (60 + (34 if verbose else 0)))
    click.echo(f"{id_header}{'Date':<12} {'Regular':>8} {'Master':>8} {'Earnings':>14}")
    click.echo("-" * (60 + (34 if verbose else 0)))

    for entry in entries:
        id_col = f"{entry.id:<34}" if verbose else ""
        earnings_str = f"{entry.earnings:,.2f} €"
        click.echo(
            f"{id_col}{str(entry.date):<12} {entry.regular_lessons:>8} "
            f"{entry.master_classes:>8} {earnings_str:>14}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_entries)

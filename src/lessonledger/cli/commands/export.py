"""Export command."""

import click
from lessonledger.cli.date_filters import describe_period, period_options, resolve_cli_period
from lessonledger.domain.aggregation import period_all
from lessonledger.domain.csv_export import to_csv, to_json


@click.command("export")
@click.argument("output", type=click.Path(dir_okay=False, writable=True), required=False)
@period_options
@click.option("--json", "as_json", is_flag=True, help="Export stored JSON records instead of CSV")
@click.pass_context
def export_entries(
    ctx,
    output: str | None,
    this_month: bool,
    month: str | None,
    start_date: str | None,
    end_date: str | None,
    all_entries: bool,
    as_json: bool,
):
    """Export entries to CSV (or JSON), to OUTPUT or stdout.

    Exports every entry unless a period is given.

    Examples:
        lessonledger export earnings_export.csv
        lessonledger export --month 2024-05 may.csv
        lessonledger export --json backup.json
    """
    entry_service = ctx.obj["entry_service"]
    period = resolve_cli_period(
        ctx,
        this_month=this_month,
        month=month,
        start_date=start_date,
        end_date=end_date,
        all_entries=all_entries,
        default=period_all(),
    )
    entries = entry_service.list_entries(period)
    content = to_json(entries) if as_json else to_csv(entries)

    if output is None:
        click.echo(content, nl=False)
        return

    try:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        click.echo(f"Error: Cannot write {output}: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Exported {len(entries)} entries ({describe_period(period)}) to {output}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_entries)

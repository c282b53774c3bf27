"""Add entry command."""

import click
from lessonledger.cli.error_handling import handle_domain_error, report_save_result
from lessonledger.domain.errors import ValidationError
from lessonledger.utils.date_parser import parse_date


@click.command("add")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Lesson date (YYYY-MM-DD, dd.mm.yyyy or relative like 'today', 'yesterday')",
)
@click.option(
    "--regular", type=click.IntRange(min=0), default=0, help="Number of regular lessons"
)
@click.option(
    "--master", type=click.IntRange(min=0), default=0, help="Number of master classes"
)
@click.pass_context
def add_entry(ctx, date: str, regular: int, master: int):
    """Record a day of lessons.

    Earnings are computed from the current prices and stored with the entry.

    Examples:
        lessonledger add --regular 3
        lessonledger add --date 2024-05-01 --regular 2 --master 1
    """
    entry_service = ctx.obj["entry_service"]
    settings_service = ctx.obj["settings_service"]

    try:
        entry_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    prices = settings_service.load_settings()
    try:
        change = entry_service.create(
            date=entry_date,
            regular_lessons=regular,
            master_classes=master,
            prices=prices,
        )
    except ValidationError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created entry {change.entry.id}")
    click.echo(f"  Date: {change.entry.date}")
    click.echo(f"  Regular lessons: {change.entry.regular_lessons}")
    click.echo(f"  Master classes: {change.entry.master_classes}")
    click.echo(f"  Earnings: {change.entry.earnings:,.2f} €")
    report_save_result(change.save)


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_entry)

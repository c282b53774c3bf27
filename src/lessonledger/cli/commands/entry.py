"""Entry management commands."""

import click
from lessonledger.cli.error_handling import handle_domain_error, report_save_result
from lessonledger.domain.errors import NotFoundError, ValidationError
from lessonledger.utils.date_parser import parse_date


@click.group("entry")
def entry_group():
    """Manage lesson entries."""
    pass


@entry_group.command("edit")
@click.argument("entry_id")
@click.option("--date", help="New lesson date (YYYY-MM-DD, dd.mm.yyyy or relative)")
@click.option("--regular", type=click.IntRange(min=0), help="New number of regular lessons")
@click.option("--master", type=click.IntRange(min=0), help="New number of master classes")
@click.pass_context
def edit_entry(
    ctx, entry_id: str, date: str | None, regular: int | None, master: int | None
) -> None:
    """Edit an entry.

    Fields not given keep their current value. Earnings are recomputed from
    the current prices, not the prices the entry was created with.

    Examples:
        lessonledger entry edit 3f2a... --regular 4
        lessonledger entry edit 3f2a... --date 2024-05-02 --master 1
    """
    entry_service = ctx.obj["entry_service"]
    settings_service = ctx.obj["settings_service"]

    existing = entry_service.get_entry(entry_id)
    if existing is None:
        click.echo(f"Error: Entry {entry_id} not found", err=True)
        ctx.exit(1)

    entry_date = existing.date
    if date is not None:
        try:
            entry_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        change = entry_service.edit(
            entry_id,
            date=entry_date,
            regular_lessons=existing.regular_lessons if regular is None else regular,
            master_classes=existing.master_classes if master is None else master,
            prices=settings_service.load_settings(),
        )
    except (NotFoundError, ValidationError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated entry {entry_id}")
    click.echo(f"  Date: {change.entry.date}")
    click.echo(f"  Regular lessons: {change.entry.regular_lessons}")
    click.echo(f"  Master classes: {change.entry.master_classes}")
    click.echo(f"  Earnings: {change.entry.earnings:,.2f} €")
    report_save_result(change.save)


@entry_group.command("delete")
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: str, yes: bool) -> None:
    """Delete an entry."""
    entry_service = ctx.obj["entry_service"]

    existing = entry_service.get_entry(entry_id)
    if existing is None:
        click.echo(f"Error: Entry {entry_id} not found", err=True)
        ctx.exit(1)

    if not yes:
        click.confirm(
            f"Delete entry from {existing.date} ({existing.earnings:,.2f} €)?",
            abort=True,
        )

    try:
        save = entry_service.delete(entry_id)
    except NotFoundError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted entry {entry_id}")
    report_save_result(save)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group)

"""Pricing and goal settings commands."""

from dataclasses import replace
from decimal import Decimal

import click
from lessonledger.cli.error_handling import handle_domain_error
from lessonledger.domain.errors import StorageWriteFailed, ValidationError
from lessonledger.utils.amount_parser import parse_amount


@click.group("settings")
def settings_group():
    """Manage prices and the monthly goal."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current prices and goal."""
    prices = ctx.obj["settings_service"].load_settings()
    click.echo(f"Regular lesson price: {prices.regular_lesson_price:,.2f} €")
    click.echo(f"Master class price:   {prices.master_class_price:,.2f} €")
    click.echo(f"Monthly goal:         {prices.monthly_goal:,.2f} €")


@settings_group.command("set")
@click.option("--regular-price", help="Price of a regular lesson")
@click.option("--master-price", help="Price of a master class")
@click.option("--goal", help="Monthly earnings goal")
@click.pass_context
def set_settings(
    ctx, regular_price: str | None, master_price: str | None, goal: str | None
):
    """Change prices or goal.

    New prices apply to entries created or edited from now on; stored
    entries keep their earnings.

    Examples:
        lessonledger settings set --regular-price 9 --master-price 12
        lessonledger settings set --goal 1200
    """
    service = ctx.obj["settings_service"]
    prices = service.load_settings()

    changes: dict[str, Decimal] = {}
    for field_name, value in (
        ("regular_lesson_price", regular_price),
        ("master_class_price", master_price),
        ("monthly_goal", goal),
    ):
        if value is None:
            continue
        try:
            changes[field_name] = parse_amount(value)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    if not changes:
        click.echo("Nothing to change. Use --regular-price, --master-price or --goal.")
        return

    try:
        service.save_settings(replace(prices, **changes))
    except (ValidationError, StorageWriteFailed) as e:
        handle_domain_error(ctx, e)

    click.echo("Settings saved")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group)

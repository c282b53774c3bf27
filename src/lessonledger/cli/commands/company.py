"""Company info commands."""

from dataclasses import fields, replace

import click
from lessonledger.cli.error_handling import handle_domain_error
from lessonledger.domain.entities import CompanyInfo
from lessonledger.domain.errors import StorageWriteFailed, ValidationError

LABELS = {
    "name": "Name",
    "address": "Address",
    "city": "City",
    "postal_code": "Postal code",
    "ico": "ICO",
    "dic": "DIC",
    "bank_account": "Bank account",
    "swift": "SWIFT",
    "last_invoice_number": "Last invoice number",
}


@click.group("company")
def company_group():
    """Manage the supplier details printed on invoices."""
    pass


@company_group.command("show")
@click.pass_context
def show_company(ctx):
    """Show company info."""
    info = ctx.obj["settings_service"].load_company_info()
    for f in fields(CompanyInfo):
        click.echo(f"{LABELS[f.name] + ':':<22} {getattr(info, f.name)}")


@company_group.command("set")
@click.option("--name", help="Company or personal name")
@click.option("--address", help="Street address")
@click.option("--city", help="City")
@click.option("--postal-code", help="Postal code")
@click.option("--ico", help="Company identification number")
@click.option("--dic", help="Tax identification number")
@click.option("--bank-account", help="Bank account (IBAN)")
@click.option("--swift", help="SWIFT/BIC code")
@click.option(
    "--last-invoice-number",
    type=click.IntRange(min=0),
    help="Number of the last issued invoice",
)
@click.pass_context
def set_company(ctx, **values):
    """Change company info. Only the given fields change."""
    service = ctx.obj["settings_service"]
    changes = {key: value for key, value in values.items() if value is not None}
    if not changes:
        click.echo("Nothing to change.")
        return

    info = replace(service.load_company_info(), **changes)
    try:
        service.save_company_info(info)
    except (ValidationError, StorageWriteFailed) as e:
        handle_domain_error(ctx, e)

    click.echo("Company info saved")


def register_commands(cli):
    """Register company commands with main CLI."""
    cli.add_command(company_group)

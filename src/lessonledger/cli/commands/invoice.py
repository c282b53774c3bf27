"""Invoice commands."""

import click

from lessonledger.cli.error_handling import handle_domain_error
from lessonledger.domain.entities import ClientInfo, InvoiceComputation, InvoiceOverrides
from lessonledger.domain.errors import (
    ConflictError,
    DocumentRenderingFailed,
    StorageWriteFailed,
    ValidationError,
)
from lessonledger.domain.invoice import InvoiceService
from lessonledger.rendering.invoice_pdf import ReportLabInvoiceRenderer
from lessonledger.utils.amount_parser import parse_amount
from lessonledger.utils.date_parser import month_bounds, parse_date


def invoice_options(f):
    """Add date range and manual override options to an invoice command."""
    options = [
        click.option("--start-date", help="First day billed (default: first day of this month)"),
        click.option("--end-date", help="Last day billed (default: last day of this month)"),
        click.option("--hours", "manual_hours", help="Bill these hours instead of the computed lesson count"),
        click.option("--amount", "manual_amount", help="Bill this amount instead of the computed earnings"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _compute(ctx, start_date, end_date, manual_hours, manual_amount) -> InvoiceComputation:
    default_start, default_end = month_bounds(parse_date("today"))
    try:
        start = parse_date(start_date) if start_date else default_start
        end = parse_date(end_date) if end_date else default_end
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        overrides = InvoiceOverrides(
            manual_hours=parse_amount(manual_hours) if manual_hours is not None else None,
            manual_amount=parse_amount(manual_amount) if manual_amount is not None else None,
        )
    except ValueError as e:
        click.echo(f"Error: Invalid override: {e}", err=True)
        ctx.exit(1)

    service = InvoiceService(ctx.obj["settings_service"])
    try:
        return service.compute(ctx.obj["entry_service"].list_entries(), start, end, overrides)
    except ValidationError as e:
        handle_domain_error(ctx, e)


def _echo_computation(computation: InvoiceComputation) -> None:
    click.echo(f"Invoice number: {computation.invoice_number} (provisional)")
    click.echo(f"Period: {computation.start_date} to {computation.end_date}")
    click.echo(f"Entries: {len(computation.entries)}")
    hours_note = "" if computation.hours == computation.calculated_hours else (
        f" (computed: {computation.calculated_hours})"
    )
    amount_note = "" if computation.amount == computation.calculated_amount else (
        f" (computed: {computation.calculated_amount:,.2f} €)"
    )
    click.echo(f"Hours: {computation.hours}{hours_note}")
    click.echo(f"Amount: {computation.amount:,.2f} €{amount_note}")


@click.group("invoice")
def invoice_group():
    """Compute and generate invoices."""
    pass


@invoice_group.command("preview")
@invoice_options
@click.pass_context
def preview_invoice(ctx, start_date, end_date, manual_hours, manual_amount):
    """Show invoice totals without generating anything."""
    computation = _compute(ctx, start_date, end_date, manual_hours, manual_amount)
    _echo_computation(computation)


@invoice_group.command("generate")
@invoice_options
@click.option("--client-name", default="", help="Recipient name")
@click.option("--client-address", default="", help="Recipient street address")
@click.option("--client-city", default="", help="Recipient city")
@click.option("--client-postal-code", default="", help="Recipient postal code")
@click.option("--client-ico", default="", help="Recipient company identification number")
@click.option("--client-ic-dph", default="", help="Recipient VAT number")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory for the PDF",
)
@click.pass_context
def generate_invoice(
    ctx,
    start_date,
    end_date,
    manual_hours,
    manual_amount,
    client_name,
    client_address,
    client_city,
    client_postal_code,
    client_ico,
    client_ic_dph,
    output_dir,
):
    """Generate an invoice PDF and advance the invoice number.

    The invoice number only advances when the PDF was written.

    Examples:
        lessonledger invoice generate --client-name "ACME s.r.o." --output-dir invoices
        lessonledger invoice generate --start-date 2024-05-01 --end-date 2024-05-31 --amount 500
    """
    computation = _compute(ctx, start_date, end_date, manual_hours, manual_amount)
    _echo_computation(computation)

    client = ClientInfo(
        name=client_name,
        address=client_address,
        city=client_city,
        postal_code=client_postal_code,
        ico=client_ico,
        ic_dph=client_ic_dph,
    )
    service = InvoiceService(ctx.obj["settings_service"], ReportLabInvoiceRenderer())
    try:
        path = service.generate(computation, client, output_dir)
    except (
        ValidationError,
        DocumentRenderingFailed,
        ConflictError,
        StorageWriteFailed,
    ) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invoice {computation.invoice_number} written to {path}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group)

"""CSV import command."""

import click
from lessonledger.cli.error_handling import report_save_result
from lessonledger.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_csv(ctx, csv_file: str):
    """Import entries from a CSV file.

    Expected columns: date (dd.mm.yyyy), regular lessons, master classes,
    earnings. The first row is a header and is ignored. Rows that cannot be
    parsed are skipped.
    """
    service = CSVImportService(ctx.obj["entry_service"])

    try:
        result = service.import_csv(csv_file_path=csv_file)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} entries")
    click.echo(f"  Skipped: {result.skipped} malformed rows")
    for error in result.errors:
        click.echo(f"    {error}", err=True)
    report_save_result(result.save)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)

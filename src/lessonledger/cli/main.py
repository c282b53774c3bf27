"""Main CLI entry point."""

import logging

import click

from lessonledger.database.factories import (
    create_entry_repository,
    create_settings_store,
    create_sqlite_database,
)
from lessonledger.domain.entries import EntryService
from lessonledger.domain.errors import StorageUnavailable
from lessonledger.domain.settings import SettingsService

# Import and register all commands at module level
from lessonledger.cli.commands import (
    add,
    entry,
    view,
    summary,
    import_cmd,
    export,
    settings,
    company,
    invoice,
)

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LESSONLEDGER_DB_PATH environment variable)",
    envvar="LESSONLEDGER_DB_PATH",
)
@click.option(
    "--cache-path",
    type=click.Path(),
    help="Path to offline cache file (overrides LESSONLEDGER_CACHE_PATH environment variable)",
    envvar="LESSONLEDGER_CACHE_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, cache_path: str | None, verbose: bool):
    """Lessonledger - Earnings tracker for tutors.

    Record lessons and master classes per day, follow earnings against a
    monthly goal, and bill them with numbered invoices.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize storage only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        try:
            db.initialize_schema()
        except StorageUnavailable as e:
            logger.warning(f"{e}")
        ctx.call_on_close(db.disconnect)

        entry_service = EntryService(create_entry_repository(db, cache_path))
        load = entry_service.load()
        if load.source != "primary":
            click.echo(
                f"Warning: database unavailable, using {load.source} data.", err=True
            )

        ctx.obj["db"] = db
        ctx.obj["entry_service"] = entry_service
        ctx.obj["settings_service"] = SettingsService(create_settings_store(db))


# Register all commands
add.register_commands(cli)
entry.register_commands(cli)
view.register_commands(cli)
summary.register_commands(cli)
import_cmd.register_commands(cli)
export.register_commands(cli)
settings.register_commands(cli)
company.register_commands(cli)
invoice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

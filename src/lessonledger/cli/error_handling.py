"""CLI error handling helpers."""

from typing import Optional

import click

from lessonledger.domain.entities import SaveResult
from lessonledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def report_save_result(save: Optional[SaveResult]) -> None:
    """Warn when a change was kept in memory but not persisted."""
    if save is None:
        return
    if not save.persisted:
        click.echo(
            f"Warning: change not saved to the database: {save.error}. "
            "It will be written with the next successful change.",
            err=True,
        )
    elif not save.cached and save.error:
        click.echo(f"Warning: offline cache not updated: {save.error}", err=True)

"""Summary and trend commands."""

import click
from lessonledger.cli.date_filters import describe_period, period_options, resolve_cli_period
from lessonledger.domain.aggregation import earnings_by_period, summarize
from lessonledger.domain.entities import TrendPeriod

BAR_WIDTH = 30


@click.command("summary")
@period_options
@click.pass_context
def summary(
    ctx,
    this_month: bool,
    month: str | None,
    start_date: str | None,
    end_date: str | None,
    all_entries: bool,
):
    """Show earnings statistics. Defaults to the current month."""
    entry_service = ctx.obj["entry_service"]
    settings_service = ctx.obj["settings_service"]

    period = resolve_cli_period(
        ctx,
        this_month=this_month,
        month=month,
        start_date=start_date,
        end_date=end_date,
        all_entries=all_entries,
    )
    prices = settings_service.load_settings()
    stats = summarize(entry_service.list_entries(period), prices.monthly_goal)

    click.echo(f"\nSummary for {describe_period(period)}")
    click.echo("=" * 50)
    click.echo(f"{'Total earnings:':<30} {stats.total:>14,.2f} €")
    click.echo(f"{'Entries:':<30} {stats.count:>14}")
    click.echo(f"{'Days worked:':<30} {stats.distinct_days:>14}")
    click.echo(f"{'Regular lessons:':<30} {stats.regular_lessons:>14}")
    click.echo(f"{'Master classes:':<30} {stats.master_classes:>14}")
    click.echo(f"{'Total lessons:':<30} {stats.total_lesson_units:>14}")
    click.echo(f"{'Average per day:':<30} {stats.average_per_day:>14,.2f} €")
    click.echo(f"{'Average per lesson:':<30} {stats.average_per_lesson_unit:>14,.2f} €")
    if prices.monthly_goal > 0:
        click.echo(
            f"{'Monthly goal:':<30} {prices.monthly_goal:>14,.2f} € "
            f"({stats.goal_progress_percent:.1f}%)"
        )


@click.command("trend")
@click.option(
    "--by",
    "period_type",
    type=click.Choice([p.value for p in TrendPeriod]),
    default=TrendPeriod.MONTH.value,
    show_default=True,
    help="Bucket size",
)
@click.pass_context
def trend(ctx, period_type: str):
    """Show earnings for the last 6 weeks, 6 months or 4 quarters."""
    entry_service = ctx.obj["entry_service"]
    buckets = earnings_by_period(entry_service.list_entries(), TrendPeriod(period_type))

    highest = max((bucket.total for bucket in buckets), default=0)
    click.echo(f"\nEarnings by {period_type}:")
    click.echo("-" * 60)
    for bucket in buckets:
        bar_len = int(BAR_WIDTH * bucket.total / highest) if highest > 0 else 0
        click.echo(f"{bucket.label:<10} {bucket.total:>12,.2f} € {'#' * bar_len}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(trend)

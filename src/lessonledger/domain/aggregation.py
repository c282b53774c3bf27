"""Aggregation functions over lesson entries.

Everything here is pure: no storage access, no clock reads unless a ``today``
argument is omitted.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from lessonledger.domain.entities import (
    LessonEntry,
    PeriodEarnings,
    PeriodKind,
    PeriodSpec,
    PricingConfiguration,
    Summary,
    TrendPeriod,
)
from lessonledger.domain.errors import ValidationError
from lessonledger.utils.date_parser import month_bounds, quarter_bounds, week_bounds

ZERO = Decimal("0")

TREND_BUCKETS = {
    TrendPeriod.WEEK: 6,
    TrendPeriod.MONTH: 6,
    TrendPeriod.QUARTER: 4,
}


def compute_earnings(
    regular_lessons: int, master_classes: int, prices: PricingConfiguration
) -> Decimal:
    """Return earnings for the given counts at the given unit prices."""
    return (
        regular_lessons * prices.regular_lesson_price
        + master_classes * prices.master_class_price
    )


def period_all() -> PeriodSpec:
    return PeriodSpec(kind=PeriodKind.ALL)


def period_this_month() -> PeriodSpec:
    return PeriodSpec(kind=PeriodKind.THIS_MONTH)


def period_month(day: date) -> PeriodSpec:
    """Period covering the calendar month that contains ``day``."""
    return PeriodSpec(kind=PeriodKind.MONTH, month=day.replace(day=1))


def period_range(start: date, end: date) -> PeriodSpec:
    """Period covering ``start`` to ``end`` inclusive.

    Raises:
        ValidationError: If start is after end
    """
    if start > end:
        raise ValidationError(f"Start date {start} is after end date {end}")
    return PeriodSpec(kind=PeriodKind.RANGE, start=start, end=end)


def resolve_period(
    period: PeriodSpec, today: Optional[date] = None
) -> Optional[tuple[date, date]]:
    """Return the inclusive bounds of ``period``, or None when unfiltered."""
    if period.kind == PeriodKind.ALL:
        return None
    if period.kind == PeriodKind.THIS_MONTH:
        return month_bounds(today or date.today())
    if period.kind == PeriodKind.MONTH:
        if period.month is None:
            raise ValidationError("Month period requires a month")
        return month_bounds(period.month)
    if period.start is None or period.end is None:
        raise ValidationError("Range period requires start and end dates")
    return (period.start, period.end)


def filter_by_range(
    entries: Iterable[LessonEntry], start: date, end: date
) -> list[LessonEntry]:
    """Return entries dated within ``start``..``end``, order preserved."""
    return [entry for entry in entries if start <= entry.date <= end]


def filter_by_period(
    entries: Iterable[LessonEntry],
    period: PeriodSpec,
    today: Optional[date] = None,
) -> list[LessonEntry]:
    """Return the subsequence of ``entries`` that falls inside ``period``."""
    bounds = resolve_period(period, today)
    if bounds is None:
        return list(entries)
    return filter_by_range(entries, *bounds)


def summarize(
    entries: Sequence[LessonEntry], monthly_goal: Decimal = ZERO
) -> Summary:
    """Compute summary statistics for ``entries``.

    Averages are zero when their denominator is zero. Goal progress is zero
    when no positive goal is set.
    """
    total = sum((entry.earnings for entry in entries), ZERO)
    regular = sum(entry.regular_lessons for entry in entries)
    master = sum(entry.master_classes for entry in entries)
    units = regular + master
    distinct_days = len({entry.date for entry in entries})

    average_per_day = total / distinct_days if distinct_days else ZERO
    average_per_unit = total / units if units else ZERO
    progress = 100 * total / monthly_goal if monthly_goal > 0 else ZERO

    return Summary(
        total=total,
        count=len(entries),
        regular_lessons=regular,
        master_classes=master,
        total_lesson_units=units,
        distinct_days=distinct_days,
        average_per_day=average_per_day,
        average_per_lesson_unit=average_per_unit,
        goal_progress_percent=progress,
    )


def _trend_bounds(period_type: TrendPeriod, anchor: date, offset: int) -> tuple[date, date]:
    if period_type == TrendPeriod.WEEK:
        return week_bounds(anchor - relativedelta(weeks=offset))
    if period_type == TrendPeriod.MONTH:
        return month_bounds(anchor - relativedelta(months=offset))
    return quarter_bounds(anchor - relativedelta(months=3 * offset))


def _trend_label(period_type: TrendPeriod, start: date) -> str:
    if period_type == TrendPeriod.WEEK:
        return start.strftime("%d.%m")
    if period_type == TrendPeriod.MONTH:
        return start.strftime("%Y-%m")
    return f"{start.year}-Q{(start.month - 1) // 3 + 1}"


def earnings_by_period(
    entries: Iterable[LessonEntry],
    period_type: TrendPeriod = TrendPeriod.MONTH,
    today: Optional[date] = None,
) -> list[PeriodEarnings]:
    """Total earnings per calendar week, month or quarter, oldest first.

    Covers the last 6 weeks, 6 months or 4 quarters including the current one.
    """
    anchor = today or date.today()
    buckets = [
        _trend_bounds(period_type, anchor, offset)
        for offset in reversed(range(TREND_BUCKETS[period_type]))
    ]

    totals: dict[tuple[date, date], Decimal] = defaultdict(lambda: ZERO)
    for entry in entries:
        for bounds in buckets:
            if bounds[0] <= entry.date <= bounds[1]:
                totals[bounds] += entry.earnings
                break

    return [
        PeriodEarnings(
            label=_trend_label(period_type, start),
            start=start,
            end=end,
            total=totals[(start, end)],
        )
        for start, end in buckets
    ]

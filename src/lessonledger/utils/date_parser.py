"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

IMPORT_DATE_FORMATS = ("%d.%m.%Y", "%Y-%m-%d")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15.01.2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Dotted dates are read day first, matching the import format.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str, dayfirst="." in date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_import_date(date_str: str) -> date:
    """Parse a date from an import row.

    Only ``dd.mm.yyyy`` and ISO ``yyyy-mm-dd`` are accepted; anything else,
    including impossible calendar dates such as ``32.13.2024``, is rejected.

    Raises:
        ValueError: If date string is not a valid date in either format
    """
    date_str = date_str.strip()
    for fmt in IMPORT_DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date '{date_str}' (expected dd.mm.yyyy)")


def parse_month(month_str: str) -> date:
    """Parse a ``YYYY-MM`` month into the first day of that month."""
    try:
        return datetime.strptime(month_str.strip(), "%Y-%m").date()
    except ValueError:
        raise ValueError(f"Invalid month '{month_str}' (expected YYYY-MM)")


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``day``."""
    start = day.replace(day=1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return (start, end)


def quarter_bounds(day: date) -> tuple[date, date]:
    """Return the first and last day of the calendar quarter containing ``day``."""
    first_month = 3 * ((day.month - 1) // 3) + 1
    start = date(day.year, first_month, 1)
    end = start + relativedelta(months=3) - timedelta(days=1)
    return (start, end)


def week_bounds(day: date) -> tuple[date, date]:
    """Return Monday and Sunday of the week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return (start, start + timedelta(days=6))

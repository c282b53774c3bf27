"""Utility functions for lessonledger."""

from lessonledger.utils.date_parser import parse_date, parse_import_date, parse_month
from lessonledger.utils.amount_parser import parse_amount, parse_count, format_amount

__all__ = [
    "parse_date",
    "parse_import_date",
    "parse_month",
    "parse_amount",
    "parse_count",
    "format_amount",
]

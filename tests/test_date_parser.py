"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from lessonledger.utils.date_parser import (
    month_bounds,
    parse_date,
    parse_import_date,
    parse_month,
    quarter_bounds,
    week_bounds,
)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_dotted_date_is_day_first():
    """Test dotted dates are read day first."""
    assert parse_date("03.04.2024") == date(2024, 4, 3)


def test_parse_today():
    """Test parsing 'today'."""
    result = parse_date("today")
    assert result == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    result = parse_date("yesterday")
    assert result == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    result = parse_date("Tomorrow ")
    assert result == date.today() + timedelta(days=1)


def test_parse_invalid_date():
    """Test invalid input raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("15.05.2024", date(2024, 5, 15)),
        ("1.5.2024", date(2024, 5, 1)),
        ("2024-05-15", date(2024, 5, 15)),
    ],
)
def test_parse_import_date(value, expected):
    assert parse_import_date(value) == expected


@pytest.mark.parametrize("value", ["32.13.2024", "29.02.2023", "05/15/2024", ""])
def test_parse_import_date_rejects(value):
    with pytest.raises(ValueError):
        parse_import_date(value)


def test_parse_month():
    assert parse_month("2024-05") == date(2024, 5, 1)
    with pytest.raises(ValueError):
        parse_month("2024-13")


def test_month_bounds_handles_leap_year():
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(date(2024, 12, 31)) == (date(2024, 12, 1), date(2024, 12, 31))


def test_quarter_bounds():
    assert quarter_bounds(date(2024, 5, 17)) == (date(2024, 4, 1), date(2024, 6, 30))
    assert quarter_bounds(date(2024, 12, 1)) == (date(2024, 10, 1), date(2024, 12, 31))


def test_week_bounds_start_on_monday():
    # 2024-06-12 is a Wednesday
    assert week_bounds(date(2024, 6, 12)) == (date(2024, 6, 10), date(2024, 6, 16))

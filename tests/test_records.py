"""Tests for the JSON record shape of entries."""

import pytest
from datetime import date
from decimal import Decimal

from lessonledger.domain.entities import LessonEntry
from lessonledger.domain.records import entry_to_record, record_to_entry


class TestEntryRecord:
    """Tests for the camelCase JSON record shape."""

    def test_integral_earnings_are_ints(self):
        record = entry_to_record(LessonEntry("a", date(2024, 5, 1), 2, 0, Decimal("16")))
        assert record == {
            "id": "a",
            "date": "2024-05-01",
            "regularLessons": 2,
            "masterClasses": 0,
            "earnings": 16,
        }
        assert isinstance(record["earnings"], int)

    def test_fractional_earnings_are_floats(self):
        record = entry_to_record(LessonEntry("a", date(2024, 5, 1), 1, 0, Decimal("8.5")))
        assert record["earnings"] == 8.5

    def test_record_to_entry(self):
        entry = record_to_entry(
            {
                "id": 7,
                "date": "2024-05-01",
                "regularLessons": "2",
                "masterClasses": 0,
                "earnings": 16.5,
            }
        )
        assert entry == LessonEntry("7", date(2024, 5, 1), 2, 0, Decimal("16.5"))

    def test_sub_cent_earnings_round_trip(self):
        entry = LessonEntry("a", date(2024, 5, 1), 2, 1, Decimal("16.125"))
        assert record_to_entry(entry_to_record(entry)) == entry

    @pytest.mark.parametrize(
        "record",
        [
            {"id": "a", "date": "2024-05-01", "regularLessons": 1, "masterClasses": 0},
            {"id": "a", "date": "01/05/2024", "regularLessons": 1, "masterClasses": 0, "earnings": 8},
            {"id": "a", "date": "2024-05-01", "regularLessons": "x", "masterClasses": 0, "earnings": 8},
            {"id": "a", "date": "2024-05-01", "regularLessons": 1, "masterClasses": 0, "earnings": "abc"},
        ],
    )
    def test_invalid_records_raise_value_error(self, record):
        with pytest.raises(ValueError):
            record_to_entry(record)

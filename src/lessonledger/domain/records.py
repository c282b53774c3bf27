"""JSON record shape of a lesson entry.

Used by the offline cache file and the JSON export. Keys are camelCase.
"""

from decimal import Decimal
from typing import Any

from lessonledger.domain.entities import LessonEntry
from lessonledger.utils.date_parser import parse_import_date


def _json_number(amount: Decimal) -> int | float:
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def entry_to_record(entry: LessonEntry) -> dict[str, Any]:
    """Convert domain LessonEntry to its JSON record shape."""
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "regularLessons": entry.regular_lessons,
        "masterClasses": entry.master_classes,
        "earnings": _json_number(entry.earnings),
    }


def record_to_entry(record: dict[str, Any]) -> LessonEntry:
    """Convert a JSON record to a domain LessonEntry.

    Raises:
        ValueError: If the record is missing fields or holds invalid values
    """
    try:
        return LessonEntry(
            id=str(record["id"]),
            # Older records may carry a time component
            date=parse_import_date(str(record["date"]).split("T")[0]),
            regular_lessons=int(record["regularLessons"]),
            master_classes=int(record["masterClasses"]),
            earnings=Decimal(str(record["earnings"])),
        )
    except (KeyError, TypeError, ArithmeticError) as e:
        raise ValueError(f"Invalid entry record {record!r}: {e!r}")

"""CSV export of lesson entries."""

import csv
import io
import json
from typing import Iterable, TextIO

from lessonledger.domain.entities import LessonEntry
from lessonledger.domain.records import entry_to_record
from lessonledger.utils.amount_parser import format_amount

EXPORT_HEADER = ("Date", "RegularLessons", "MasterClasses", "Earnings")


def export_rows(entries: Iterable[LessonEntry]) -> list[tuple[str, str, str, str]]:
    """Serialize entries to export rows, header excluded, order preserved."""
    return [
        (
            entry.date.isoformat(),
            str(entry.regular_lessons),
            str(entry.master_classes),
            format_amount(entry.earnings),
        )
        for entry in entries
    ]


def write_csv(entries: Iterable[LessonEntry], stream: TextIO) -> int:
    """Write header and rows to ``stream``. Returns the number of rows."""
    rows = export_rows(entries)
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    writer.writerows(rows)
    return len(rows)


def to_csv(entries: Iterable[LessonEntry]) -> str:
    """Return the CSV export as a string."""
    buffer = io.StringIO()
    write_csv(entries, buffer)
    return buffer.getvalue()


def to_json(entries: Iterable[LessonEntry]) -> str:
    """Return entries as a JSON array of stored records."""
    return json.dumps([entry_to_record(entry) for entry in entries], indent=2)

"""CSV import domain service.

Rows are ``date,regularLessons,masterClasses,earnings`` with the date written
``dd.mm.yyyy`` (ISO dates are accepted too). The earnings figure is taken from
the file as-is, never recomputed from current prices.
"""

import csv
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from lessonledger.domain.entities import ImportResult
from lessonledger.domain.errors import MalformedImportRow
from lessonledger.utils.amount_parser import parse_amount, parse_count
from lessonledger.utils.date_parser import parse_import_date

if TYPE_CHECKING:
    from lessonledger.domain.entries import EntryService

logger = logging.getLogger(__name__)

IMPORT_COLUMNS = 4


@dataclass(frozen=True)
class ImportRecord:
    """A parsed import row, before it is given an id."""

    date: date
    regular_lessons: int
    master_classes: int
    earnings: Decimal


def is_blank_row(row: Sequence[str]) -> bool:
    """Return True for rows with no content at all."""
    return all(not (cell or "").strip() for cell in row)


def parse_import_row(row: Sequence[str], row_num: int) -> ImportRecord:
    """Parse one import row.

    Args:
        row: Cells of the row
        row_num: Row number used in error messages

    Returns:
        Parsed record

    Raises:
        MalformedImportRow: If the row has the wrong shape or a field is invalid
    """
    if len(row) < IMPORT_COLUMNS:
        raise MalformedImportRow(
            row_num, f"expected {IMPORT_COLUMNS} columns, got {len(row)}"
        )

    date_str, regular_str, master_str, earnings_str = row[:IMPORT_COLUMNS]
    try:
        return ImportRecord(
            date=parse_import_date(date_str),
            regular_lessons=parse_count(regular_str),
            master_classes=parse_count(master_str),
            earnings=parse_amount(earnings_str),
        )
    except ValueError as e:
        raise MalformedImportRow(row_num, str(e))


class CSVImportService:
    """Service for importing CSV files."""

    def __init__(self, entry_service: "EntryService"):
        """Initialize CSV import service.

        Args:
            entry_service: Entry lifecycle service that receives the batch
        """
        self.entry_service = entry_service

    def import_csv(self, csv_file_path: str) -> ImportResult:
        """Import lesson entries from a CSV file.

        The header row is ignored. Malformed rows are skipped and reported in
        the result; they never abort the batch.

        Args:
            csv_file_path: Path to CSV file

        Returns:
            ImportResult with imported/skipped counts and per-row errors

        Raises:
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))

        logger.info(f"Importing {max(len(rows) - 1, 0)} rows from {csv_path}")
        # Skip header
        return self.entry_service.import_batch(rows[1:], first_row_num=2)

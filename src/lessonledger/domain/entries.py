"""Entry lifecycle domain service."""

import logging
import uuid
from datetime import date
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

from lessonledger.domain.aggregation import compute_earnings, filter_by_period
from lessonledger.domain.csv_export import export_rows
from lessonledger.domain.csv_import import is_blank_row, parse_import_row
from lessonledger.domain.entities import (
    EntryChange,
    ImportResult,
    LessonEntry,
    LoadResult,
    PeriodSpec,
    PricingConfiguration,
    SaveResult,
)
from lessonledger.domain.errors import (
    MalformedImportRow,
    NotFoundError,
    ValidationError,
    entry_not_found,
    negative_count,
)

if TYPE_CHECKING:
    from lessonledger.database.repository import EntryRepository

logger = logging.getLogger(__name__)


def new_entry_id() -> str:
    """Return a fresh opaque entry id."""
    return uuid.uuid4().hex


def sort_entries(entries: Iterable[LessonEntry]) -> list[LessonEntry]:
    """Sort most recent first; entries on the same date keep their order."""
    return sorted(entries, key=lambda entry: entry.date, reverse=True)


def _validate_counts(regular_lessons: int, master_classes: int) -> None:
    for field_name, value in (
        ("Regular lessons", regular_lessons),
        ("Master classes", master_classes),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{field_name} must be a whole number")
        if value < 0:
            raise ValidationError(negative_count(field_name, value))


class EntryService:
    """Service that owns the in-memory entry collection.

    The in-memory collection is authoritative for the session. Every mutation
    re-sorts it and writes the whole collection through the repository; a
    failed write is reported in the returned SaveResult and never rolled back.
    """

    def __init__(
        self,
        repository: "EntryRepository",
        id_factory: Callable[[], str] = new_entry_id,
    ):
        """Initialize entry service.

        Args:
            repository: Two-tier entry repository
            id_factory: Callable returning fresh entry ids
        """
        self.repository = repository
        self.id_factory = id_factory
        self._entries: list[LessonEntry] = []
        self.loaded_from: Optional[str] = None

    def load(self) -> LoadResult:
        """Replace the in-memory collection with the stored one."""
        result = self.repository.load()
        self._entries = sort_entries(result.entries)
        self.loaded_from = result.source
        logger.debug(f"Loaded {len(self._entries)} entries from {result.source}")
        return result

    def _persist(self) -> SaveResult:
        return self.repository.save(self._entries)

    def list_entries(
        self, period: Optional[PeriodSpec] = None, today: Optional[date] = None
    ) -> list[LessonEntry]:
        """List entries, most recent first, optionally filtered by period."""
        if period is None:
            return list(self._entries)
        return filter_by_period(self._entries, period, today)

    def get_entry(self, entry_id: str) -> Optional[LessonEntry]:
        """Get entry by ID, or None if absent."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def _index_of(self, entry_id: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        raise NotFoundError(entry_not_found(entry_id))

    def create(
        self,
        date: date,
        regular_lessons: int,
        master_classes: int,
        prices: PricingConfiguration,
    ) -> EntryChange:
        """Create an entry priced at the current prices.

        Raises:
            ValidationError: If a count is negative or not a whole number
        """
        _validate_counts(regular_lessons, master_classes)
        entry = LessonEntry(
            id=self.id_factory(),
            date=date,
            regular_lessons=regular_lessons,
            master_classes=master_classes,
            earnings=compute_earnings(regular_lessons, master_classes, prices),
        )
        self._entries = sort_entries([*self._entries, entry])
        logger.info(f"Created entry {entry.id} on {entry.date}: {entry.earnings}")
        return EntryChange(entry=entry, save=self._persist())

    def edit(
        self,
        entry_id: str,
        date: date,
        regular_lessons: int,
        master_classes: int,
        prices: PricingConfiguration,
    ) -> EntryChange:
        """Replace an entry's facts and reprice it at the current prices.

        Raises:
            NotFoundError: If no entry has ``entry_id``
            ValidationError: If a count is negative or not a whole number
        """
        index = self._index_of(entry_id)
        _validate_counts(regular_lessons, master_classes)
        updated = LessonEntry(
            id=entry_id,
            date=date,
            regular_lessons=regular_lessons,
            master_classes=master_classes,
            earnings=compute_earnings(regular_lessons, master_classes, prices),
        )
        entries = list(self._entries)
        entries[index] = updated
        self._entries = sort_entries(entries)
        logger.info(f"Updated entry {entry_id} on {updated.date}: {updated.earnings}")
        return EntryChange(entry=updated, save=self._persist())

    def delete(self, entry_id: str) -> SaveResult:
        """Delete an entry.

        Raises:
            NotFoundError: If no entry has ``entry_id``
        """
        index = self._index_of(entry_id)
        self._entries = self._entries[:index] + self._entries[index + 1 :]
        logger.info(f"Deleted entry {entry_id}")
        return self._persist()

    def import_batch(
        self, rows: Iterable[Sequence[str]], first_row_num: int = 1
    ) -> ImportResult:
        """Import raw ``date,regular,master,earnings`` rows.

        Blank rows are ignored. Malformed rows are skipped and reported; they
        never abort the batch. Imported entries get fresh ids, are merged with
        the collection and saved once at the end.

        Args:
            rows: Raw rows without the header
            first_row_num: Number of the first row, for error messages
        """
        new_entries: list[LessonEntry] = []
        errors: list[str] = []

        for row_num, row in enumerate(rows, start=first_row_num):
            if is_blank_row(row):
                continue
            try:
                record = parse_import_row(row, row_num)
            except MalformedImportRow as e:
                logger.debug(f"Skipping import row: {e}")
                errors.append(str(e))
                continue
            new_entries.append(
                LessonEntry(
                    id=self.id_factory(),
                    date=record.date,
                    regular_lessons=record.regular_lessons,
                    master_classes=record.master_classes,
                    earnings=record.earnings,
                )
            )

        save = None
        if new_entries:
            self._entries = sort_entries([*self._entries, *new_entries])
            save = self._persist()
        logger.info(f"Imported {len(new_entries)} entries, skipped {len(errors)}")

        return ImportResult(
            imported=len(new_entries),
            skipped=len(errors),
            errors=tuple(errors),
            save=save,
        )

    def export_snapshot(
        self, entries: Optional[Iterable[LessonEntry]] = None
    ) -> list[tuple[str, str, str, str]]:
        """Serialize ``entries`` (default: all) to export rows.

        Pass the currently filtered view to export exactly what is displayed.
        """
        return export_rows(self._entries if entries is None else entries)

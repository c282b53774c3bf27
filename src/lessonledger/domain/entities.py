"""Domain model entities for lessonledger.

These are pure data classes representing business concepts, independent of
database schema and of the JSON cache layout.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class LessonEntry:
    """One recorded day of lessons.

    ``earnings`` is computed when the entry is written and stored as a fact;
    later price changes never alter it.
    """

    id: str
    date: date
    regular_lessons: int
    master_classes: int
    earnings: Decimal

    @property
    def lesson_units(self) -> int:
        return self.regular_lessons + self.master_classes


@dataclass(frozen=True)
class PricingConfiguration:
    """Unit prices and the monthly earnings goal."""

    regular_lesson_price: Decimal = Decimal("8")
    master_class_price: Decimal = Decimal("10")
    monthly_goal: Decimal = Decimal("1000")


@dataclass(frozen=True)
class CompanyInfo:
    """Supplier identity printed on invoices, plus the invoice counter."""

    name: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    ico: str = ""
    dic: str = ""
    bank_account: str = ""
    swift: str = ""
    last_invoice_number: int = 20250010


@dataclass(frozen=True)
class ClientInfo:
    """Invoice recipient. Entered per invoice and never persisted."""

    name: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    ico: str = ""
    ic_dph: str = ""


class PeriodKind(Enum):
    """Kinds of date filter applied to entries."""

    ALL = "all"
    THIS_MONTH = "this-month"
    MONTH = "month"
    RANGE = "range"


@dataclass(frozen=True)
class PeriodSpec:
    """A period filter.

    ``month`` is any date inside the chosen month for ``MONTH``; ``start`` and
    ``end`` are the inclusive bounds for ``RANGE``.
    """

    kind: PeriodKind
    month: Optional[date] = None
    start: Optional[date] = None
    end: Optional[date] = None


@dataclass(frozen=True)
class Summary:
    """Aggregate statistics over a set of entries."""

    total: Decimal
    count: int
    regular_lessons: int
    master_classes: int
    total_lesson_units: int
    distinct_days: int
    average_per_day: Decimal
    average_per_lesson_unit: Decimal
    goal_progress_percent: Decimal


@dataclass(frozen=True)
class PeriodEarnings:
    """Earnings total for one bucket of an earnings trend."""

    label: str
    start: date
    end: date
    total: Decimal


class TrendPeriod(Enum):
    """Bucket size for earnings trends."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


@dataclass(frozen=True)
class LoadResult:
    """Entries returned by the two-tier repository and the tier that answered."""

    entries: tuple[LessonEntry, ...]
    source: str


@dataclass(frozen=True)
class SaveResult:
    """Outcome of persisting the whole collection."""

    persisted: bool
    cached: bool
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.persisted


@dataclass(frozen=True)
class EntryChange:
    """An entry accepted into memory, and whether it reached storage."""

    entry: LessonEntry
    save: SaveResult


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a batch import."""

    imported: int
    skipped: int
    errors: tuple[str, ...] = ()
    save: Optional[SaveResult] = None


@dataclass(frozen=True)
class InvoiceOverrides:
    """Manual values that replace computed invoice totals when set."""

    manual_hours: Optional[Decimal] = None
    manual_amount: Optional[Decimal] = None


@dataclass(frozen=True)
class InvoiceComputation:
    """Billable totals for a date range.

    ``invoice_number`` is provisional until the invoice is committed.
    """

    start_date: date
    end_date: date
    entries: tuple[LessonEntry, ...]
    calculated_hours: int
    calculated_amount: Decimal
    hours: Decimal
    amount: Decimal
    invoice_number: int


@dataclass(frozen=True)
class InvoiceDocument:
    """Everything printed on a rendered invoice."""

    invoice_number: int
    company: CompanyInfo
    client: ClientInfo
    issue_date: date
    due_date: date
    period_start: date
    period_end: date
    hours: Decimal
    amount: Decimal
    description: str = "Teaching services"
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def file_name(self) -> str:
        return f"Invoice_{self.invoice_number}_{self.issue_date.isoformat()}.pdf"

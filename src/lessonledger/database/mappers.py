"""Mapper functions to convert between domain models and SQLAlchemy rows."""

from decimal import Decimal, InvalidOperation

from lessonledger.domain import entities as domain
from lessonledger.database.models import LessonEntry as ORMLessonEntry


def entry_to_domain(orm_entry: ORMLessonEntry) -> domain.LessonEntry:
    """Convert SQLAlchemy LessonEntry model to domain LessonEntry entity.

    Raises:
        ValueError: If the stored earnings are not a decimal number
    """
    try:
        earnings = Decimal(orm_entry.earnings)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid stored earnings {orm_entry.earnings!r}: {e!r}")
    return domain.LessonEntry(
        id=orm_entry.id,
        date=orm_entry.date,
        regular_lessons=orm_entry.regular_lessons,
        master_classes=orm_entry.master_classes,
        earnings=earnings,
    )


def entry_to_orm(entry: domain.LessonEntry, position: int) -> ORMLessonEntry:
    """Convert domain LessonEntry entity to a new SQLAlchemy row."""
    return ORMLessonEntry(
        id=entry.id,
        position=position,
        date=entry.date,
        regular_lessons=entry.regular_lessons,
        master_classes=entry.master_classes,
        earnings=str(entry.earnings),
    )

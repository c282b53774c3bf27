"""SQLAlchemy models for the lessonledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class LessonEntry(Base):
    """Lesson entry model.

    ``position`` keeps the order the collection was written in.
    """

    __tablename__ = "lesson_entries"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    regular_lessons = Column(Integer, nullable=False, default=0)
    master_classes = Column(Integer, nullable=False, default=0)
    # Decimal text, kept exactly as entered or imported
    earnings = Column(String, nullable=False)
    saved_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Setting(Base):
    """Key-value settings model."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)

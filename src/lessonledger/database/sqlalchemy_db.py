"""SQLAlchemy-backed entry and settings stores."""

import logging
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from lessonledger.database.base import EntryStore, SettingsStore
from lessonledger.database.mappers import entry_to_domain, entry_to_orm
from lessonledger.database.models import (
    LessonEntry,
    Setting,
    create_session_factory,
)
from lessonledger.domain.entities import LessonEntry as DomainLessonEntry
from lessonledger.domain.errors import StorageUnavailable, StorageWriteFailed

logger = logging.getLogger(__name__)


class SQLAlchemyDatabase:
    """Connection holder shared by the SQLAlchemy stores."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        The engine is created lazily so that an unreachable database surfaces
        as a storage error on first use instead of at construction.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self._session_factory: Optional[sessionmaker[Session]] = None
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            if self._session_factory is None:
                self._session_factory = create_session_factory(self.database_url)
            self._session = self._session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables).

        Raises:
            StorageUnavailable: If the database cannot be opened
        """
        try:
            self._get_session()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Cannot open database {self.database_url}: {e}")

    def _rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()


class SQLAlchemyEntryStore(EntryStore):
    """Primary entry store backed by the ``lesson_entries`` table."""

    def __init__(self, db: SQLAlchemyDatabase):
        self.db = db

    def load(self) -> list[DomainLessonEntry]:
        """Return all entries in the order they were written."""
        try:
            session = self.db._get_session()
            rows = session.query(LessonEntry).order_by(LessonEntry.position).all()
        except SQLAlchemyError as e:
            self.db._rollback()
            raise StorageUnavailable(f"Cannot read entries: {e}")

        try:
            return [entry_to_domain(row) for row in rows]
        except ValueError as e:
            raise StorageUnavailable(f"Stored entries are corrupt: {e}")

    def replace_all(self, entries: Sequence[DomainLessonEntry]) -> None:
        """Delete every stored row and insert ``entries`` in one transaction."""
        try:
            session = self.db._get_session()
            session.query(LessonEntry).delete()
            session.add_all(
                entry_to_orm(entry, position) for position, entry in enumerate(entries)
            )
            session.commit()
        except SQLAlchemyError as e:
            self.db._rollback()
            raise StorageWriteFailed(f"Cannot write entries: {e}")
        logger.debug(f"Wrote {len(entries)} entries to {self.db.database_url}")


class SQLAlchemySettingsStore(SettingsStore):
    """Settings store backed by the ``settings`` table."""

    def __init__(self, db: SQLAlchemyDatabase):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        """Get a setting value or None."""
        try:
            session = self.db._get_session()
            setting = session.query(Setting).filter(Setting.key == key).first()
        except SQLAlchemyError as e:
            self.db._rollback()
            raise StorageUnavailable(f"Cannot read setting '{key}': {e}")
        return setting.value if setting is not None else None

    def set(self, key: str, value: str) -> None:
        """Create or update a setting."""
        try:
            session = self.db._get_session()
            setting = session.query(Setting).filter(Setting.key == key).first()
            if setting is None:
                session.add(Setting(key=key, value=value))
            else:
                setting.value = value
            session.commit()
        except SQLAlchemyError as e:
            self.db._rollback()
            raise StorageWriteFailed(f"Cannot write setting '{key}': {e}")

"""Two-tier entry repository: a primary store plus a fallback cache.

The fallback is consulted only when the primary cannot be read. Nothing is
ever copied from the fallback back into the primary; the next successful save
overwrites the primary with whatever the session holds.
"""

import logging
from typing import Optional, Sequence

from lessonledger.database.base import EntryStore
from lessonledger.domain.entities import LessonEntry, LoadResult, SaveResult
from lessonledger.domain.errors import StorageUnavailable, StorageWriteFailed

logger = logging.getLogger(__name__)

SOURCE_PRIMARY = "primary"
SOURCE_FALLBACK = "fallback"
SOURCE_EMPTY = "empty"


class EntryRepository:
    """Load and save the whole entry collection across two stores."""

    def __init__(self, primary: EntryStore, fallback: Optional[EntryStore] = None):
        """Initialize repository.

        Args:
            primary: Authoritative store
            fallback: Offline cache mirrored on every save
        """
        self.primary = primary
        self.fallback = fallback

    def load(self) -> LoadResult:
        """Load entries from the primary, else the fallback, else nothing."""
        try:
            return LoadResult(entries=tuple(self.primary.load()), source=SOURCE_PRIMARY)
        except StorageUnavailable as e:
            logger.warning(f"Primary store unavailable, trying fallback cache: {e}")

        if self.fallback is not None:
            try:
                return LoadResult(
                    entries=tuple(self.fallback.load()), source=SOURCE_FALLBACK
                )
            except StorageUnavailable as e:
                logger.warning(f"Fallback cache unavailable: {e}")

        return LoadResult(entries=(), source=SOURCE_EMPTY)

    def save(self, entries: Sequence[LessonEntry]) -> SaveResult:
        """Write ``entries`` to the primary and mirror them to the fallback.

        Failures are reported in the result, never raised.
        """
        errors = []

        persisted = True
        try:
            self.primary.replace_all(entries)
        except StorageWriteFailed as e:
            logger.warning(f"Saving entries failed: {e}")
            persisted = False
            errors.append(str(e))

        cached = False
        if self.fallback is not None:
            try:
                self.fallback.replace_all(entries)
                cached = True
            except StorageWriteFailed as e:
                logger.warning(f"Updating fallback cache failed: {e}")
                errors.append(str(e))

        return SaveResult(
            persisted=persisted,
            cached=cached,
            error="; ".join(errors) if errors else None,
        )

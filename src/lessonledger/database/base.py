"""Abstract storage interfaces."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from lessonledger.domain.entities import LessonEntry


class EntryStore(ABC):
    """Whole-collection storage for lesson entries.

    There are no partial updates: every mutation writes the entire collection.
    """

    @abstractmethod
    def load(self) -> list[LessonEntry]:
        """Return all stored entries in stored order.

        Raises:
            StorageUnavailable: If the backing medium cannot be read
        """
        pass

    @abstractmethod
    def replace_all(self, entries: Sequence[LessonEntry]) -> None:
        """Replace the stored collection with ``entries``.

        Raises:
            StorageWriteFailed: If the backing medium cannot be written
        """
        pass


class SettingsStore(ABC):
    """Key-value storage for settings. Values are strings."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the value for ``key`` or None if unset.

        Raises:
            StorageUnavailable: If the backing medium cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``.

        Raises:
            StorageWriteFailed: If the backing medium cannot be written
        """
        pass

"""Database layer for lessonledger application."""

from lessonledger.database.base import EntryStore, SettingsStore
from lessonledger.database.repository import EntryRepository
from lessonledger.database.factories import (
    create_sqlite_database,
    create_fallback_cache,
    create_entry_repository,
    create_settings_store,
)

__all__ = [
    "EntryStore",
    "SettingsStore",
    "EntryRepository",
    "create_sqlite_database",
    "create_fallback_cache",
    "create_entry_repository",
    "create_settings_store",
]

"""Factory functions for creating the stores."""

import os
from pathlib import Path
from typing import Optional

from lessonledger.database.json_cache import JSONFileEntryStore
from lessonledger.database.repository import EntryRepository
from lessonledger.database.sqlalchemy_db import (
    SQLAlchemyDatabase,
    SQLAlchemyEntryStore,
    SQLAlchemySettingsStore,
)

DATA_DIR_NAME = ".lessonledger"


def _default_path(file_name: str) -> str:
    data_dir = Path.home() / DATA_DIR_NAME
    data_dir.mkdir(exist_ok=True)
    return str(data_dir / file_name)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            LESSONLEDGER_DB_PATH environment variable, then defaults to
            ~/.lessonledger/lessonledger.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("LESSONLEDGER_DB_PATH")

    if database_path is None:
        database_path = _default_path("lessonledger.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_fallback_cache(cache_path: Optional[str] = None) -> JSONFileEntryStore:
    """Create the JSON fallback cache.

    Args:
        cache_path: Path to the cache file. If None, checks
            LESSONLEDGER_CACHE_PATH environment variable, then defaults to
            ~/.lessonledger/entries.json
    """
    if cache_path is None:
        cache_path = os.environ.get("LESSONLEDGER_CACHE_PATH")

    if cache_path is None:
        cache_path = _default_path("entries.json")

    return JSONFileEntryStore(cache_path)


def create_entry_repository(
    db: SQLAlchemyDatabase, cache_path: Optional[str] = None
) -> EntryRepository:
    """Create the two-tier repository over ``db`` and the fallback cache."""
    return EntryRepository(
        primary=SQLAlchemyEntryStore(db),
        fallback=create_fallback_cache(cache_path),
    )


def create_settings_store(db: SQLAlchemyDatabase) -> SQLAlchemySettingsStore:
    """Create the key-value settings store over ``db``."""
    return SQLAlchemySettingsStore(db)

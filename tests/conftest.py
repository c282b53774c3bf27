"""Shared pytest fixtures for lessonledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from typing import Sequence

import pytest

from lessonledger.database.base import EntryStore, SettingsStore
from lessonledger.database.factories import (
    create_entry_repository,
    create_settings_store,
    create_sqlite_database,
)
from lessonledger.domain.entities import LessonEntry, PricingConfiguration
from lessonledger.domain.entries import EntryService
from lessonledger.domain.errors import StorageUnavailable, StorageWriteFailed
from lessonledger.domain.settings import SettingsService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def cache_path(tmp_path):
    """Path of a per-test fallback cache file."""
    return str(tmp_path / "entries.json")


@pytest.fixture
def entry_repository(temp_db, cache_path):
    """Create a two-tier repository over the temporary database."""
    return create_entry_repository(temp_db, cache_path)


@pytest.fixture
def entry_service(entry_repository):
    """Create a loaded EntryService with a temporary database."""
    service = EntryService(entry_repository)
    service.load()
    return service


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(create_settings_store(temp_db))


@pytest.fixture
def prices():
    """Default prices: regular 8, master 10, goal 1000."""
    return PricingConfiguration(
        regular_lesson_price=Decimal("8"),
        master_class_price=Decimal("10"),
        monthly_goal=Decimal("1000"),
    )


@pytest.fixture
def sample_entries():
    """Three entries in May 2024, most recent first."""
    return [
        LessonEntry("c", date(2024, 5, 20), 3, 1, Decimal("34")),
        LessonEntry("b", date(2024, 5, 10), 2, 0, Decimal("16")),
        LessonEntry("a", date(2024, 5, 1), 0, 2, Decimal("20")),
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db, cache_path):
    """Global CLI options pointing at the temporary storage."""
    return ["--db-path", temp_db.database_path, "--cache-path", cache_path]


class MemoryEntryStore(EntryStore):
    """In-memory entry store that can be told to fail."""

    def __init__(self, entries=(), fail_load=False, fail_write=False):
        self.entries = list(entries)
        self.fail_load = fail_load
        self.fail_write = fail_write
        self.writes = 0

    def load(self) -> list[LessonEntry]:
        if self.fail_load:
            raise StorageUnavailable("memory store offline")
        return list(self.entries)

    def replace_all(self, entries: Sequence[LessonEntry]) -> None:
        if self.fail_write:
            raise StorageWriteFailed("memory store read-only")
        self.writes += 1
        self.entries = list(entries)


class MemorySettingsStore(SettingsStore):
    """In-memory settings store that can be told to fail."""

    def __init__(self, values=None, fail_load=False, fail_write=False):
        self.values = dict(values or {})
        self.fail_load = fail_load
        self.fail_write = fail_write

    def get(self, key):
        if self.fail_load:
            raise StorageUnavailable("settings offline")
        return self.values.get(key)

    def set(self, key, value):
        if self.fail_write:
            raise StorageWriteFailed("settings read-only")
        self.values[key] = value


@pytest.fixture
def memory_store_factory():
    """Factory for in-memory entry stores."""
    return MemoryEntryStore


@pytest.fixture
def memory_settings_factory():
    """Factory for in-memory settings stores."""
    return MemorySettingsStore

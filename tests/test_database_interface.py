"""Tests for the SQLAlchemy and JSON entry stores."""

import json
from datetime import date
from decimal import Decimal

import pytest

from lessonledger.database.json_cache import JSONFileEntryStore
from lessonledger.database.sqlalchemy_db import (
    SQLAlchemyEntryStore,
    SQLAlchemySettingsStore,
)
from lessonledger.domain import entities
from lessonledger.domain.errors import StorageUnavailable


class TestSQLAlchemyEntryStore:
    """Tests for the primary entry store."""

    def test_empty_store_loads_nothing(self, temp_db):
        assert SQLAlchemyEntryStore(temp_db).load() == []

    def test_replace_all_round_trips_domain_models(self, temp_db, sample_entries):
        store = SQLAlchemyEntryStore(temp_db)
        store.replace_all(sample_entries)

        loaded = store.load()

        assert loaded == sample_entries
        for entry in loaded:
            assert isinstance(entry, entities.LessonEntry)
            assert isinstance(entry.earnings, Decimal)

    def test_replace_all_keeps_given_order(self, temp_db, sample_entries):
        store = SQLAlchemyEntryStore(temp_db)
        reordered = list(reversed(sample_entries))
        store.replace_all(reordered)
        assert [e.id for e in store.load()] == ["a", "b", "c"]

    def test_replace_all_overwrites_previous_collection(self, temp_db, sample_entries):
        store = SQLAlchemyEntryStore(temp_db)
        store.replace_all(sample_entries)
        store.replace_all(sample_entries[:1])
        assert store.load() == sample_entries[:1]

    def test_fractional_earnings_survive(self, temp_db):
        store = SQLAlchemyEntryStore(temp_db)
        entry = entities.LessonEntry("x", date(2024, 5, 1), 1, 0, Decimal("8.50"))
        store.replace_all([entry])
        assert store.load()[0].earnings == Decimal("8.5")

    def test_sub_cent_earnings_reload_exactly(self, temp_db):
        store = SQLAlchemyEntryStore(temp_db)
        entry = entities.LessonEntry("x", date(2024, 5, 1), 2, 1, Decimal("16.125"))
        store.replace_all([entry])

        reloaded = SQLAlchemyEntryStore(temp_db).load()

        assert reloaded == [entry]
        assert str(reloaded[0].earnings) == "16.125"


class TestSQLAlchemySettingsStore:
    """Tests for the key-value settings store."""

    def test_missing_key_is_none(self, temp_db):
        assert SQLAlchemySettingsStore(temp_db).get("monthlyGoal") is None

    def test_set_then_get(self, temp_db):
        store = SQLAlchemySettingsStore(temp_db)
        store.set("monthlyGoal", "1200")
        store.set("monthlyGoal", "1500")
        assert store.get("monthlyGoal") == "1500"


class TestJSONFileEntryStore:
    """Tests for the fallback cache file."""

    def test_missing_file_is_created_empty(self, tmp_path):
        path = tmp_path / "nested" / "entries.json"
        store = JSONFileEntryStore(path)

        assert store.load() == []
        assert json.loads(path.read_text()) == []

    def test_replace_all_writes_camel_case_records(self, tmp_path, sample_entries):
        path = tmp_path / "entries.json"
        JSONFileEntryStore(path).replace_all(sample_entries[:1])

        records = json.loads(path.read_text())
        assert records == [
            {
                "id": "c",
                "date": "2024-05-20",
                "regularLessons": 3,
                "masterClasses": 1,
                "earnings": 34,
            }
        ]

    def test_round_trip(self, tmp_path, sample_entries):
        store = JSONFileEntryStore(tmp_path / "entries.json")
        store.replace_all(sample_entries)
        assert store.load() == sample_entries

    def test_reads_timestamped_dates(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "1",
                        "date": "2024-05-01T00:00:00.000Z",
                        "regularLessons": 2,
                        "masterClasses": 0,
                        "earnings": 16,
                    }
                ]
            )
        )
        assert JSONFileEntryStore(path).load()[0].date == date(2024, 5, 1)

    @pytest.mark.parametrize(
        "content",
        ["not json", '{"id": "1"}', '[{"id": "1", "date": "2024-05-01"}]'],
    )
    def test_unreadable_cache_is_unavailable(self, tmp_path, content):
        path = tmp_path / "entries.json"
        path.write_text(content)
        with pytest.raises(StorageUnavailable):
            JSONFileEntryStore(path).load()

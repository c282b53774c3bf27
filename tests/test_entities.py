"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

from lessonledger.domain.entities import (
    CompanyInfo,
    InvoiceDocument,
    ClientInfo,
    LessonEntry,
    PricingConfiguration,
    SaveResult,
)


class TestLessonEntry:
    """Tests for LessonEntry entity."""

    def test_create_entry(self):
        """Test creating a LessonEntry entity."""
        entry = LessonEntry(
            id="abc",
            date=date(2024, 5, 1),
            regular_lessons=2,
            master_classes=1,
            earnings=Decimal("26"),
        )
        assert entry.id == "abc"
        assert entry.lesson_units == 3

    def test_entry_immutability(self):
        """Test that LessonEntry entities are immutable."""
        entry = LessonEntry("abc", date(2024, 5, 1), 2, 1, Decimal("26"))
        with pytest.raises(FrozenInstanceError):
            entry.earnings = Decimal("0")


class TestDefaults:
    """Tests for configuration defaults."""

    def test_pricing_defaults(self):
        config = PricingConfiguration()
        assert config.regular_lesson_price == Decimal("8")
        assert config.master_class_price == Decimal("10")
        assert config.monthly_goal == Decimal("1000")

    def test_company_defaults(self):
        assert CompanyInfo().last_invoice_number == 20250010


class TestSaveResult:
    """Tests for SaveResult."""

    def test_ok_follows_primary_write(self):
        assert SaveResult(persisted=True, cached=False).ok
        assert not SaveResult(persisted=False, cached=True, error="offline").ok


def test_invoice_file_name():
    document = InvoiceDocument(
        invoice_number=20250011,
        company=CompanyInfo(),
        client=ClientInfo(),
        issue_date=date(2024, 6, 1),
        due_date=date(2024, 6, 15),
        period_start=date(2024, 5, 1),
        period_end=date(2024, 5, 31),
        hours=Decimal("8"),
        amount=Decimal("70"),
    )
    assert document.file_name == "Invoice_20250011_2024-06-01.pdf"

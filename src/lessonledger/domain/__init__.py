"""Domain layer for lessonledger application."""

from lessonledger.domain.entries import EntryService
from lessonledger.domain.settings import SettingsService
from lessonledger.domain.csv_import import CSVImportService
from lessonledger.domain.invoice import InvoiceService

__all__ = [
    "EntryService",
    "SettingsService",
    "CSVImportService",
    "InvoiceService",
]

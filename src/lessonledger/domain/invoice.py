"""Invoice computation domain service."""

import logging
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from lessonledger.domain.aggregation import ZERO, filter_by_range
from lessonledger.domain.entities import (
    ClientInfo,
    InvoiceComputation,
    InvoiceDocument,
    InvoiceOverrides,
    LessonEntry,
)
from lessonledger.domain.errors import (
    ConflictError,
    DocumentRenderingFailed,
    ValidationError,
    StorageWriteFailed,
    stale_invoice_number,
    zero_amount_invoice,
)
from lessonledger.domain.settings import SettingsService

if TYPE_CHECKING:
    from lessonledger.rendering.base import InvoiceRenderer

logger = logging.getLogger(__name__)

PAYMENT_TERM_DAYS = 14


class InvoiceService:
    """Service for computing, rendering and numbering invoices.

    The invoice counter lives in the company info and only moves when an
    invoice has been rendered successfully.
    """

    def __init__(
        self,
        settings_service: SettingsService,
        renderer: Optional["InvoiceRenderer"] = None,
    ):
        """Initialize invoice service.

        Args:
            settings_service: Source of company info and its counter
            renderer: Document renderer used by generate()
        """
        self.settings_service = settings_service
        self.renderer = renderer

    def compute(
        self,
        entries: Iterable[LessonEntry],
        start_date: date,
        end_date: date,
        overrides: Optional[InvoiceOverrides] = None,
    ) -> InvoiceComputation:
        """Compute billable hours and amount for an inclusive date range.

        Each manual override, when set, replaces its computed value.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")
        overrides = overrides or InvoiceOverrides()

        in_range = filter_by_range(entries, start_date, end_date)
        calculated_hours = sum(entry.lesson_units for entry in in_range)
        calculated_amount = sum((entry.earnings for entry in in_range), ZERO)

        hours = (
            overrides.manual_hours
            if overrides.manual_hours is not None
            else Decimal(calculated_hours)
        )
        amount = (
            overrides.manual_amount
            if overrides.manual_amount is not None
            else calculated_amount
        )

        company = self.settings_service.load_company_info()
        return InvoiceComputation(
            start_date=start_date,
            end_date=end_date,
            entries=tuple(in_range),
            calculated_hours=calculated_hours,
            calculated_amount=calculated_amount,
            hours=hours,
            amount=amount,
            invoice_number=company.last_invoice_number + 1,
        )

    def build_document(
        self,
        computation: InvoiceComputation,
        client: ClientInfo,
        issue_date: Optional[date] = None,
    ) -> InvoiceDocument:
        """Assemble the printable invoice for ``computation``.

        Raises:
            ValidationError: If the invoice amount is zero
        """
        if computation.amount == 0:
            raise ValidationError(zero_amount_invoice())

        issued = issue_date or date.today()
        return InvoiceDocument(
            invoice_number=computation.invoice_number,
            company=self.settings_service.load_company_info(),
            client=client,
            issue_date=issued,
            due_date=issued + timedelta(days=PAYMENT_TERM_DAYS),
            period_start=computation.start_date,
            period_end=computation.end_date,
            hours=computation.hours,
            amount=computation.amount,
        )

    def commit(self, computation: InvoiceComputation) -> int:
        """Advance the invoice counter to the computation's number and save it.

        Call only after the document has been rendered.

        Returns:
            The new last invoice number

        Raises:
            ConflictError: If the counter moved since the computation was made
            StorageWriteFailed: If company info cannot be saved
        """
        company = self.settings_service.load_company_info()
        expected = company.last_invoice_number + 1
        if computation.invoice_number != expected:
            raise ConflictError(
                stale_invoice_number(computation.invoice_number, expected)
            )

        updated = replace(company, last_invoice_number=expected)
        self.settings_service.save_company_info(updated)
        logger.info(f"Committed invoice number {expected}")
        return expected

    def generate(
        self,
        computation: InvoiceComputation,
        client: ClientInfo,
        output_dir: str | Path,
        issue_date: Optional[date] = None,
    ) -> Path:
        """Render the invoice into ``output_dir`` and commit its number.

        Returns:
            Path of the rendered document

        Raises:
            ValidationError: If the invoice amount is zero
            DocumentRenderingFailed: If rendering fails; the counter is unchanged
            ConflictError: If the counter moved; the document is removed
            StorageWriteFailed: If the counter cannot be saved; the document is removed
        """
        if self.renderer is None:
            raise DocumentRenderingFailed("No invoice renderer configured")

        document = self.build_document(computation, client, issue_date)
        path = Path(output_dir) / document.file_name
        try:
            self.renderer.render(document, path)
        except DocumentRenderingFailed:
            raise
        except (OSError, ValueError) as e:
            raise DocumentRenderingFailed(f"Rendering invoice {document.invoice_number} failed: {e}")

        try:
            self.commit(computation)
        except (ConflictError, StorageWriteFailed):
            # An unnumbered document must not outlive a failed commit
            path.unlink(missing_ok=True)
            logger.warning(f"Removed {path}: invoice number was not committed")
            raise
        return path

"""Invoice document rendering."""

from lessonledger.rendering.base import InvoiceRenderer
from lessonledger.rendering.invoice_pdf import ReportLabInvoiceRenderer

__all__ = ["InvoiceRenderer", "ReportLabInvoiceRenderer"]

"""ReportLab PDF invoice renderer."""

import logging
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus import Flowable
from reportlab.platypus.doctemplate import LayoutError

from lessonledger.domain.entities import ClientInfo, CompanyInfo, InvoiceDocument
from lessonledger.domain.errors import DocumentRenderingFailed
from lessonledger.rendering.base import InvoiceRenderer

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d.%m.%Y"


class HLine(Flowable):
    """Horizontal rule."""

    def __init__(self, width):
        Flowable.__init__(self)
        self.width = width

    def draw(self):
        self.canv.setStrokeColor(colors.grey)
        self.canv.setLineWidth(0.5)
        self.canv.line(0, 0, self.width, 0)


def _money(amount) -> str:
    return f"EUR {amount:,.2f}"


def _party_lines(title: str, info: CompanyInfo | ClientInfo) -> list[str]:
    lines = [info.name, info.address, f"{info.postal_code} {info.city}".strip()]
    if info.ico:
        lines.append(f"ICO: {info.ico}")
    if isinstance(info, CompanyInfo) and info.dic:
        lines.append(f"DIC: {info.dic}")
    if isinstance(info, ClientInfo) and info.ic_dph:
        lines.append(f"IC DPH: {info.ic_dph}")
    return [f"<b>{title}</b>"] + [escape(line) for line in lines if line]


class ReportLabInvoiceRenderer(InvoiceRenderer):
    """Renders a one-page A4 invoice with ReportLab."""

    def _story(self, document: InvoiceDocument) -> list:
        styles = getSampleStyleSheet()
        styles.add(ParagraphStyle(name="InvLeft", alignment=TA_LEFT))
        styles.add(ParagraphStyle(name="InvRight", alignment=TA_RIGHT))
        story = []

        story.append(Paragraph(f"Invoice {document.invoice_number}", styles["Title"]))
        story.append(Spacer(1, 12))

        dates = [
            ["Issue date:", document.issue_date.strftime(DATE_FORMAT)],
            ["Due date:", document.due_date.strftime(DATE_FORMAT)],
            [
                "Service period:",
                f"{document.period_start.strftime(DATE_FORMAT)} - "
                f"{document.period_end.strftime(DATE_FORMAT)}",
            ],
        ]
        dtable = Table(dates, colWidths=[100, 200], hAlign="RIGHT")
        dtable.setStyle(TableStyle([("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold")]))
        story.append(dtable)
        story.append(Spacer(1, 12))
        story.append(HLine(480))
        story.append(Spacer(1, 12))

        supplier = "<br/>".join(_party_lines("Supplier", document.company))
        recipient = "<br/>".join(_party_lines("Recipient", document.client))
        ptable = Table(
            [[Paragraph(supplier, styles["InvLeft"]), Paragraph(recipient, styles["InvLeft"])]],
            colWidths=[240, 240],
        )
        ptable.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        story.append(ptable)
        story.append(Spacer(1, 12))

        company = document.company
        payment = [
            ["Bank account:", company.bank_account],
            ["SWIFT:", company.swift],
            ["Variable symbol:", str(document.invoice_number)],
        ]
        story.append(Table(payment, colWidths=[100, 380], hAlign="LEFT"))
        story.append(Spacer(1, 18))

        items = [
            ["Description", "Hours", "Amount"],
            [document.description, f"{document.hours:g}", _money(document.amount)],
            ["", "Total:", _money(document.amount)],
        ]
        itable = Table(items, colWidths=[280, 80, 120])
        itable.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -2), 0.5, colors.black),
                ]
            )
        )
        story.append(itable)
        story.append(Spacer(1, 18))

        story.append(Paragraph("The supplier is not a VAT payer.", styles["Normal"]))
        for note in document.notes:
            story.append(Paragraph(escape(note), styles["Normal"]))
        return story

    def render(self, document: InvoiceDocument, path: Path) -> None:
        """Write the invoice PDF to ``path``."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            doc = SimpleDocTemplate(
                str(path),
                pagesize=A4,
                rightMargin=56,
                leftMargin=56,
                topMargin=56,
                bottomMargin=36,
                title=f"Invoice {document.invoice_number}",
            )
            doc.build(self._story(document))
        except LayoutError as e:
            path.unlink(missing_ok=True)
            raise DocumentRenderingFailed(
                f"Invoice {document.invoice_number} does not fit on the page: {e}"
            )
        except (OSError, ValueError) as e:
            raise DocumentRenderingFailed(f"Cannot write invoice to {path}: {e}")
        logger.info(f"Rendered invoice {document.invoice_number} to {path}")

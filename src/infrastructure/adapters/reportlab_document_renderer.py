"""PDF renderer adapter backed by reportlab platypus.

Page layout (A4, 2 cm margins):
    title
    field table (student, diploma, institution, year, issue date,
                 certificate id, short fingerprint)
    QR image
    verification locator
"""

from __future__ import annotations

import io
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import (
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from src.application.ports.certificate_rendering import DocumentRendererProtocol
from src.domain.models.export_document import ExportDocument

PDF_MEDIA_TYPE = "application/pdf"


class ReportLabDocumentRenderer(DocumentRendererProtocol):
    """Renders ExportDocuments as single-page PDFs."""

    def __init__(self, qr_size_cm: float = 4.0) -> None:
        self._qr_size = qr_size_cm * cm

    @property
    def media_type(self) -> str:
        return PDF_MEDIA_TYPE

    def render(self, document: ExportDocument) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=2 * cm,
            leftMargin=2 * cm,
            topMargin=2 * cm,
            bottomMargin=2 * cm,
            title=document.title,
            subject=document.filename,
        )
        styles = getSampleStyleSheet()
        mono = ParagraphStyle("Mono", parent=styles["Normal"], fontName="Courier", fontSize=8)

        elements = [
            Paragraph(escape(document.title), styles["Title"]),
            Spacer(1, 1 * cm),
        ]

        rows = [
            [label, Paragraph(escape(value), styles["Normal"])]
            for label, value in document.field_rows()
        ]
        table = Table(rows, colWidths=[5 * cm, 12 * cm])
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        elements.append(table)
        elements.append(Spacer(1, 1 * cm))

        elements.append(
            Image(io.BytesIO(document.qr_image), width=self._qr_size, height=self._qr_size)
        )
        elements.append(Spacer(1, 0.5 * cm))
        elements.append(
            Paragraph(escape(document.certificate.verification_url), mono)
        )

        doc.build(elements)
        return buffer.getvalue()

"""Document renderer stub implementation.

Renders an ExportDocument as plain text, one "Label: value" line per
visible field, so tests can assert on page content without parsing PDF.
"""

from __future__ import annotations

from src.application.ports.certificate_rendering import DocumentRendererProtocol
from src.domain.models.export_document import ExportDocument


class DocumentRendererStub(DocumentRendererProtocol):
    """In-memory stub implementation of DocumentRendererProtocol.

    NOT suitable for production use.

    Attributes:
        rendered: Every document passed to render(), in order.
    """

    def __init__(self) -> None:
        self.rendered: list[ExportDocument] = []

    @property
    def media_type(self) -> str:
        return "text/plain"

    def render(self, document: ExportDocument) -> bytes:
        self.rendered.append(document)
        lines = [document.title]
        lines.extend(f"{label}: {value}" for label, value in document.field_rows())
        lines.append(f"QR: {len(document.qr_image)} bytes")
        return "\n".join(lines).encode("utf-8")

    def clear(self) -> None:
        self.rendered.clear()

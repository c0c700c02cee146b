"""Infrastructure adapters for the diploma registry.

Adapters implement the ports defined in the application layer,
providing concrete implementations for external libraries:
- QrCodeEncoder: qrcode + Pillow PNG output
- ReportLabDocumentRenderer: reportlab platypus PDF output
"""

from src.infrastructure.adapters.qrcode_encoder import QrCodeEncoder
from src.infrastructure.adapters.reportlab_document_renderer import (
    PDF_MEDIA_TYPE,
    ReportLabDocumentRenderer,
)

__all__: list[str] = [
    "PDF_MEDIA_TYPE",
    "QrCodeEncoder",
    "ReportLabDocumentRenderer",
]

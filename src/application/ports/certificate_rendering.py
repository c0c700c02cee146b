"""Certificate rendering ports.

Two collaborators turn a certificate into something a person can hold:
- QrEncoderProtocol: verification payload text -> PNG image bytes
- DocumentRendererProtocol: ExportDocument -> document bytes (e.g. PDF)

Neither collaborator decides content. The payload and the visible fields
are fixed by the certificate generator and the export service.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from src.domain.models.export_document import ExportDocument


@dataclass(frozen=True)
class QrRenderOptions:
    """Rendering options for the QR image.

    Attributes:
        box_size: Pixels per QR module.
        border: Quiet-zone width in modules.
        fill_color: Foreground (module) color.
        back_color: Background color.
    """

    box_size: int = 10
    border: int = 4
    fill_color: str = "black"
    back_color: str = "white"

    def __post_init__(self) -> None:
        if self.box_size < 1:
            raise ValueError(f"box_size must be positive, got {self.box_size}")
        if self.border < 0:
            raise ValueError(f"border must be non-negative, got {self.border}")
        if self.fill_color == self.back_color:
            raise ValueError("fill_color and back_color must differ")


class QrEncoderProtocol(Protocol):
    """Protocol for QR encoding."""

    def encode(self, payload: str, options: QrRenderOptions) -> bytes:
        """Encode text as a PNG QR image.

        Args:
            payload: Exact text to encode.
            options: Rendering options.

        Returns:
            PNG image bytes.
        """
        ...


class DocumentRendererProtocol(Protocol):
    """Protocol for document layout engines."""

    @property
    def media_type(self) -> str:
        ...

    def render(self, document: ExportDocument) -> bytes:
        """Lay out and serialize the document.

        Args:
            document: Content to place on the page, including the QR image.

        Returns:
            Serialized document bytes.
        """
        ...

"""Diploma export service.

Binds a fresh certificate to a rendered document:

1. Generate the certificate (new id, fingerprint, payload)
2. QR-encode the verification payload
3. Assemble the ExportDocument (fields, issue date, certificate, QR)
4. Render it, and write it to disk when an output directory is given

Layout belongs to the document renderer; what must be on the page is
decided here.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from src.application.ports.certificate_rendering import (
    DocumentRendererProtocol,
    QrEncoderProtocol,
    QrRenderOptions,
)
from src.application.services.base import LoggingMixin
from src.application.services.certificate_generator_service import (
    CertificateGeneratorService,
)
from src.domain.models.certificate import CertificateArtifact
from src.domain.models.diploma_record import DiplomaRecord, validate_record
from src.domain.models.export_document import (
    EXPORT_TITLE,
    ExportDocument,
    export_filename,
)


@dataclass(frozen=True)
class DiplomaExport:
    """Result of one export.

    Attributes:
        document: What was rendered.
        content: Rendered bytes.
        media_type: MIME type reported by the renderer.
        path: Where the file was written, if it was.
    """

    document: ExportDocument
    content: bytes
    media_type: str
    path: Path | None = None

    @property
    def filename(self) -> str:
        return self.document.filename

    @property
    def certificate(self) -> CertificateArtifact:
        return self.document.certificate


class DiplomaExportService(LoggingMixin):
    """Produces self-verifying diploma documents."""

    def __init__(
        self,
        generator: CertificateGeneratorService,
        qr_encoder: QrEncoderProtocol,
        renderer: DocumentRendererProtocol,
        qr_options: QrRenderOptions | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the export service.

        Args:
            generator: Certificate generator.
            qr_encoder: Encodes the verification payload as an image.
            renderer: Lays out and serializes the document.
            qr_options: QR rendering options (defaults: 10px, border 4,
                black on white).
            clock: Source of the issue date.
        """
        self._generator = generator
        self._qr_encoder = qr_encoder
        self._renderer = renderer
        self._qr_options = qr_options or QrRenderOptions()
        self._clock = clock
        self._init_logger(component="export")

    def build_document(self, record: DiplomaRecord) -> ExportDocument:
        """Assemble the document content for a record, with a new certificate.

        Raises:
            ValidationError: If the record has blank fields.
        """
        validate_record(record)
        certificate = self._generator.generate_certificate(record)
        qr_image = self._qr_encoder.encode(
            certificate.verification_payload, self._qr_options
        )
        return ExportDocument(
            filename=export_filename(record),
            title=EXPORT_TITLE,
            record=record,
            certificate=certificate,
            issue_date=self._clock(),
            qr_image=qr_image,
        )

    def export(
        self, record: DiplomaRecord, output_dir: Path | None = None
    ) -> DiplomaExport:
        """Render a diploma with a fresh certificate.

        Args:
            record: The diploma to export.
            output_dir: Directory to write the file into (optional).

        Returns:
            DiplomaExport with the rendered bytes and, if written, the path.
        """
        document = self.build_document(record)
        log = self._log_operation(
            "export",
            certificate_id=document.certificate.certificate_id,
            filename=document.filename,
        )

        content = self._renderer.render(document)
        path: Path | None = None
        if output_dir is not None:
            output_dir.mkdir(parents=True, exist_ok=True)
            path = output_dir / document.filename
            path.write_bytes(content)

        log.info("diploma_exported", size=len(content), path=str(path) if path else None)
        return DiplomaExport(
            document=document,
            content=content,
            media_type=self._renderer.media_type,
            path=path,
        )

"""Export document binding contract.

ExportDocument is everything a document renderer needs to paint one
diploma page: the visible fields, the certificate material and the QR
image. Layout is the renderer's business; the content is fixed here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

from src.domain.models.certificate import CertificateArtifact
from src.domain.models.diploma_record import DiplomaRecord

EXPORT_TITLE = "Certified Diploma"
EXPORT_FILE_PREFIX = "Diploma"
EXPORT_FILE_EXTENSION = "pdf"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]+")


def export_filename(record: DiplomaRecord) -> str:
    """Build the artifact file name from student name and year.

    Whitespace runs and path separators (any run of characters other
    than letters, digits, "_", "." and "-") collapse to one underscore:
    "Alice  van Dijk", 2024 -> "Diploma_Alice_van_Dijk_2024.pdf",
    "AC/DC Jones", 2020 -> "Diploma_AC_DC_Jones_2020.pdf".
    """
    name = _UNSAFE_FILENAME_CHARS.sub("_", record.student_name.strip())
    return f"{EXPORT_FILE_PREFIX}_{name}_{record.year}.{EXPORT_FILE_EXTENSION}"


@dataclass(frozen=True)
class ExportDocument:
    """Content of one rendered diploma.

    Attributes:
        filename: Output file name (see export_filename).
        title: Heading printed on the page.
        record: The diploma being exported.
        certificate: Fresh certificate material for this export.
        issue_date: Date the export was generated (not persisted).
        qr_image: PNG bytes encoding certificate.verification_payload.
    """

    filename: str
    title: str
    record: DiplomaRecord
    certificate: CertificateArtifact
    issue_date: date
    qr_image: bytes

    def field_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs that must be visible on the page."""
        return [
            ("Student", self.record.student_name),
            ("Diploma", self.record.diploma_title),
            ("Institution", self.record.institution),
            ("Year", str(self.record.year)),
            ("Issued on", self.issue_date.isoformat()),
            ("Certificate ID", self.certificate.certificate_id),
            ("Fingerprint", self.certificate.short_fingerprint),
        ]

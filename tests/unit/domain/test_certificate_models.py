"""Unit tests for certificate artifacts and export documents."""

from datetime import date

import pytest

from src.domain.models.certificate import CertificateArtifact, FingerprintAlgorithm
from src.domain.models.diploma_record import DiplomaRecord
from src.domain.models.export_document import (
    EXPORT_TITLE,
    ExportDocument,
    export_filename,
)

CERT_ID = "3f2b8c1e-0000-4000-8000-000000000001"
FINGERPRINT = "ab" * 32
URL = f"https://verify.test.example/verify/{CERT_ID}"


def _artifact(**overrides: str) -> CertificateArtifact:
    values = {
        "certificate_id": CERT_ID,
        "fingerprint": FINGERPRINT,
        "verification_url": URL,
        "verification_payload": "payload",
    }
    values.update(overrides)
    return CertificateArtifact(**values)


class TestCertificateArtifact:
    def test_defaults_to_sha256(self) -> None:
        assert _artifact().algorithm == FingerprintAlgorithm.SHA256

    def test_short_fingerprint_is_32_chars_and_ellipsis(self) -> None:
        assert _artifact().short_fingerprint == FINGERPRINT[:32] + "..."

    def test_rejects_empty_id(self) -> None:
        with pytest.raises(ValueError):
            _artifact(certificate_id="", verification_url="https://x/verify/")

    def test_rejects_wrong_fingerprint_length(self) -> None:
        with pytest.raises(ValueError, match="64 hex"):
            _artifact(fingerprint="abc")

    def test_url_must_end_with_id(self) -> None:
        with pytest.raises(ValueError, match="end with"):
            _artifact(verification_url="https://verify.test.example/verify/other")

    def test_to_dict(self) -> None:
        assert _artifact().to_dict() == {
            "certificate_id": CERT_ID,
            "fingerprint": FINGERPRINT,
            "verification_url": URL,
            "algorithm": "sha256",
        }


class TestExportFilename:
    def test_single_word_name(self) -> None:
        record = DiplomaRecord("Alice", "B.Sc. CS", "Tech U", 2024)
        assert export_filename(record) == "Diploma_Alice_2024.pdf"

    def test_whitespace_runs_collapse(self) -> None:
        record = DiplomaRecord(" Alice  van\tDijk ", "B.Sc. CS", "Tech U", 2024)
        assert export_filename(record) == "Diploma_Alice_van_Dijk_2024.pdf"

    def test_path_separators_are_replaced(self) -> None:
        record = DiplomaRecord("AC/DC Jones", "B.A.", "Uni", 2020)
        assert export_filename(record) == "Diploma_AC_DC_Jones_2020.pdf"

    def test_backslash_and_punctuation_are_replaced(self) -> None:
        record = DiplomaRecord("O'Brien\\..\\x: y", "B.A.", "Uni", 2020)
        filename = export_filename(record)
        assert "/" not in filename
        assert "\\" not in filename
        assert ":" not in filename

    def test_accented_letters_are_kept(self) -> None:
        record = DiplomaRecord("Zoë Müller", "B.A.", "Uni", 2020)
        assert export_filename(record) == "Diploma_Zoë_Müller_2020.pdf"


class TestExportDocument:
    def test_field_rows_cover_every_visible_field(self) -> None:
        record = DiplomaRecord("Alice", "B.Sc. CS", "Tech U", 2024)
        document = ExportDocument(
            filename=export_filename(record),
            title=EXPORT_TITLE,
            record=record,
            certificate=_artifact(),
            issue_date=date(2025, 3, 1),
            qr_image=b"png",
        )

        assert document.field_rows() == [
            ("Student", "Alice"),
            ("Diploma", "B.Sc. CS"),
            ("Institution", "Tech U"),
            ("Year", "2024"),
            ("Issued on", "2025-03-01"),
            ("Certificate ID", CERT_ID),
            ("Fingerprint", FINGERPRINT[:32] + "..."),
        ]

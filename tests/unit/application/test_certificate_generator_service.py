"""Unit tests for certificate generation."""

import hashlib
import re

import blake3
import pytest

from src.application.services.certificate_generator_service import (
    PAYLOAD_HEADER,
    CertificateGeneratorService,
    build_verification_payload,
    build_verification_url,
)
from src.domain.models.certificate import FingerprintAlgorithm
from src.domain.models.diploma_record import DiplomaRecord
from tests.helpers import VERIFY_BASE_URL, SequentialIds

UUID4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


class TestGenerateCertificate:
    def test_certificate_ids_are_unique(
        self, certificate_generator: CertificateGeneratorService, alice_record: DiplomaRecord
    ) -> None:
        """10,000 exports of the same record never reuse an id."""
        ids = {
            certificate_generator.generate_certificate(alice_record).certificate_id
            for _ in range(10_000)
        }
        assert len(ids) == 10_000

    def test_default_ids_are_uuid4(
        self, certificate_generator: CertificateGeneratorService, alice_record: DiplomaRecord
    ) -> None:
        artifact = certificate_generator.generate_certificate(alice_record)
        assert UUID4_RE.match(artifact.certificate_id)

    def test_two_exports_have_different_fingerprints(
        self, certificate_generator: CertificateGeneratorService, alice_record: DiplomaRecord
    ) -> None:
        """Each export is its own instance: the fingerprint includes the random id."""
        first = certificate_generator.generate_certificate(alice_record)
        second = certificate_generator.generate_certificate(alice_record)
        assert first.fingerprint != second.fingerprint

    def test_fingerprint_is_sha256_of_joined_fields(self, alice_record: DiplomaRecord) -> None:
        ids = SequentialIds()
        generator = CertificateGeneratorService(VERIFY_BASE_URL, id_factory=ids)

        artifact = generator.generate_certificate(alice_record)

        expected = hashlib.sha256(
            f"Alice|B.Sc. CS|Tech U|2024|{ids.issued[0]}".encode("utf-8")
        ).hexdigest()
        assert artifact.fingerprint == expected
        assert len(artifact.fingerprint) == 64

    def test_blake3_algorithm(self, alice_record: DiplomaRecord) -> None:
        ids = SequentialIds()
        generator = CertificateGeneratorService(
            VERIFY_BASE_URL, algorithm=FingerprintAlgorithm.BLAKE3, id_factory=ids
        )

        artifact = generator.generate_certificate(alice_record)

        expected = blake3.blake3(
            f"Alice|B.Sc. CS|Tech U|2024|{ids.issued[0]}".encode("utf-8")
        ).hexdigest()
        assert artifact.fingerprint == expected
        assert artifact.algorithm == FingerprintAlgorithm.BLAKE3

    def test_fingerprint_deterministic_for_fixed_id(
        self, certificate_generator: CertificateGeneratorService, alice_record: DiplomaRecord
    ) -> None:
        first = certificate_generator.compute_fingerprint(alice_record, "fixed-id")
        second = certificate_generator.compute_fingerprint(alice_record, "fixed-id")
        assert first == second

    def test_locator_ends_with_certificate_id(
        self, certificate_generator: CertificateGeneratorService
    ) -> None:
        record = DiplomaRecord("Bob", "M.Sc.", "U", 2022)

        artifact = certificate_generator.generate_certificate(record)

        assert artifact.verification_url == (
            f"{VERIFY_BASE_URL}/verify/{artifact.certificate_id}"
        )
        assert artifact.verification_url.endswith(artifact.certificate_id)

    def test_payload_contains_id_fingerprint_and_locator(
        self, certificate_generator: CertificateGeneratorService, alice_record: DiplomaRecord
    ) -> None:
        artifact = certificate_generator.generate_certificate(alice_record)

        lines = artifact.verification_payload.split("\n")
        assert lines == [
            PAYLOAD_HEADER,
            f"Certificate-ID: {artifact.certificate_id}",
            f"Fingerprint: {artifact.fingerprint}",
            f"Verify: {artifact.verification_url}",
        ]

    def test_empty_base_url_rejected(self) -> None:
        with pytest.raises(ValueError):
            CertificateGeneratorService("")


class TestVerifyFingerprint:
    def test_verifies_with_retained_id(
        self, certificate_generator: CertificateGeneratorService, alice_record: DiplomaRecord
    ) -> None:
        artifact = certificate_generator.generate_certificate(alice_record)

        assert certificate_generator.verify_fingerprint(
            alice_record, artifact.certificate_id, artifact.fingerprint.upper()
        )

    def test_rejects_tampered_record(
        self, certificate_generator: CertificateGeneratorService, alice_record: DiplomaRecord
    ) -> None:
        artifact = certificate_generator.generate_certificate(alice_record)

        assert not certificate_generator.verify_fingerprint(
            alice_record.with_year(2025), artifact.certificate_id, artifact.fingerprint
        )

    def test_rejects_other_certificate_id(
        self, certificate_generator: CertificateGeneratorService, alice_record: DiplomaRecord
    ) -> None:
        artifact = certificate_generator.generate_certificate(alice_record)
        other = certificate_generator.generate_certificate(alice_record)

        assert not certificate_generator.verify_fingerprint(
            alice_record, other.certificate_id, artifact.fingerprint
        )


def test_build_verification_url_strips_trailing_slash() -> None:
    assert build_verification_url("https://v.example/", "abc") == "https://v.example/verify/abc"


def test_build_verification_payload_layout() -> None:
    payload = build_verification_payload("id-1", "f" * 64, "https://v.example/verify/id-1")
    assert payload.startswith(PAYLOAD_HEADER + "\n")
    assert payload.endswith("Verify: https://v.example/verify/id-1")

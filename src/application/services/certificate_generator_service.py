"""Certificate fingerprint and verification payload generator.

Every export gets its own certificate:

    certificate_id  = uuid4()                       (122 random bits)
    fingerprint     = H("name|title|institution|year|certificate_id")
    payload         = fixed text block: id, full fingerprint, locator

H is SHA-256 by default, BLAKE3 when configured; both give a 256-bit
digest, hex encoded. Because the random id is hashed in, two exports of
the same diploma never share a fingerprint. Each export is its own
verifiable instance, not a canonical hash of the diploma.

Verification therefore needs the certificate id: a verifier either looks
the (id, fingerprint) pair up in a registry of issued certificates, or
recomputes with verify_fingerprint() given the retained id.
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Callable
from uuid import uuid4

import blake3

from src.application.services.base import LoggingMixin
from src.domain.models.certificate import CertificateArtifact, FingerprintAlgorithm
from src.domain.models.diploma_record import DiplomaRecord

FINGERPRINT_SEPARATOR = "|"
PAYLOAD_HEADER = "DIPLOMA CERTIFICATE"
VERIFY_PATH = "verify"


def build_verification_url(base_url: str, certificate_id: str) -> str:
    """Join the verification origin and the certificate id.

    >>> build_verification_url("https://verify.example.org/", "abc")
    'https://verify.example.org/verify/abc'
    """
    return f"{base_url.rstrip('/')}/{VERIFY_PATH}/{certificate_id}"


def build_verification_payload(
    certificate_id: str, fingerprint: str, verification_url: str
) -> str:
    """Build the exact text that goes into the QR image.

    Layout (one field per line, fixed order):

        DIPLOMA CERTIFICATE
        Certificate-ID: <certificate_id>
        Fingerprint: <fingerprint>
        Verify: <verification_url>
    """
    return "\n".join(
        (
            PAYLOAD_HEADER,
            f"Certificate-ID: {certificate_id}",
            f"Fingerprint: {fingerprint}",
            f"Verify: {verification_url}",
        )
    )


class CertificateGeneratorService(LoggingMixin):
    """Creates a fresh CertificateArtifact per export.

    Pure apart from id generation: with a fixed id factory the output is
    fully deterministic.
    """

    def __init__(
        self,
        verification_base_url: str,
        algorithm: FingerprintAlgorithm = FingerprintAlgorithm.SHA256,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            verification_base_url: Origin of the verification service.
            algorithm: Fingerprint digest.
            id_factory: Certificate id source; defaults to uuid4 strings.
        """
        if not verification_base_url:
            raise ValueError("verification_base_url must not be empty")
        self._base_url = verification_base_url
        self._algorithm = algorithm
        self._id_factory = id_factory or (lambda: str(uuid4()))
        self._init_logger(component="certificates")

    @property
    def algorithm(self) -> FingerprintAlgorithm:
        return self._algorithm

    def generate_certificate(self, record: DiplomaRecord) -> CertificateArtifact:
        """Generate certificate material for one export of a record.

        Args:
            record: The diploma being exported.

        Returns:
            A new CertificateArtifact with a never-reused certificate id.
        """
        certificate_id = self._id_factory()
        fingerprint = self.compute_fingerprint(record, certificate_id)
        verification_url = build_verification_url(self._base_url, certificate_id)
        artifact = CertificateArtifact(
            certificate_id=certificate_id,
            fingerprint=fingerprint,
            verification_url=verification_url,
            verification_payload=build_verification_payload(
                certificate_id, fingerprint, verification_url
            ),
            algorithm=self._algorithm,
        )
        self._log_operation(
            "generate_certificate", certificate_id=certificate_id
        ).info("certificate_generated", algorithm=self._algorithm.value)
        return artifact

    def compute_fingerprint(self, record: DiplomaRecord, certificate_id: str) -> str:
        """Hash the record fields and certificate id in fixed order.

        Returns:
            64-character lowercase hex digest.
        """
        content = FINGERPRINT_SEPARATOR.join(
            (*record.field_values(), certificate_id)
        ).encode("utf-8")
        if self._algorithm == FingerprintAlgorithm.BLAKE3:
            return blake3.blake3(content).hexdigest()
        return hashlib.sha256(content).hexdigest()

    def verify_fingerprint(
        self, record: DiplomaRecord, certificate_id: str, fingerprint: str
    ) -> bool:
        """Recompute a fingerprint with a retained id and compare.

        Uses constant-time comparison.
        """
        expected = self.compute_fingerprint(record, certificate_id)
        return hmac.compare_digest(expected, fingerprint.strip().lower())

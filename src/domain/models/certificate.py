"""Certificate artifact domain model.

A CertificateArtifact is the transient verification material attached to
one export of one diploma. It is generated fresh per export and never
persisted here.

Verification model:
    The certificate id is random and part of the fingerprint input, so a
    fingerprint cannot be recomputed from a diploma alone. Verifying a
    certificate means looking up the (certificate_id, fingerprint) pair in
    a registry of issued certificates, or recomputing with the retained id.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Characters of the fingerprint shown on the rendered page.
SHORT_FINGERPRINT_LENGTH = 32


class FingerprintAlgorithm(Enum):
    """Digest used for certificate fingerprints (both 256-bit)."""

    SHA256 = "sha256"
    BLAKE3 = "blake3"


@dataclass(frozen=True)
class CertificateArtifact:
    """Verification material for a single diploma export.

    Attributes:
        certificate_id: Fresh UUID4 string, unique per export.
        fingerprint: Hex digest over the record fields and certificate_id.
        verification_url: Locator ending with the certificate id.
        verification_payload: Exact text to encode in the QR image.
        algorithm: Digest used to compute the fingerprint.
    """

    certificate_id: str
    fingerprint: str
    verification_url: str
    verification_payload: str
    algorithm: FingerprintAlgorithm = FingerprintAlgorithm.SHA256

    def __post_init__(self) -> None:
        if not self.certificate_id:
            raise ValueError("certificate_id must not be empty")
        # 256-bit digest, hex encoded
        if len(self.fingerprint) != 64:
            raise ValueError(
                f"fingerprint must be 64 hex characters, got {len(self.fingerprint)}"
            )
        if not self.verification_url.endswith(self.certificate_id):
            raise ValueError("verification_url must end with the certificate_id")

    @property
    def short_fingerprint(self) -> str:
        """Truncated fingerprint for display."""
        return self.fingerprint[:SHORT_FINGERPRINT_LENGTH] + "..."

    def to_dict(self) -> dict[str, str]:
        return {
            "certificate_id": self.certificate_id,
            "fingerprint": self.fingerprint,
            "verification_url": self.verification_url,
            "algorithm": self.algorithm.value,
        }

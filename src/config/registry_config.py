"""Diploma registry configuration.

Settings for certificate generation, QR rendering, export output and
logging, with environment variable overrides.

Environment Variables:
- DIPLOMA_VERIFICATION_BASE_URL: Origin of the verification service
  (default: https://verify.diploma-registry.example)
- DIPLOMA_FINGERPRINT_ALGORITHM: sha256 or blake3 (default: sha256)
- DIPLOMA_QR_BOX_SIZE: Pixels per QR module (default: 10)
- DIPLOMA_QR_BORDER: QR quiet zone in modules (default: 4)
- DIPLOMA_QR_FILL_COLOR: QR foreground color (default: black)
- DIPLOMA_QR_BACK_COLOR: QR background color (default: white)
- DIPLOMA_EXPORT_DIR: Directory exported documents are written to
  (default: unset, documents are only returned in memory)
- DIPLOMA_ENVIRONMENT: production or development; selects the log
  renderer (default: production)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from src.application.ports.certificate_rendering import QrRenderOptions
from src.domain.models.certificate import FingerprintAlgorithm

DEFAULT_VERIFICATION_BASE_URL = "https://verify.diploma-registry.example"
ENVIRONMENTS = frozenset({"production", "development"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Unparseable values fall back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str) -> str:
    """Get a stripped string environment variable; blank means unset."""
    value = os.environ.get(key, "").strip()
    return value or default


@dataclass(frozen=True)
class RegistryConfig:
    """Configuration for the diploma registry.

    Attributes:
        verification_base_url: Origin the certificate locator is built on.
        fingerprint_algorithm: Digest for certificate fingerprints.
        qr_box_size: Pixels per QR module.
        qr_border: QR quiet-zone width in modules.
        qr_fill_color: QR foreground color.
        qr_back_color: QR background color.
        export_dir: Where exported documents are written, if anywhere.
        environment: "production" (JSON logs) or "development" (console).
    """

    verification_base_url: str = DEFAULT_VERIFICATION_BASE_URL
    fingerprint_algorithm: FingerprintAlgorithm = FingerprintAlgorithm.SHA256
    qr_box_size: int = 10
    qr_border: int = 4
    qr_fill_color: str = "black"
    qr_back_color: str = "white"
    export_dir: Path | None = None
    environment: str = "production"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.verification_base_url.startswith(("http://", "https://")):
            raise ValueError(
                "verification_base_url must be an http(s) URL, "
                f"got {self.verification_base_url!r}"
            )
        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )
        # Raises ValueError on bad sizes or equal colors
        self.qr_options()

    def qr_options(self) -> QrRenderOptions:
        return QrRenderOptions(
            box_size=self.qr_box_size,
            border=self.qr_border,
            fill_color=self.qr_fill_color,
            back_color=self.qr_back_color,
        )

    @classmethod
    def from_environment(cls) -> RegistryConfig:
        """Create config from environment variables with defaults.

        Raises:
            ValueError: Unknown fingerprint algorithm or invalid values.
        """
        algorithm_name = _get_str_env(
            "DIPLOMA_FINGERPRINT_ALGORITHM", FingerprintAlgorithm.SHA256.value
        ).lower()
        try:
            algorithm = FingerprintAlgorithm(algorithm_name)
        except ValueError:
            raise ValueError(
                f"DIPLOMA_FINGERPRINT_ALGORITHM must be one of "
                f"{[a.value for a in FingerprintAlgorithm]}, got {algorithm_name!r}"
            ) from None

        export_dir = _get_str_env("DIPLOMA_EXPORT_DIR", "")
        return cls(
            verification_base_url=_get_str_env(
                "DIPLOMA_VERIFICATION_BASE_URL", DEFAULT_VERIFICATION_BASE_URL
            ),
            fingerprint_algorithm=algorithm,
            qr_box_size=_get_int_env("DIPLOMA_QR_BOX_SIZE", 10),
            qr_border=_get_int_env("DIPLOMA_QR_BORDER", 4),
            qr_fill_color=_get_str_env("DIPLOMA_QR_FILL_COLOR", "black"),
            qr_back_color=_get_str_env("DIPLOMA_QR_BACK_COLOR", "white"),
            export_dir=Path(export_dir) if export_dir else None,
            environment=_get_str_env("DIPLOMA_ENVIRONMENT", "production").lower(),
        )


# Pre-defined configurations

# Default production config
DEFAULT_REGISTRY_CONFIG = RegistryConfig()

# Testing config: fixed origin, small QR images, console logs
TEST_REGISTRY_CONFIG = RegistryConfig(
    verification_base_url="https://verify.test.example",
    qr_box_size=2,
    qr_border=1,
    environment="development",
)

"""Unit tests for registry configuration."""

from pathlib import Path

import pytest

from src.application.ports.certificate_rendering import QrRenderOptions
from src.config.registry_config import (
    DEFAULT_REGISTRY_CONFIG,
    DEFAULT_VERIFICATION_BASE_URL,
    TEST_REGISTRY_CONFIG,
    RegistryConfig,
)
from src.domain.models.certificate import FingerprintAlgorithm

ENV_VARS = (
    "DIPLOMA_VERIFICATION_BASE_URL",
    "DIPLOMA_FINGERPRINT_ALGORITHM",
    "DIPLOMA_QR_BOX_SIZE",
    "DIPLOMA_QR_BORDER",
    "DIPLOMA_QR_FILL_COLOR",
    "DIPLOMA_QR_BACK_COLOR",
    "DIPLOMA_EXPORT_DIR",
    "DIPLOMA_ENVIRONMENT",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestRegistryConfig:
    def test_defaults(self) -> None:
        config = DEFAULT_REGISTRY_CONFIG
        assert config.verification_base_url == DEFAULT_VERIFICATION_BASE_URL
        assert config.fingerprint_algorithm == FingerprintAlgorithm.SHA256
        assert config.qr_options() == QrRenderOptions()
        assert config.export_dir is None
        assert config.environment == "production"

    def test_test_config_uses_console_logs(self) -> None:
        assert TEST_REGISTRY_CONFIG.environment == "development"

    def test_rejects_non_http_base_url(self) -> None:
        with pytest.raises(ValueError, match="http"):
            RegistryConfig(verification_base_url="verify.example")

    def test_rejects_unknown_environment(self) -> None:
        with pytest.raises(ValueError, match="environment"):
            RegistryConfig(environment="staging")

    @pytest.mark.parametrize(
        "overrides",
        [{"qr_box_size": 0}, {"qr_border": -1}, {"qr_fill_color": "white"}],
    )
    def test_rejects_invalid_qr_options(self, overrides: dict) -> None:
        with pytest.raises(ValueError):
            RegistryConfig(**overrides)


class TestFromEnvironment:
    def test_empty_environment_gives_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        assert RegistryConfig.from_environment() == DEFAULT_REGISTRY_CONFIG

    def test_reads_every_variable(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("DIPLOMA_VERIFICATION_BASE_URL", "https://certs.example.edu")
        clean_env.setenv("DIPLOMA_FINGERPRINT_ALGORITHM", "BLAKE3")
        clean_env.setenv("DIPLOMA_QR_BOX_SIZE", "6")
        clean_env.setenv("DIPLOMA_QR_BORDER", "2")
        clean_env.setenv("DIPLOMA_QR_FILL_COLOR", "navy")
        clean_env.setenv("DIPLOMA_QR_BACK_COLOR", "ivory")
        clean_env.setenv("DIPLOMA_EXPORT_DIR", str(tmp_path))
        clean_env.setenv("DIPLOMA_ENVIRONMENT", "development")

        config = RegistryConfig.from_environment()

        assert config.verification_base_url == "https://certs.example.edu"
        assert config.fingerprint_algorithm == FingerprintAlgorithm.BLAKE3
        assert config.qr_options() == QrRenderOptions(6, 2, "navy", "ivory")
        assert config.export_dir == tmp_path
        assert config.environment == "development"

    def test_unparseable_int_falls_back(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("DIPLOMA_QR_BOX_SIZE", "large")
        assert RegistryConfig.from_environment().qr_box_size == 10

    def test_unknown_algorithm_rejected(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("DIPLOMA_FINGERPRINT_ALGORITHM", "md5")
        with pytest.raises(ValueError, match="DIPLOMA_FINGERPRINT_ALGORITHM"):
            RegistryConfig.from_environment()

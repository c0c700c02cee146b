"""Unit tests for diploma registry dependency wiring."""

from collections.abc import Iterator

import pytest

from src.bootstrap import diploma_registry
from src.config.registry_config import TEST_REGISTRY_CONFIG
from src.domain.models.diploma_record import DiplomaRecord
from src.domain.models.role import Role
from src.infrastructure.adapters.qrcode_encoder import QrCodeEncoder
from src.infrastructure.stubs.document_renderer_stub import DocumentRendererStub
from src.infrastructure.stubs.qr_encoder_stub import QrEncoderStub


@pytest.fixture(autouse=True)
def reset_wiring() -> Iterator[None]:
    diploma_registry.reset_diploma_registry_dependencies()
    yield
    diploma_registry.reset_diploma_registry_dependencies()


class TestDiplomaRegistryWiring:
    def test_singletons_are_reused(self) -> None:
        assert diploma_registry.get_command_processor() is diploma_registry.get_command_processor()
        assert diploma_registry.get_export_service() is diploma_registry.get_export_service()

    def test_default_qr_encoder_is_real_adapter(self) -> None:
        assert isinstance(diploma_registry.get_qr_encoder(), QrCodeEncoder)

    def test_generator_follows_config(self) -> None:
        diploma_registry.set_registry_config(TEST_REGISTRY_CONFIG)

        generator = diploma_registry.get_certificate_generator()

        assert generator.algorithm == TEST_REGISTRY_CONFIG.fingerprint_algorithm

    @pytest.mark.asyncio
    async def test_development_wallet_is_issuer(self) -> None:
        processor = diploma_registry.get_command_processor()

        result = await processor.connect()

        assert result.succeeded
        assert processor.role == Role.ISSUER

    def test_export_with_injected_stubs(self) -> None:
        diploma_registry.set_registry_config(TEST_REGISTRY_CONFIG)
        diploma_registry.set_qr_encoder(QrEncoderStub())
        diploma_registry.set_document_renderer(DocumentRendererStub())

        export = diploma_registry.get_export_service().export(
            DiplomaRecord("Alice", "B.Sc. CS", "Tech U", 2024)
        )

        assert export.certificate.verification_url.startswith(
            TEST_REGISTRY_CONFIG.verification_base_url + "/verify/"
        )

    def test_new_config_rebuilds_certificate_services(self) -> None:
        first_generator = diploma_registry.get_certificate_generator()
        first_export_service = diploma_registry.get_export_service()

        diploma_registry.set_registry_config(TEST_REGISTRY_CONFIG)
        diploma_registry.set_qr_encoder(QrEncoderStub())
        diploma_registry.set_document_renderer(DocumentRendererStub())

        assert diploma_registry.get_certificate_generator() is not first_generator
        assert diploma_registry.get_export_service() is not first_export_service
        export = diploma_registry.get_export_service().export(
            DiplomaRecord("Alice", "B.Sc. CS", "Tech U", 2024)
        )
        assert export.certificate.verification_url.startswith(
            TEST_REGISTRY_CONFIG.verification_base_url + "/verify/"
        )

"""Bootstrap wiring for diploma registry dependencies.

Defaults are the in-memory wallet and ledger stubs (development mode,
admin DEV_ADMIN_ADDRESS) and the real QR and PDF adapters. A deployment
with real collaborators installs them with set_wallet_provider() and
set_ledger_connector() before the first get_command_processor() call.
"""

from __future__ import annotations

from src.application.ports.certificate_rendering import (
    DocumentRendererProtocol,
    QrEncoderProtocol,
)
from src.application.ports.diploma_ledger import LedgerConnectorProtocol
from src.application.ports.wallet_provider import WalletProviderProtocol
from src.application.services.certificate_generator_service import (
    CertificateGeneratorService,
)
from src.application.services.diploma_command_processor import (
    DiplomaCommandProcessor,
)
from src.application.services.diploma_export_service import DiplomaExportService
from src.application.services.identity_resolver_service import (
    IdentityResolverService,
)
from src.config.registry_config import RegistryConfig
from src.infrastructure.adapters.qrcode_encoder import QrCodeEncoder
from src.infrastructure.adapters.reportlab_document_renderer import (
    ReportLabDocumentRenderer,
)
from src.infrastructure.stubs.diploma_ledger_stub import (
    DiplomaLedgerConnectorStub,
    DiplomaLedgerState,
)
from src.infrastructure.stubs.wallet_provider_stub import WalletProviderStub

# Admin of the in-memory development ledger
DEV_ADMIN_ADDRESS = "0x00000000000000000000000000000000000000A1"

_config: RegistryConfig | None = None
_wallet_provider: WalletProviderProtocol | None = None
_ledger_connector: LedgerConnectorProtocol | None = None
_qr_encoder: QrEncoderProtocol | None = None
_document_renderer: DocumentRendererProtocol | None = None
_certificate_generator: CertificateGeneratorService | None = None
_export_service: DiplomaExportService | None = None
_command_processor: DiplomaCommandProcessor | None = None


def get_registry_config() -> RegistryConfig:
    """Get registry config, read from the environment on first use."""
    global _config
    if _config is None:
        _config = RegistryConfig.from_environment()
    return _config


def get_wallet_provider() -> WalletProviderProtocol:
    """Get wallet provider instance."""
    global _wallet_provider
    if _wallet_provider is None:
        _wallet_provider = WalletProviderStub([DEV_ADMIN_ADDRESS])
    return _wallet_provider


def get_ledger_connector() -> LedgerConnectorProtocol:
    """Get ledger connector instance."""
    global _ledger_connector
    if _ledger_connector is None:
        _ledger_connector = DiplomaLedgerConnectorStub(
            DiplomaLedgerState(admin=DEV_ADMIN_ADDRESS)
        )
    return _ledger_connector


def get_qr_encoder() -> QrEncoderProtocol:
    """Get QR encoder instance."""
    global _qr_encoder
    if _qr_encoder is None:
        _qr_encoder = QrCodeEncoder()
    return _qr_encoder


def get_document_renderer() -> DocumentRendererProtocol:
    """Get document renderer instance."""
    global _document_renderer
    if _document_renderer is None:
        _document_renderer = ReportLabDocumentRenderer()
    return _document_renderer


def get_certificate_generator() -> CertificateGeneratorService:
    """Get certificate generator configured from the registry config."""
    global _certificate_generator
    if _certificate_generator is None:
        config = get_registry_config()
        _certificate_generator = CertificateGeneratorService(
            verification_base_url=config.verification_base_url,
            algorithm=config.fingerprint_algorithm,
        )
    return _certificate_generator


def get_export_service() -> DiplomaExportService:
    """Get export service instance."""
    global _export_service
    if _export_service is None:
        _export_service = DiplomaExportService(
            generator=get_certificate_generator(),
            qr_encoder=get_qr_encoder(),
            renderer=get_document_renderer(),
            qr_options=get_registry_config().qr_options(),
        )
    return _export_service


def get_command_processor() -> DiplomaCommandProcessor:
    """Get the session command processor."""
    global _command_processor
    if _command_processor is None:
        resolver = IdentityResolverService(
            wallet=get_wallet_provider(),
            connector=get_ledger_connector(),
        )
        _command_processor = DiplomaCommandProcessor(resolver=resolver)
    return _command_processor


def reset_diploma_registry_dependencies() -> None:
    """Reset all singleton instances for testing."""
    global _config
    global _wallet_provider
    global _ledger_connector
    global _qr_encoder
    global _document_renderer
    global _certificate_generator
    global _export_service
    global _command_processor

    _config = None
    _wallet_provider = None
    _ledger_connector = None
    _qr_encoder = None
    _document_renderer = None
    _certificate_generator = None
    _export_service = None
    _command_processor = None


def set_registry_config(config: RegistryConfig) -> None:
    """Set custom registry config.

    Services built from the previous config are dropped so the next get_*
    call rebuilds them.
    """
    global _config
    global _certificate_generator
    global _export_service
    _config = config
    _certificate_generator = None
    _export_service = None


def set_wallet_provider(wallet: WalletProviderProtocol) -> None:
    """Set the wallet provider (real wallet bridge or test stub)."""
    global _wallet_provider
    _wallet_provider = wallet


def set_ledger_connector(connector: LedgerConnectorProtocol) -> None:
    """Set the ledger connector (real contract client or test stub)."""
    global _ledger_connector
    _ledger_connector = connector


def set_qr_encoder(encoder: QrEncoderProtocol) -> None:
    """Set custom QR encoder for testing."""
    global _qr_encoder
    global _export_service
    _qr_encoder = encoder
    _export_service = None


def set_document_renderer(renderer: DocumentRendererProtocol) -> None:
    """Set custom document renderer for testing."""
    global _document_renderer
    global _export_service
    _document_renderer = renderer
    _export_service = None

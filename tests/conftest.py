"""
Pytest configuration and shared fixtures for diploma registry tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborator failures
- Ledger and wallet are the in-memory stubs from src/infrastructure/stubs
- Unit tests go in tests/unit/, mirroring src/
"""

from collections.abc import Iterator

import pytest
import structlog

from src.application.services.certificate_generator_service import (
    CertificateGeneratorService,
)
from src.application.services.diploma_command_processor import (
    DiplomaCommandProcessor,
)
from src.application.services.identity_resolver_service import (
    IdentityResolverService,
)
from src.domain.models.diploma_record import DiplomaRecord
from src.infrastructure.stubs.diploma_ledger_stub import (
    DiplomaLedgerConnectorStub,
    DiplomaLedgerState,
    DiplomaLedgerStub,
)
from src.infrastructure.stubs.wallet_provider_stub import WalletProviderStub
from tests.helpers import ADMIN, OTHER_STUDENT, STUDENT, VERIFY_BASE_URL


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture
def admin_address() -> str:
    return ADMIN


@pytest.fixture
def student_address() -> str:
    return STUDENT


@pytest.fixture
def other_student_address() -> str:
    return OTHER_STUDENT


@pytest.fixture
def alice_record() -> DiplomaRecord:
    return DiplomaRecord("Alice", "B.Sc. CS", "Tech U", 2024)


@pytest.fixture
def bob_record() -> DiplomaRecord:
    return DiplomaRecord("Bob", "M.Sc. Math", "State U", 2022)


@pytest.fixture
def ledger_state() -> DiplomaLedgerState:
    """Fresh in-memory ledger administered by ADMIN."""
    return DiplomaLedgerState(admin=ADMIN)


@pytest.fixture
def connector(ledger_state: DiplomaLedgerState) -> DiplomaLedgerConnectorStub:
    return DiplomaLedgerConnectorStub(ledger_state)


@pytest.fixture
def admin_ledger(ledger_state: DiplomaLedgerState) -> DiplomaLedgerStub:
    """Ledger handle signed by the admin."""
    return DiplomaLedgerStub(ledger_state, ADMIN)


@pytest.fixture
def admin_wallet() -> WalletProviderStub:
    return WalletProviderStub([ADMIN])


@pytest.fixture
def student_wallet() -> WalletProviderStub:
    return WalletProviderStub([STUDENT])


@pytest.fixture
def issuer_processor(
    admin_wallet: WalletProviderStub, connector: DiplomaLedgerConnectorStub
) -> DiplomaCommandProcessor:
    """Processor whose wallet holds the admin account (not yet connected)."""
    return DiplomaCommandProcessor(
        resolver=IdentityResolverService(wallet=admin_wallet, connector=connector)
    )


@pytest.fixture
def holder_processor(
    student_wallet: WalletProviderStub, connector: DiplomaLedgerConnectorStub
) -> DiplomaCommandProcessor:
    """Processor whose wallet holds a student account (not yet connected)."""
    return DiplomaCommandProcessor(
        resolver=IdentityResolverService(wallet=student_wallet, connector=connector)
    )


@pytest.fixture
def certificate_generator() -> CertificateGeneratorService:
    return CertificateGeneratorService(verification_base_url=VERIFY_BASE_URL)

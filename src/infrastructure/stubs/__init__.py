"""Infrastructure stubs for development and testing.

This module provides stub implementations of the registry's ports for
use in development and testing environments.

Available stubs:
- WalletProviderStub: Configurable accounts, prompt counting, refusal
- DiplomaLedgerState / DiplomaLedgerStub / DiplomaLedgerConnectorStub:
  In-memory contract with call recording, manual confirmation and
  failure injection
- QrEncoderStub: Fake PNG bytes carrying the payload
- DocumentRendererStub: Plain-text rendering of the visible fields

WARNING: These stubs are NOT for production use.
Production implementations are in src/infrastructure/adapters/.
"""

from src.infrastructure.stubs.diploma_ledger_stub import (
    INVALID_INDEX_REASON,
    ONLY_ADMIN_REASON,
    DiplomaLedgerConnectorStub,
    DiplomaLedgerState,
    DiplomaLedgerStub,
    LedgerCall,
    StubPendingTransaction,
)
from src.infrastructure.stubs.document_renderer_stub import DocumentRendererStub
from src.infrastructure.stubs.qr_encoder_stub import QrEncoderStub
from src.infrastructure.stubs.wallet_provider_stub import WalletProviderStub

__all__ = [
    "INVALID_INDEX_REASON",
    "ONLY_ADMIN_REASON",
    "DiplomaLedgerConnectorStub",
    "DiplomaLedgerState",
    "DiplomaLedgerStub",
    "DocumentRendererStub",
    "LedgerCall",
    "QrEncoderStub",
    "StubPendingTransaction",
    "WalletProviderStub",
]

"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- WalletProviderProtocol: Caller authentication (wallet/signing provider)
- LedgerConnectorProtocol / DiplomaLedgerProtocol: Diploma contract access
- QrEncoderProtocol: Verification payload to QR image
- DocumentRendererProtocol: Export document layout
"""

from src.application.ports.certificate_rendering import (
    DocumentRendererProtocol,
    QrEncoderProtocol,
    QrRenderOptions,
)
from src.application.ports.diploma_ledger import (
    DiplomaLedgerProtocol,
    LedgerConnectorProtocol,
    LedgerSubmissionError,
    PendingTransactionProtocol,
    SignatureRejectedError,
    TransactionReceipt,
)
from src.application.ports.wallet_provider import WalletProviderProtocol

__all__: list[str] = [
    "DiplomaLedgerProtocol",
    "DocumentRendererProtocol",
    "LedgerConnectorProtocol",
    "LedgerSubmissionError",
    "PendingTransactionProtocol",
    "QrEncoderProtocol",
    "QrRenderOptions",
    "SignatureRejectedError",
    "TransactionReceipt",
    "WalletProviderProtocol",
]

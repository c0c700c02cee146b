"""Application services - Use case orchestration.

This module contains application services that orchestrate domain
operations and coordinate with the ledger, wallet and rendering ports.

Available services:
- IdentityResolverService: Caller/admin resolution and session binding
- AuthorizationGate: Role check before any ledger call
- RecordStoreClient: Ledger reads, mutations and the record cache
- CertificateGeneratorService: Per-export certificate id and fingerprint
- DiplomaExportService: QR encoding and document rendering of a diploma
- DiplomaCommandProcessor: Command state machine and session events
"""

from src.application.services.authorization_gate import (
    ISSUER_ONLY_OPERATIONS,
    AuthorizationGate,
    Operation,
)
from src.application.services.certificate_generator_service import (
    CertificateGeneratorService,
    build_verification_payload,
    build_verification_url,
)
from src.application.services.diploma_command_processor import (
    DiplomaCommandProcessor,
)
from src.application.services.diploma_export_service import (
    DiplomaExport,
    DiplomaExportService,
)
from src.application.services.identity_resolver_service import (
    IdentityResolverService,
)
from src.application.services.record_store_client import (
    MutationListener,
    RecordStoreClient,
)
from src.application.services.session_context import SessionContext

__all__ = [
    "ISSUER_ONLY_OPERATIONS",
    "AuthorizationGate",
    "CertificateGeneratorService",
    "DiplomaCommandProcessor",
    "DiplomaExport",
    "DiplomaExportService",
    "IdentityResolverService",
    "MutationListener",
    "Operation",
    "RecordStoreClient",
    "SessionContext",
    "build_verification_payload",
    "build_verification_url",
]

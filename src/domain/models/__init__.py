"""Domain models for the diploma registry.

Contains value objects and domain models that represent
core business concepts. These models contain no infrastructure
dependencies.
"""

from src.domain.models.address import addresses_match, normalize_address
from src.domain.models.certificate import CertificateArtifact, FingerprintAlgorithm
from src.domain.models.command import CommandResult, CommandState
from src.domain.models.diploma_record import (
    DiplomaDraft,
    DiplomaRecord,
    filter_records,
    matches_query,
    validate_record,
)
from src.domain.models.export_document import ExportDocument, export_filename
from src.domain.models.mutation import MutationKind, MutationReceipt, MutationStatus
from src.domain.models.record_arena import RecordArena, StoredDiploma
from src.domain.models.role import Role, derive_role

__all__: list[str] = [
    "CertificateArtifact",
    "CommandResult",
    "CommandState",
    "DiplomaDraft",
    "DiplomaRecord",
    "ExportDocument",
    "FingerprintAlgorithm",
    "MutationKind",
    "MutationReceipt",
    "MutationStatus",
    "RecordArena",
    "Role",
    "StoredDiploma",
    "addresses_match",
    "derive_role",
    "export_filename",
    "filter_records",
    "matches_query",
    "normalize_address",
    "validate_record",
]

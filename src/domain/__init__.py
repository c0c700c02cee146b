"""
Domain layer - Pure business logic for the diploma registry.

This layer contains:
- Domain models (DiplomaRecord, RecordArena, CertificateArtifact, ...)
- Roles and address comparison rules
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or
bootstrap. Only stdlib and typing imports are allowed.
"""

from src.domain.exceptions import DiplomaRegistryError

__all__: list[str] = ["DiplomaRegistryError"]

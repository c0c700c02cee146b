"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from src.bootstrap.diploma_registry import get_registry_config
from src.infrastructure.observability import configure_structlog as _configure_structlog


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog, defaulting to the registry config's environment."""
    _configure_structlog(environment=environment or get_registry_config().environment)


__all__ = ["configure_structlog"]

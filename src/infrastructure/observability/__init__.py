"""Observability: structured logging and per-command correlation ids.

Usage:
    from src.infrastructure.observability import configure_structlog

    configure_structlog(environment="development")
"""

from src.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from src.infrastructure.observability.logging import (
    build_processors,
    configure_structlog,
    get_logger_for_service,
)

__all__: list[str] = [
    "build_processors",
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger_for_service",
    "set_correlation_id",
]

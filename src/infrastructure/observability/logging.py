"""Structured logging configuration with structlog.

Two output modes:
- production: one JSON object per line, for log shipping
- development: colored console lines

Log Entry Format (production):
    {
        "timestamp": "2024-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "mutation_confirmed",
        "correlation_id": "uuid",
        "service": "RecordStoreClient",
        "component": "diploma_registry",
        "holder": "0x...",
        "tx_hash": "0x...",
        ...
    }

The level comes from LOG_LEVEL (default INFO). Addresses and tx hashes
are logged, record contents are not.
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from src.infrastructure.observability.correlation import correlation_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Read LOG_LEVEL, falling back to INFO for unknown names."""
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def build_processors(environment: str) -> list[Processor]:
    """Return the processor chain for an environment.

    Args:
        environment: "production" for JSON, anything else for console.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if environment == "production":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog once, at process startup.

    Args:
        environment: "production" (JSON) or "development" (console).
    """
    structlog.configure(
        processors=build_processors(environment),
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_service(
    service_name: str, component: str = "diploma_registry"
) -> structlog.BoundLogger:
    """Return a logger with service and component bound.

    For module-level code that is not a LoggingMixin service (adapters,
    scripts).
    """
    return structlog.get_logger().bind(
        service=service_name,
        component=component,
    )

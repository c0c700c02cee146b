"""Correlation IDs for diploma commands.

Every command the processor runs (connect, lookup, create, update,
delete) sets a fresh correlation id, so all log lines of one command
(validation, submission, confirmation, refresh) can be grouped together.
The id lives in a ContextVar and therefore follows the command across
awaits without being passed around.

Usage:
    set_correlation_id(generate_correlation_id())
    ...
    processors = [..., correlation_id_processor, ...]
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string means "no command in progress"
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Return a new UUID4 correlation id."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Return the current command's correlation id, or "" outside a command."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Make correlation_id current for the running context.

    Args:
        correlation_id: Id to attach to subsequent log entries.
    """
    _correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the current correlation id.

    Entries that already carry one (bound by LoggingMixin) keep it.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict

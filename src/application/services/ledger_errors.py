"""Normalization of ledger collaborator failures.

Whatever the wallet or contract raises (a provider error object, a revert,
a user cancelling the signature prompt) reaches callers as a LedgerError
carrying a readable reason, never as the raw collaborator exception.
"""

from __future__ import annotations

from src.application.ports.diploma_ledger import (
    USER_REJECTED_CODE,
    SignatureRejectedError,
)
from src.domain.errors.ledger import LedgerError

_USER_REJECTED_CODES: frozenset[int | str] = frozenset(
    {USER_REJECTED_CODE, "ACTION_REJECTED"}
)


def is_user_rejection(exc: BaseException) -> bool:
    """Check whether a collaborator error is a declined signature."""
    if isinstance(exc, SignatureRejectedError):
        return True
    code = getattr(exc, "code", None)
    return isinstance(code, (int, str)) and code in _USER_REJECTED_CODES


def extract_reason(exc: BaseException) -> str | None:
    """Pick the most human-readable reason from a collaborator error.

    Preference order: a ``reason`` attribute (contract revert reason),
    then the exception message. Returns None when neither has text.
    """
    reason = getattr(exc, "reason", None)
    if isinstance(reason, str) and reason.strip():
        return reason.strip()
    message = str(exc).strip()
    return message or None


def to_ledger_error(exc: BaseException) -> LedgerError:
    """Convert any collaborator failure into a LedgerError.

    Already-normalized errors pass through unchanged.
    """
    if isinstance(exc, LedgerError):
        return exc
    return LedgerError(extract_reason(exc), user_rejected=is_user_rejection(exc))

"""Ledger submission errors.

LedgerError is the single normalized shape for anything that went wrong
on the ledger side: a rejected submission, a signature the user declined,
a ledger-side revert, or a failed read. It never carries the raw
collaborator object, only its human-readable reason.
"""

from __future__ import annotations

from typing import Any

from src.domain.exceptions import DiplomaRegistryError

GENERIC_LEDGER_MESSAGE = "The ledger rejected the request"


class LedgerError(DiplomaRegistryError):
    """Raised when the external ledger reports a failure.

    Recoverable: the caller may re-invoke the command. Nothing is retried
    automatically.

    Attributes:
        reason: Ledger-supplied human-readable reason, if any.
        user_rejected: True when the user declined to sign.
        mutation_confirmed: True when the ledger applied the mutation and
            only reloading the records afterwards failed.
    """

    def __init__(
        self,
        reason: str | None = None,
        *,
        user_rejected: bool = False,
        mutation_confirmed: bool = False,
    ) -> None:
        """Initialize ledger error.

        Args:
            reason: Human-readable reason reported by the ledger.
            user_rejected: Whether the failure is a signing cancellation.
            mutation_confirmed: Whether the mutation itself went through.
        """
        self.reason = reason
        self.user_rejected = user_rejected
        self.mutation_confirmed = mutation_confirmed
        super().__init__(reason or GENERIC_LEDGER_MESSAGE)

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "reason": self.reason,
            "user_rejected": self.user_rejected,
            "mutation_confirmed": self.mutation_confirmed,
        }

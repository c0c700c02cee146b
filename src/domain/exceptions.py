"""Base exception classes for the diploma registry domain layer."""

from __future__ import annotations

from typing import Any


class DiplomaRegistryError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application: the
    command processor turns any DiplomaRegistryError into a failed
    command result instead of letting it escape the session.

    Subclasses:
    - IdentityError / NoWalletError
    - InvalidAddressError
    - ValidationError
    - AuthorizationError
    - LedgerError
    - NotReadyError
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)

    @property
    def kind(self) -> str:
        """Short error kind used in logs and command results."""
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for structured logging.

        Returns:
            Dictionary with the error kind and message.
        """
        return {"kind": self.kind, "message": self.message}

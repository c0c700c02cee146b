"""Diploma command errors.

Errors raised locally, before any ledger call is attempted:
- InvalidAddressError: Address failed the ledger's format validator
- ValidationError: Required field missing or malformed
- AuthorizationError: Role does not permit the command

All three are recoverable: the caller re-prompts (validation) or gives up
without a role change (authorization). None of them ever leaves a
partial mutation behind.
"""

from __future__ import annotations

from typing import Any

from src.domain.exceptions import DiplomaRegistryError


class InvalidAddressError(DiplomaRegistryError):
    """Raised when an address does not pass ledger format validation.

    Attributes:
        address: The rejected address input.
    """

    def __init__(self, address: str, message: str | None = None) -> None:
        self.address = address
        super().__init__(message or f"Invalid address: {address!r}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "address": self.address}


class ValidationError(DiplomaRegistryError):
    """Raised when a diploma command carries missing or malformed input.

    Attributes:
        fields: Names of the offending fields (may be empty for
            non-field problems such as an unknown record index).
    """

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        """Initialize validation error.

        Args:
            message: Human-readable error message.
            fields: Offending field names.
        """
        self.fields = fields
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "fields": list(self.fields)}


class AuthorizationError(DiplomaRegistryError):
    """Raised when the caller's role does not permit an operation.

    This is a UX-level gate; the ledger enforces its own admin check.

    Attributes:
        role: Value of the caller's role.
        operation: Value of the denied operation.
    """

    def __init__(self, role: str, operation: str, message: str | None = None) -> None:
        self.role = role
        self.operation = operation
        super().__init__(
            message or f"Role '{role}' is not permitted to perform '{operation}'"
        )

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "role": self.role, "operation": self.operation}

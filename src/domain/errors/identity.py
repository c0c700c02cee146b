"""Identity and session readiness errors.

This module defines errors raised while resolving who the caller is:
- IdentityError: Base class for identity resolution failures
- NoWalletError: No signing collaborator is present
- NotReadyError: Identity or admin not yet resolved

Developer Golden Rules:
1. FAIL LOUD - A missing wallet is reported with a remediation hint
2. DEFER, DON'T CRASH - NotReadyError means "try again later"
"""

from __future__ import annotations

from src.domain.exceptions import DiplomaRegistryError

NO_WALLET_INSTRUCTION = (
    "No wallet detected. Install a browser wallet such as MetaMask, "
    "or connect a signing provider, then reload the session."
)


class IdentityError(DiplomaRegistryError):
    """Raised when the caller's identity cannot be resolved.

    Covers refused account access and empty account lists. Subclassed by
    NoWalletError for the case where no signing provider exists at all.
    """

    pass


class NoWalletError(IdentityError):
    """Raised when no signing collaborator is available.

    Fatal for the session: the user must install or connect a wallet
    outside of this system before anything else can happen.

    Example:
        >>> raise NoWalletError()
        Traceback (most recent call last):
            ...
        NoWalletError: No wallet detected. ...
    """

    def __init__(self, message: str = NO_WALLET_INSTRUCTION) -> None:
        super().__init__(message)


class NotReadyError(DiplomaRegistryError):
    """Raised when an operation needs a session that is not resolved yet.

    The identity resolver has not finished (or the session was invalidated
    by an account change). The operation should be deferred, not reported
    as a hard failure.

    Attributes:
        operation: Name of the operation that was attempted.
    """

    def __init__(self, operation: str, message: str | None = None) -> None:
        """Initialize not-ready error.

        Args:
            operation: The operation that needed the session.
            message: Optional override for the default message.
        """
        self.operation = operation
        super().__init__(
            message
            or f"Session not ready for '{operation}': identity or admin still loading"
        )

    def to_dict(self) -> dict[str, str]:
        return {**super().to_dict(), "operation": self.operation}

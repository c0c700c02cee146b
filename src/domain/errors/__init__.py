"""Domain errors for the diploma registry.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from DiplomaRegistryError.
"""

from src.domain.errors.diploma import (
    AuthorizationError,
    InvalidAddressError,
    ValidationError,
)
from src.domain.errors.identity import IdentityError, NoWalletError, NotReadyError
from src.domain.errors.ledger import LedgerError

__all__: list[str] = [
    "AuthorizationError",
    "IdentityError",
    "InvalidAddressError",
    "LedgerError",
    "NoWalletError",
    "NotReadyError",
    "ValidationError",
]

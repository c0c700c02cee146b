"""Session context.

A SessionContext exists only after the identity resolver has finished:
the caller is known, the ledger handle is bound and the admin address is
loaded. It is invalidated when the wallet switches account or
disconnects, after which every read of it raises NotReadyError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.application.ports.diploma_ledger import DiplomaLedgerProtocol
from src.domain.errors.identity import NotReadyError
from src.domain.models.address import addresses_match
from src.domain.models.role import Role, derive_role


@dataclass
class SessionContext:
    """Resolved identity for one connected caller.

    Attributes:
        caller_address: The connected account.
        admin_address: The ledger's designated admin.
        ledger: Ledger handle bound to caller_address.
        resolved_at: When resolution completed (UTC).
    """

    caller_address: str
    admin_address: str
    ledger: DiplomaLedgerProtocol
    resolved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _active: bool = field(default=True, repr=False)

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def role(self) -> Role:
        """Caller role, derived on every read from the two addresses."""
        self.require_active("role")
        return derive_role(self.caller_address, self.admin_address)

    @property
    def is_issuer(self) -> bool:
        return self.role == Role.ISSUER

    def owns(self, address: str) -> bool:
        """Check whether an address is the caller's own."""
        return addresses_match(self.caller_address, address)

    def require_active(self, operation: str) -> None:
        """Guard reads of an invalidated session.

        Raises:
            NotReadyError: If the session was invalidated.
        """
        if not self._active:
            raise NotReadyError(operation, "Session was invalidated; reconnect first")

    def invalidate(self) -> None:
        self._active = False

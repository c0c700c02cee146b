"""Authorization gate for diploma operations.

A UX-level check run before any ledger call: the contract enforces its
own admin rule, so this gate exists to fail fast and explain why, not to
be the security boundary.

Rules:
- create, update, delete and lookup of an arbitrary address: ISSUER only
- lookup of the caller's own records: any role, own address only
"""

from __future__ import annotations

from enum import Enum

from src.domain.errors.diploma import AuthorizationError
from src.domain.models.address import addresses_match
from src.domain.models.role import Role


class Operation(Enum):
    """Operations the gate decides on."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LOOKUP_ANY = "lookup-by-arbitrary-address"
    LOOKUP_OWN = "lookup-own-records"


ISSUER_ONLY_OPERATIONS: frozenset[Operation] = frozenset(
    {
        Operation.CREATE,
        Operation.UPDATE,
        Operation.DELETE,
        Operation.LOOKUP_ANY,
    }
)


class AuthorizationGate:
    """Stateless role check.

    Deciding never touches state and never calls out, so a denial leaves
    nothing to undo.
    """

    def is_allowed(
        self,
        role: Role,
        operation: Operation,
        *,
        caller: str | None = None,
        target: str | None = None,
    ) -> bool:
        """Return whether the role may perform the operation.

        Args:
            role: The caller's resolved role.
            operation: The operation attempted.
            caller: Caller address (needed for LOOKUP_OWN).
            target: Holder address the operation targets.
        """
        if operation in ISSUER_ONLY_OPERATIONS:
            return role == Role.ISSUER
        if operation == Operation.LOOKUP_OWN:
            return addresses_match(caller, target)
        return False

    def authorize(
        self,
        role: Role,
        operation: Operation,
        *,
        caller: str | None = None,
        target: str | None = None,
    ) -> None:
        """Allow the operation or raise.

        Raises:
            AuthorizationError: If the role does not permit the operation.
        """
        if self.is_allowed(role, operation, caller=caller, target=target):
            return
        if operation == Operation.LOOKUP_OWN:
            raise AuthorizationError(
                role.value,
                operation.value,
                "Holders may only look up their own diplomas",
            )
        raise AuthorizationError(
            role.value,
            operation.value,
            f"Only the registry admin may {operation.value.replace('-', ' ')}",
        )

    @staticmethod
    def lookup_operation(caller: str, target: str) -> Operation:
        """Pick the lookup operation for a target address."""
        if addresses_match(caller, target):
            return Operation.LOOKUP_OWN
        return Operation.LOOKUP_ANY

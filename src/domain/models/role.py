"""Caller roles.

A role is derived, never stored: it is recomputed from the caller and the
ledger's admin address each time either one changes.
"""

from __future__ import annotations

from enum import Enum

from src.domain.models.address import addresses_match


class Role(Enum):
    """Role of the connected caller.

    Values:
        ISSUER: The caller is the ledger's admin and may mutate records.
        HOLDER: Any other caller; may only read its own records.
    """

    ISSUER = "issuer"
    HOLDER = "holder"


def derive_role(caller_address: str, admin_address: str) -> Role:
    """Derive the caller's role by case-insensitive address comparison.

    Args:
        caller_address: The connected account.
        admin_address: The ledger's designated admin.

    Returns:
        Role.ISSUER when both addresses match, Role.HOLDER otherwise.
    """
    if addresses_match(caller_address, admin_address):
        return Role.ISSUER
    return Role.HOLDER

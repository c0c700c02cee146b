"""Participant address helpers.

Addresses are opaque strings owned by the ledger. The ledger collaborator
decides what is well-formed; this module only provides the comparisons
the registry needs and the hex-address shape used by the in-memory ledger.
"""

from __future__ import annotations

import re

# 0x-prefixed, 20 bytes of hex. Case is not checked (no checksum validation).
HEX_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_address(value: str | None) -> str:
    """Strip surrounding whitespace from an address input.

    Args:
        value: Raw address text (may be None from an empty form).

    Returns:
        The trimmed address, or an empty string.
    """
    return (value or "").strip()


def addresses_match(left: str | None, right: str | None) -> bool:
    """Compare two addresses case-insensitively.

    Empty or missing addresses never match anything, including each other.
    """
    if not left or not right:
        return False
    return normalize_address(left).lower() == normalize_address(right).lower()


def address_key(value: str) -> str:
    """Return the canonical dictionary key for an address."""
    return normalize_address(value).lower()


def is_hex_address(value: str) -> bool:
    """Check the 0x + 40 hex digit address shape."""
    return bool(HEX_ADDRESS_PATTERN.match(value))

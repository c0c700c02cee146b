"""Wallet provider port.

This module defines the abstract interface to the signing collaborator
(a browser wallet such as MetaMask, or any EIP-1193-style provider).
The wallet authenticates the caller; signing itself happens when a
mutating ledger call is submitted through the ledger handle bound to
the caller.

Developer Golden Rules:
1. NO RE-PROMPT - Check already-authorized accounts before requesting access
2. FAIL LOUD - A refused request surfaces, it never returns a fake account
"""

from __future__ import annotations

from typing import Protocol


class WalletProviderProtocol(Protocol):
    """Protocol for the wallet/signing collaborator.

    Methods:
        is_available: Whether a provider is installed and reachable
        get_authorized_accounts: Accounts already authorized (no prompt)
        request_accounts: Prompt the user for account access
        get_active_address: Currently selected account, if any
    """

    async def is_available(self) -> bool:
        """Check whether the provider can be used at all."""
        ...

    async def get_authorized_accounts(self) -> list[str]:
        """Return accounts this session already authorized.

        Must not prompt the user.

        Returns:
            Authorized account addresses, possibly empty.
        """
        ...

    async def request_accounts(self) -> list[str]:
        """Prompt the user to authorize account access.

        Returns:
            Authorized account addresses.

        Raises:
            Exception: Provider-specific error when the user refuses.
        """
        ...

    async def get_active_address(self) -> str | None:
        """Return the account currently selected in the wallet."""
        ...

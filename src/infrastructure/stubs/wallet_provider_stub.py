"""Wallet provider stub implementation.

In-memory stand-in for a browser wallet, for development and testing.

Testing Features:
- Configurable accounts, pre-authorized or requiring a prompt
- Simulated refusal of the account-access prompt
- Prompt counting, to assert that no re-prompt happens
- Account switching
"""

from __future__ import annotations

from src.application.ports.diploma_ledger import SignatureRejectedError
from src.application.ports.wallet_provider import WalletProviderProtocol


class WalletProviderStub(WalletProviderProtocol):
    """In-memory stub implementation of WalletProviderProtocol.

    NOT suitable for production use.

    Attributes:
        accounts: Accounts the wallet holds, the first being selected.
        authorized: Whether access was already granted (no prompt needed).
        available: Whether the wallet is "installed".
        refuse_access: When True, request_accounts() raises.
        prompt_count: Number of times request_accounts() was called.
    """

    def __init__(
        self,
        accounts: list[str] | None = None,
        *,
        authorized: bool = True,
        available: bool = True,
    ) -> None:
        self.accounts: list[str] = list(accounts or [])
        self.authorized = authorized
        self.available = available
        self.refuse_access = False
        self.prompt_count = 0

    async def is_available(self) -> bool:
        return self.available

    async def get_authorized_accounts(self) -> list[str]:
        """Return accounts only if access was granted earlier."""
        return list(self.accounts) if self.authorized else []

    async def request_accounts(self) -> list[str]:
        """Simulate the access prompt.

        Raises:
            SignatureRejectedError: If refuse_access is set.
        """
        self.prompt_count += 1
        if self.refuse_access:
            raise SignatureRejectedError("User rejected the account request")
        self.authorized = True
        return list(self.accounts)

    async def get_active_address(self) -> str | None:
        if not self.authorized or not self.accounts:
            return None
        return self.accounts[0]

    # Testing helper methods

    def switch_account(self, address: str) -> None:
        """Select an account, adding it to the wallet if unknown."""
        if address in self.accounts:
            self.accounts.remove(address)
        self.accounts.insert(0, address)

    def clear(self) -> None:
        """Reset to an empty, unauthorized wallet."""
        self.accounts.clear()
        self.authorized = False
        self.refuse_access = False
        self.prompt_count = 0

"""Identity resolver service.

Resolves who is connected and who administers the ledger, in a fixed
order:

1. Wallet present? Otherwise NoWalletError with install instructions.
2. Already-authorized account? Use it. Otherwise prompt once.
3. Bind a ledger handle to that account.
4. Read the admin address through the bound handle.

Only after step 4 does a SessionContext exist; role determination and
every record operation depend on it.
"""

from __future__ import annotations

from src.application.ports.diploma_ledger import LedgerConnectorProtocol
from src.application.ports.wallet_provider import WalletProviderProtocol
from src.application.services.base import LoggingMixin
from src.application.services.ledger_errors import extract_reason, to_ledger_error
from src.application.services.session_context import SessionContext
from src.domain.errors.identity import IdentityError, NoWalletError
from src.domain.models.address import normalize_address


class IdentityResolverService(LoggingMixin):
    """Builds a SessionContext from the wallet and the ledger.

    Example:
        >>> resolver = IdentityResolverService(wallet=wallet, connector=connector)
        >>> session = await resolver.resolve_identity()
        >>> session.role
        <Role.HOLDER: 'holder'>
    """

    def __init__(
        self,
        wallet: WalletProviderProtocol | None,
        connector: LedgerConnectorProtocol,
    ) -> None:
        """Initialize the resolver.

        Args:
            wallet: Signing collaborator, or None when none is installed.
            connector: Binds ledger handles to the resolved caller.
        """
        self._wallet = wallet
        self._connector = connector
        self._init_logger()

    async def resolve_identity(self) -> SessionContext:
        """Resolve caller and admin addresses and bind the ledger handle.

        Returns:
            An active SessionContext.

        Raises:
            NoWalletError: No signing collaborator available.
            IdentityError: Account access refused or no account returned.
            LedgerError: Binding the ledger or reading the admin failed.
        """
        log = self._log_operation("resolve_identity")

        if self._wallet is None:
            log.warning("wallet_unavailable")
            raise NoWalletError()
        try:
            available = await self._wallet.is_available()
        except Exception as exc:
            raise self._wallet_failure("availability check", exc) from exc
        if not available:
            log.warning("wallet_unavailable")
            raise NoWalletError()

        caller = await self._resolve_caller()
        log = log.bind(caller=caller)

        try:
            ledger = await self._connector.connect(caller)
            admin = normalize_address(await ledger.admin())
        except Exception as exc:
            error = to_ledger_error(exc)
            log.warning("admin_resolution_failed", **error.to_dict())
            raise error from exc

        session = SessionContext(caller_address=caller, admin_address=admin, ledger=ledger)
        log.info("identity_resolved", admin=admin, role=session.role.value)
        return session

    async def _resolve_caller(self) -> str:
        """Return the caller account, prompting only if none is authorized."""
        assert self._wallet is not None
        try:
            accounts = await self._wallet.get_authorized_accounts()
        except Exception as exc:
            raise self._wallet_failure("account listing", exc) from exc
        if not accounts:
            self._log.info("requesting_account_access")
            try:
                accounts = await self._wallet.request_accounts()
            except Exception as exc:
                raise IdentityError(
                    f"Account access was not granted: {extract_reason(exc) or 'no reason given'}"
                ) from exc

        if not accounts or not normalize_address(accounts[0]):
            raise IdentityError("The wallet did not return any account")

        # The wallet's selected account wins over list order
        try:
            active = normalize_address(await self._wallet.get_active_address())
        except Exception as exc:
            raise self._wallet_failure("active account lookup", exc) from exc
        return active or normalize_address(accounts[0])

    def _wallet_failure(self, step: str, exc: Exception) -> IdentityError:
        error = IdentityError(
            f"Wallet provider failed during {step}: "
            f"{extract_reason(exc) or type(exc).__name__}"
        )
        self._log.warning("wallet_provider_failed", step=step, **error.to_dict())
        return error

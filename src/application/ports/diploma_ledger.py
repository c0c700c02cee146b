"""Diploma ledger port.

This module defines the abstract interface to the external ledger
(the DiplomaRegistry contract) and the handles it returns:
- TransactionReceipt: Finalized transaction details
- PendingTransactionProtocol: A submitted, not yet final, transaction
- DiplomaLedgerProtocol: Contract operations bound to one signer
- LedgerConnectorProtocol: Binds a ledger handle to a caller
- LedgerSubmissionError / SignatureRejectedError: Collaborator failures

Developer Golden Rules:
1. SUBMIT != CONFIRM - A returned PendingTransaction is not success;
   only PendingTransaction.wait() returning is
2. VALIDATE LOCALLY - is_address() is cheap and must be called before
   any network round trip
3. DEFENSE IN DEPTH - Mutating entry points enforce the admin check on
   the ledger side too
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from src.domain.models.diploma_record import DiplomaRecord

# EIP-1193 "user rejected request" code
USER_REJECTED_CODE = 4001


class LedgerSubmissionError(Exception):
    """Failure reported by the ledger collaborator.

    Attributes:
        reason: Human-readable revert or rejection reason, if known.
        code: Provider error code, if known.
    """

    def __init__(
        self, reason: str | None = None, code: int | str | None = None
    ) -> None:
        self.reason = reason
        self.code = code
        super().__init__(reason or "ledger submission failed")


class SignatureRejectedError(LedgerSubmissionError):
    """The user declined to sign the transaction."""

    def __init__(self, reason: str | None = "User rejected the request") -> None:
        super().__init__(reason=reason, code=USER_REJECTED_CODE)


@dataclass(frozen=True)
class TransactionReceipt:
    """Receipt of a finalized transaction.

    Attributes:
        tx_hash: Transaction hash.
        block_number: Block that included the transaction.
        status: 1 for success (reverted transactions raise instead).
    """

    tx_hash: str
    block_number: int
    status: int = 1


class PendingTransactionProtocol(Protocol):
    """A transaction accepted by the ledger whose outcome is unknown."""

    @property
    def tx_hash(self) -> str:
        ...

    async def wait(self) -> TransactionReceipt:
        """Suspend until the ledger finalizes the transaction.

        Returns:
            TransactionReceipt once confirmed.

        Raises:
            LedgerSubmissionError: If the transaction reverted.
        """
        ...


class DiplomaLedgerProtocol(Protocol):
    """Protocol for the diploma contract, bound to one signer.

    Methods:
        is_address: Ledger address-format validator (local, no I/O)
        admin: Read the designated admin address
        get_diplomas: Read all records of a holder, in ledger order
        add_diploma: Append a record (admin only)
        update_diploma: Replace the record at an index (admin only)
        delete_diploma: Remove the record at an index (admin only)
    """

    @property
    def signer_address(self) -> str:
        ...

    def is_address(self, value: str) -> bool:
        ...

    async def admin(self) -> str:
        ...

    async def get_diplomas(self, holder: str) -> Sequence[DiplomaRecord]:
        ...

    async def add_diploma(
        self,
        holder: str,
        student_name: str,
        diploma_title: str,
        institution: str,
        year: int,
    ) -> PendingTransactionProtocol:
        ...

    async def update_diploma(
        self,
        holder: str,
        index: int,
        student_name: str,
        diploma_title: str,
        institution: str,
        year: int,
    ) -> PendingTransactionProtocol:
        ...

    async def delete_diploma(
        self, holder: str, index: int
    ) -> PendingTransactionProtocol:
        ...


class LedgerConnectorProtocol(Protocol):
    """Creates ledger handles bound to a signer."""

    async def connect(self, signer_address: str) -> DiplomaLedgerProtocol:
        """Bind a ledger handle to the given caller.

        Args:
            signer_address: The account that will sign mutations.

        Returns:
            A DiplomaLedgerProtocol for the rest of the session.
        """
        ...

"""Diploma ledger stub implementation.

In-memory stand-in for the DiplomaRegistry contract, for development
and testing. Behaves like the contract:
- one admin, fixed at construction
- records kept per holder, in insertion order
- update/delete by index; delete shifts later records down by one
- mutations enforce the admin rule on the ledger side
- a mutation takes effect only when its transaction is confirmed

Testing Features:
- Call recording (is_address excluded: it is a local validator)
- Manual confirmation mode, to observe the SUBMITTED state
- Failure injection: rejected signature, failed submission, revert on
  confirmation, failed read
"""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.application.ports.diploma_ledger import (
    DiplomaLedgerProtocol,
    LedgerConnectorProtocol,
    LedgerSubmissionError,
    PendingTransactionProtocol,
    SignatureRejectedError,
    TransactionReceipt,
)
from src.domain.models.address import address_key, addresses_match, is_hex_address
from src.domain.models.diploma_record import DiplomaRecord

ONLY_ADMIN_REASON = "Only admin can perform this action"
INVALID_INDEX_REASON = "Invalid index"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LedgerCall:
    """Record of one ledger call for test assertions.

    Attributes:
        method: Contract method name.
        signer: Address the handle was bound to.
        args: Positional arguments as passed.
        timestamp: When the call was made.
    """

    method: str
    signer: str
    args: tuple[object, ...]
    timestamp: datetime = field(default_factory=_utc_now)


class StubPendingTransaction(PendingTransactionProtocol):
    """A submitted transaction whose effect is applied on confirmation."""

    def __init__(
        self,
        state: DiplomaLedgerState,
        tx_hash: str,
        apply: Callable[[], None],
        revert_reason: str | None = None,
    ) -> None:
        self._state = state
        self._tx_hash = tx_hash
        self._apply = apply
        self._revert_reason = revert_reason
        self._released = asyncio.Event()
        self.receipt: TransactionReceipt | None = None

    @property
    def tx_hash(self) -> str:
        return self._tx_hash

    def release(self) -> None:
        """Let a waiter in manual confirmation mode proceed."""
        self._released.set()

    async def wait(self) -> TransactionReceipt:
        if self.receipt is not None:
            return self.receipt
        if not self._state.auto_confirm:
            await self._released.wait()
        if self in self._state.pending:
            self._state.pending.remove(self)

        if self._revert_reason is not None:
            raise LedgerSubmissionError(reason=self._revert_reason)
        try:
            self._apply()
        except IndexError:
            raise LedgerSubmissionError(reason=INVALID_INDEX_REASON) from None

        self._state.block_number += 1
        self.receipt = TransactionReceipt(
            tx_hash=self._tx_hash, block_number=self._state.block_number
        )
        return self.receipt


class DiplomaLedgerState:
    """Shared contract storage plus test controls.

    Every handle produced by the connector reads and writes the same
    state, as every signer sees the same chain.
    """

    def __init__(self, admin: str, block_number: int = 0) -> None:
        self.admin = admin
        self.block_number = block_number
        self.auto_confirm = True
        self.records: dict[str, list[DiplomaRecord]] = {}
        self.calls: list[LedgerCall] = []
        self.pending: list[StubPendingTransaction] = []
        self._tx_counter = 0
        self._reject_next_signature = False
        self._fail_next_submission: str | None = None
        self._fail_next_confirmation: str | None = None
        self._fail_next_read: str | None = None

    # Storage

    def holder_records(self, holder: str) -> list[DiplomaRecord]:
        return self.records.setdefault(address_key(holder), [])

    def seed(self, holder: str, records: Sequence[DiplomaRecord]) -> None:
        """Put records on the ledger without a transaction."""
        self.holder_records(holder).extend(records)

    def next_tx_hash(self) -> str:
        self._tx_counter += 1
        return "0x" + hashlib.sha256(f"tx-{self._tx_counter}".encode()).hexdigest()

    # Failure injection

    def reject_next_signature(self) -> None:
        """The next mutation is declined by the signer."""
        self._reject_next_signature = True

    def fail_next_submission(self, reason: str = "execution reverted") -> None:
        """The next mutation is refused at submission."""
        self._fail_next_submission = reason

    def fail_next_confirmation(self, reason: str = "execution reverted") -> None:
        """The next mutation is accepted, then reverts while confirming."""
        self._fail_next_confirmation = reason

    def fail_next_read(self, reason: str = "network unreachable") -> None:
        self._fail_next_read = reason

    def take_submission_failure(self) -> Exception | None:
        if self._reject_next_signature:
            self._reject_next_signature = False
            return SignatureRejectedError()
        if self._fail_next_submission is not None:
            reason, self._fail_next_submission = self._fail_next_submission, None
            return LedgerSubmissionError(reason=reason)
        return None

    def take_confirmation_failure(self) -> str | None:
        reason, self._fail_next_confirmation = self._fail_next_confirmation, None
        return reason

    def take_read_failure(self) -> str | None:
        reason, self._fail_next_read = self._fail_next_read, None
        return reason

    # Confirmation control

    def confirm_all(self) -> None:
        """Release every pending transaction (manual confirmation mode)."""
        for tx in list(self.pending):
            tx.release()

    async def wait_for_pending(self, count: int = 1, max_cycles: int = 1000) -> None:
        """Yield to the loop until `count` transactions are pending.

        Raises:
            TimeoutError: If they never show up.
        """
        for _ in range(max_cycles):
            if len(self.pending) >= count:
                return
            await asyncio.sleep(0)
        raise TimeoutError(f"expected {count} pending transaction(s)")

    # Assertions

    def calls_for(self, method: str) -> list[LedgerCall]:
        return [call for call in self.calls if call.method == method]

    @property
    def mutation_calls(self) -> list[LedgerCall]:
        return [
            call
            for call in self.calls
            if call.method in ("addDiploma", "updateDiploma", "deleteDiploma")
        ]

    def clear_calls(self) -> None:
        self.calls.clear()


class DiplomaLedgerStub(DiplomaLedgerProtocol):
    """Ledger handle bound to one signer.

    NOT suitable for production use.
    """

    def __init__(self, state: DiplomaLedgerState, signer_address: str) -> None:
        self._state = state
        self._signer = signer_address

    @property
    def signer_address(self) -> str:
        return self._signer

    @property
    def state(self) -> DiplomaLedgerState:
        return self._state

    def is_address(self, value: str) -> bool:
        """Address-format validator; never recorded as a ledger call."""
        return isinstance(value, str) and is_hex_address(value)

    async def admin(self) -> str:
        self._record("admin")
        return self._state.admin

    async def get_diplomas(self, holder: str) -> Sequence[DiplomaRecord]:
        self._record("getDiplomas", holder)
        reason = self._state.take_read_failure()
        if reason is not None:
            raise LedgerSubmissionError(reason=reason)
        return list(self._state.holder_records(holder))

    async def add_diploma(
        self,
        holder: str,
        student_name: str,
        diploma_title: str,
        institution: str,
        year: int,
    ) -> PendingTransactionProtocol:
        self._record("addDiploma", holder, student_name, diploma_title, institution, year)
        record = DiplomaRecord(student_name, diploma_title, institution, year)
        return self._submit(lambda: self._state.holder_records(holder).append(record))

    async def update_diploma(
        self,
        holder: str,
        index: int,
        student_name: str,
        diploma_title: str,
        institution: str,
        year: int,
    ) -> PendingTransactionProtocol:
        self._record(
            "updateDiploma", holder, index, student_name, diploma_title, institution, year
        )
        record = DiplomaRecord(student_name, diploma_title, institution, year)

        def apply() -> None:
            records = self._state.holder_records(holder)
            if not 0 <= index < len(records):
                raise IndexError(index)
            records[index] = record

        return self._submit(apply)

    async def delete_diploma(
        self, holder: str, index: int
    ) -> PendingTransactionProtocol:
        self._record("deleteDiploma", holder, index)

        def apply() -> None:
            records = self._state.holder_records(holder)
            if not 0 <= index < len(records):
                raise IndexError(index)
            del records[index]

        return self._submit(apply)

    def _record(self, method: str, *args: object) -> None:
        self._state.calls.append(LedgerCall(method=method, signer=self._signer, args=args))

    def _submit(self, apply: Callable[[], None]) -> StubPendingTransaction:
        """Run the submission checks and queue the transaction."""
        failure = self._state.take_submission_failure()
        if failure is not None:
            raise failure
        if not addresses_match(self._signer, self._state.admin):
            raise LedgerSubmissionError(reason=ONLY_ADMIN_REASON)

        tx = StubPendingTransaction(
            self._state,
            self._state.next_tx_hash(),
            apply,
            revert_reason=self._state.take_confirmation_failure(),
        )
        self._state.pending.append(tx)
        return tx


class DiplomaLedgerConnectorStub(LedgerConnectorProtocol):
    """Hands out DiplomaLedgerStub handles over one shared state.

    Attributes:
        connections: Signer addresses connected, in order.
        fail_connect: When set, connect() raises with this reason.
    """

    def __init__(self, state: DiplomaLedgerState) -> None:
        self.state = state
        self.connections: list[str] = []
        self.fail_connect: str | None = None

    async def connect(self, signer_address: str) -> DiplomaLedgerProtocol:
        self.connections.append(signer_address)
        if self.fail_connect is not None:
            raise LedgerSubmissionError(reason=self.fail_connect)
        return DiplomaLedgerStub(self.state, signer_address)

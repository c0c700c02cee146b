"""Record store client.

Reads and writes a holder's diplomas on the external ledger and keeps
the local cache honest:

- Addresses are checked with the ledger's own validator before any
  network call (fail fast, no wasted round trip).
- Records are validated locally before submission.
- A mutation is SUBMITTED when the ledger accepts it and CONFIRMED when
  the ledger finalizes it; success is reported only after confirmation.
- The cache is never patched. After every confirmed mutation the whole
  sequence is refetched and the holder's arena replaced.
  If that refetch fails the arena is dropped, and the LedgerError says
  the mutation itself was confirmed.
- Every collaborator failure is normalized into LedgerError.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from src.application.ports.diploma_ledger import (
    DiplomaLedgerProtocol,
    PendingTransactionProtocol,
)
from src.application.services.base import LoggingMixin
from src.application.services.ledger_errors import to_ledger_error
from src.domain.errors.diploma import InvalidAddressError
from src.domain.errors.ledger import LedgerError
from src.domain.models.address import address_key, normalize_address
from src.domain.models.diploma_record import DiplomaRecord, validate_record
from src.domain.models.mutation import MutationKind, MutationReceipt
from src.domain.models.record_arena import RecordArena

MutationListener = Callable[[MutationReceipt], None]


class RecordStoreClient(LoggingMixin):
    """Ledger I/O and cache for diploma records.

    Attributes:
        _ledger: Ledger handle bound to the session caller.
        _arenas: Cached snapshot per holder (keyed case-insensitively).
        _mutations: Every mutation submitted through this client.
    """

    def __init__(self, ledger: DiplomaLedgerProtocol) -> None:
        """Initialize the client.

        Args:
            ledger: Ledger handle from the resolved session.
        """
        self._ledger = ledger
        self._arenas: dict[str, RecordArena] = {}
        self._mutations: list[MutationReceipt] = []
        self._init_logger()

    # Validation

    def validate_address(self, address: str) -> str:
        """Trim and validate an address with the ledger's validator.

        Returns:
            The trimmed address.

        Raises:
            InvalidAddressError: If the ledger rejects the format.
        """
        normalized = normalize_address(address)
        if not normalized or not self._ledger.is_address(normalized):
            raise InvalidAddressError(address)
        return normalized

    # Reads

    async def fetch_records(self, address: str) -> tuple[DiplomaRecord, ...]:
        """Read a holder's records and replace the cached snapshot.

        Args:
            address: Holder address.

        Returns:
            Records in ledger order.

        Raises:
            InvalidAddressError: Malformed address (no ledger call made).
            LedgerError: The read failed.
        """
        holder = self.validate_address(address)
        log = self._log_operation("fetch_records", holder=holder)
        log.debug("record_fetch_started")

        try:
            records = await self._ledger.get_diplomas(holder)
        except Exception as exc:
            error = to_ledger_error(exc)
            log.warning("record_fetch_failed", **error.to_dict())
            raise error from exc

        previous = self._arenas.get(address_key(holder))
        if previous is None:
            arena = RecordArena.from_records(holder, list(records))
        else:
            arena = previous.refreshed(list(records))
        self._arenas[address_key(holder)] = arena
        log.info("record_fetch_completed", count=len(arena))
        return arena.records

    def arena(self, address: str) -> RecordArena | None:
        """Return the cached snapshot for a holder, if loaded."""
        return self._arenas.get(address_key(address))

    def cached_records(self, address: str) -> tuple[DiplomaRecord, ...]:
        arena = self.arena(address)
        return arena.records if arena is not None else ()

    def invalidate(self, address: str | None = None) -> None:
        """Drop cached snapshots (one holder, or all of them)."""
        if address is None:
            self._arenas.clear()
        else:
            self._arenas.pop(address_key(address), None)

    # Mutations

    async def create_record(
        self,
        address: str,
        record: DiplomaRecord,
        *,
        listener: MutationListener | None = None,
    ) -> MutationReceipt:
        """Append a record to a holder's sequence.

        Args:
            address: Holder address.
            record: Record to append.
            listener: Called on every status change of the mutation.

        Returns:
            The receipt, CONFIRMED, after the cache was refreshed.

        Raises:
            InvalidAddressError: Malformed address.
            ValidationError: A required field is empty.
            LedgerError: Submission, confirmation or refresh failed.
        """
        holder = self.validate_address(address)
        validate_record(record)
        return await self._mutate(
            MutationKind.CREATE,
            holder,
            None,
            lambda: self._ledger.add_diploma(
                holder,
                record.student_name,
                record.diploma_title,
                record.institution,
                record.year,
            ),
            listener,
        )

    async def update_record(
        self,
        address: str,
        index: int,
        record: DiplomaRecord,
        *,
        listener: MutationListener | None = None,
    ) -> MutationReceipt:
        """Replace all four fields of the record at an index.

        Raises:
            InvalidAddressError: Malformed address.
            ValidationError: Empty field, or index not in the sequence.
            LedgerError: Submission, confirmation or refresh failed.
        """
        holder = self.validate_address(address)
        validate_record(record)
        await self._require_index(holder, index)
        return await self._mutate(
            MutationKind.UPDATE,
            holder,
            index,
            lambda: self._ledger.update_diploma(
                holder,
                index,
                record.student_name,
                record.diploma_title,
                record.institution,
                record.year,
            ),
            listener,
        )

    async def delete_record(
        self,
        address: str,
        index: int,
        *,
        listener: MutationListener | None = None,
    ) -> MutationReceipt:
        """Remove the record at an index; later records shift down by one.

        Raises:
            InvalidAddressError: Malformed address.
            ValidationError: Index not in the sequence.
            LedgerError: Submission, confirmation or refresh failed.
        """
        holder = self.validate_address(address)
        await self._require_index(holder, index)
        return await self._mutate(
            MutationKind.DELETE,
            holder,
            index,
            lambda: self._ledger.delete_diploma(holder, index),
            listener,
        )

    def pending_mutations(self) -> list[MutationReceipt]:
        """Mutations submitted but not yet confirmed."""
        return [receipt for receipt in self._mutations if receipt.is_pending]

    def mutation_history(self) -> list[MutationReceipt]:
        return list(self._mutations)

    # Internals

    async def _require_index(self, holder: str, index: int) -> None:
        """Check an index against the holder's current snapshot.

        Loads the snapshot first when none is cached.
        """
        arena = self.arena(holder)
        if arena is None:
            await self.fetch_records(holder)
            arena = self.arena(holder)
        assert arena is not None
        arena.at(index)

    async def _mutate(
        self,
        kind: MutationKind,
        holder: str,
        index: int | None,
        submit: Callable[[], Awaitable[PendingTransactionProtocol]],
        listener: MutationListener | None,
    ) -> MutationReceipt:
        """Submit, await confirmation, then refresh the holder's cache."""
        log = self._log_operation(f"{kind.value}_record", holder=holder, index=index)

        try:
            pending = await submit()
        except Exception as exc:
            error = to_ledger_error(exc)
            log.warning("mutation_submission_failed", **error.to_dict())
            raise error from exc

        receipt = MutationReceipt(
            kind=kind, holder=holder, index=index, tx_hash=pending.tx_hash
        )
        self._mutations.append(receipt)
        log = log.bind(tx_hash=receipt.tx_hash)
        log.info("mutation_submitted")
        self._notify(listener, receipt)

        try:
            tx_receipt = await pending.wait()
        except Exception as exc:
            receipt.mark_failed()
            self._notify(listener, receipt)
            error = to_ledger_error(exc)
            log.warning("mutation_reverted", **error.to_dict())
            raise error from exc

        receipt.mark_confirmed(tx_receipt.block_number)
        log.info("mutation_confirmed", block_number=tx_receipt.block_number)
        self._notify(listener, receipt)

        try:
            await self.fetch_records(holder)
        except LedgerError as exc:
            # The pre-mutation snapshot must not be shown or used for indices
            self.invalidate(holder)
            log.warning("mutation_refresh_failed", **exc.to_dict())
            raise LedgerError(
                exc.reason, user_rejected=exc.user_rejected, mutation_confirmed=True
            ) from exc
        return receipt

    @staticmethod
    def _notify(listener: MutationListener | None, receipt: MutationReceipt) -> None:
        if listener is not None:
            listener(receipt)

"""Diploma command processor.

Drives every user command through an explicit state machine:

    IDLE -> VALIDATING -> AUTHORIZING -> SUBMITTING -> CONFIRMING
         -> REFRESHING -> IDLE                      (success)
    any  -> FAILED -> IDLE                          (error)

and reacts to discrete session events (identity resolved, account
changed, disconnected) instead of recomputing state ambiently.

Developer Golden Rules:
1. LOCAL CHECKS FIRST - Validation and authorization happen before any
   ledger call; a rejected command leaves no trace on the ledger
2. CONFIRM, THEN REFRESH - The cache is only replaced after the ledger
   finalized the mutation
3. NEVER CRASH THE SESSION - Domain errors become failed CommandResults
4. ONE MUTATION PER HOLDER AT A TIME - Per-holder asyncio locks
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from uuid import UUID

from src.application.services.authorization_gate import AuthorizationGate, Operation
from src.application.services.base import LoggingMixin
from src.application.services.identity_resolver_service import IdentityResolverService
from src.application.services.record_store_client import RecordStoreClient
from src.application.services.session_context import SessionContext
from src.domain.errors.diploma import ValidationError
from src.domain.errors.identity import NotReadyError
from src.domain.errors.ledger import LedgerError
from src.domain.exceptions import DiplomaRegistryError
from src.domain.models.address import address_key, addresses_match, normalize_address
from src.domain.models.command import CommandResult, CommandState
from src.domain.models.diploma_record import DiplomaDraft, DiplomaRecord, matches_query
from src.domain.models.mutation import MutationReceipt, MutationStatus
from src.domain.models.role import Role
from src.infrastructure.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)


class _CommandRun:
    """Tracks the states visited by one command."""

    def __init__(self, processor: DiplomaCommandProcessor, command: str) -> None:
        self._processor = processor
        self.command = command
        self.states: list[CommandState] = []
        self.receipt: MutationReceipt | None = None

    def enter(self, state: CommandState) -> None:
        self.states.append(state)
        self._processor._enter_state(self.command, state)

    def on_mutation(self, receipt: MutationReceipt) -> None:
        """Map mutation status changes onto command states."""
        self.receipt = receipt
        if receipt.status == MutationStatus.SUBMITTED:
            self.enter(CommandState.CONFIRMING)
        elif receipt.status == MutationStatus.CONFIRMED:
            self.enter(CommandState.REFRESHING)

    def succeed(
        self, message: str, records: tuple[DiplomaRecord, ...] = ()
    ) -> CommandResult:
        self.enter(CommandState.IDLE)
        return CommandResult(
            command=self.command,
            state=CommandState.IDLE,
            message=message,
            records=records,
            receipt=self.receipt,
            states=tuple(self.states),
        )

    def reload_failed(self, message: str, error: LedgerError) -> CommandResult:
        """The mutation is confirmed; only reloading the records failed."""
        self._processor._log_operation(self.command).warning(
            "command_reload_failed", **error.to_dict()
        )
        self.enter(CommandState.IDLE)
        return CommandResult(
            command=self.command,
            state=CommandState.IDLE,
            message=(
                f"{message}, but reloading the diplomas failed: {error.message}. "
                "Look the holder up again before changing anything else."
            ),
            error=error,
            receipt=self.receipt,
            states=tuple(self.states),
        )

    def fail(self, error: DiplomaRegistryError) -> CommandResult:
        if isinstance(error, NotReadyError):
            # Deferred: the machine never left IDLE
            self._processor._log_operation(self.command).info(
                "command_deferred", **error.to_dict()
            )
            return CommandResult(
                command=self.command,
                state=CommandState.IDLE,
                message=error.message,
                error=error,
                states=tuple(self.states),
            )

        self.enter(CommandState.FAILED)
        self._processor._log_operation(self.command).warning(
            "command_failed", **error.to_dict()
        )
        self.enter(CommandState.IDLE)
        return CommandResult(
            command=self.command,
            state=CommandState.FAILED,
            message=error.message,
            error=error,
            records=self._processor.records,
            receipt=self.receipt,
            states=tuple(self.states),
        )


class DiplomaCommandProcessor(LoggingMixin):
    """Session-level command handling for the diploma registry.

    Holds the only mutable session state: the resolved session, the
    record store, the current holder context, the form draft and the
    record being edited.

    Example:
        >>> processor = DiplomaCommandProcessor(resolver=resolver)
        >>> await processor.connect()
        >>> processor.draft = DiplomaDraft("Alice", "B.Sc. CS", "Tech U", "2024")
        >>> result = await processor.create(student_address)
        >>> result.message
        'Diploma added'
    """

    def __init__(
        self,
        resolver: IdentityResolverService,
        gate: AuthorizationGate | None = None,
        store_factory: Callable[[SessionContext], RecordStoreClient] | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            resolver: Resolves identity on connect and account change.
            gate: Authorization gate (a default one is created if omitted).
            store_factory: Builds the record store for a session; defaults
                to a RecordStoreClient over the session's ledger handle.
        """
        self._resolver = resolver
        self._gate = gate or AuthorizationGate()
        self._store_factory = store_factory or (
            lambda session: RecordStoreClient(session.ledger)
        )
        self._session: SessionContext | None = None
        self._store: RecordStoreClient | None = None
        self._holder_locks: dict[str, asyncio.Lock] = {}
        self._editing_record_id: UUID | None = None

        self.state = CommandState.IDLE
        self.state_history: list[tuple[str, CommandState]] = []
        self.holder_address = ""
        self.draft = DiplomaDraft()
        self._init_logger()

    # Read-only views

    @property
    def session(self) -> SessionContext:
        """The active session.

        Raises:
            NotReadyError: Before identity resolution or after invalidation.
        """
        return self._require_session("session")

    @property
    def is_ready(self) -> bool:
        return self._session is not None and self._session.is_active

    @property
    def role(self) -> Role | None:
        return self._session.role if self.is_ready and self._session else None

    @property
    def records(self) -> tuple[DiplomaRecord, ...]:
        """Cached records of the current holder context."""
        if self._store is None or not self.holder_address:
            return ()
        return self._store.cached_records(self.holder_address)

    @property
    def editing_index(self) -> int | None:
        """Ledger index of the record being edited, projected from the cache."""
        if self._editing_record_id is None or self._store is None:
            return None
        arena = self._store.arena(self.holder_address)
        if arena is None or arena.get(self._editing_record_id) is None:
            return None
        return arena.index_of(self._editing_record_id)

    @property
    def is_editing(self) -> bool:
        return self._editing_record_id is not None

    # Session events

    async def connect(self) -> CommandResult:
        """Resolve identity and start the session.

        Returns:
            A "connect" result; for holders, the automatic lookup of their
            own records follows and its result is returned instead.
        """
        run = self._begin("connect")
        try:
            session = await self._resolver.resolve_identity()
        except DiplomaRegistryError as exc:
            return run.fail(exc)

        lookup = await self.on_identity_resolved(session)
        if lookup is not None:
            return lookup
        return run.succeed(f"Connected as {session.role.value}")

    async def on_identity_resolved(
        self, session: SessionContext
    ) -> CommandResult | None:
        """Install a resolved session.

        Holders get their own records looked up automatically; the issuer
        starts with an empty holder context.

        Returns:
            The automatic lookup result for holders, None for the issuer.
        """
        self._reset_session_state()
        self._session = session
        self._store = self._store_factory(session)
        self._log_operation(
            "on_identity_resolved",
            caller=session.caller_address,
            role=session.role.value,
        ).info("session_started")

        if session.role == Role.ISSUER:
            return None
        return await self.lookup(session.caller_address)

    async def on_account_changed(self, address: str | None) -> CommandResult | None:
        """Handle the wallet switching account.

        The current session is invalidated and identity is resolved
        again. Switching to the same account is a no-op.
        """
        if self._session is not None and addresses_match(
            self._session.caller_address, address
        ):
            return None
        self._log_operation("on_account_changed", address=address).info(
            "account_changed"
        )
        self.on_disconnect()
        if not normalize_address(address):
            return None
        return await self.connect()

    def on_disconnect(self) -> None:
        """Invalidate the session and drop every cached value."""
        if self._session is not None:
            self._session.invalidate()
        self._reset_session_state()
        self._log_operation("on_disconnect").info("session_invalidated")

    # Commands

    async def lookup(self, address: str) -> CommandResult:
        """Load the diplomas recorded against an address.

        Holders may only look up their own address; the issuer may look
        up any address. The address becomes the current holder context.
        """
        run = self._begin("lookup")
        try:
            session, store = self._require_ready("lookup")
            run.enter(CommandState.VALIDATING)
            holder = store.validate_address(address)

            run.enter(CommandState.AUTHORIZING)
            operation = self._gate.lookup_operation(session.caller_address, holder)
            self._gate.authorize(
                session.role, operation, caller=session.caller_address, target=holder
            )

            self._switch_holder(holder)
            run.enter(CommandState.REFRESHING)
            records = await store.fetch_records(holder)
        except DiplomaRegistryError as exc:
            return run.fail(exc)

        return run.succeed(f"Loaded {len(records)} diploma(s)", records)

    async def create(
        self, address: str, draft: DiplomaDraft | None = None
    ) -> CommandResult:
        """Record a new diploma against a holder address.

        Args:
            address: Holder address.
            draft: Form values; defaults to the processor's draft.
        """
        run = self._begin("create")
        try:
            session, store = self._require_ready("create")
            run.enter(CommandState.VALIDATING)
            holder = store.validate_address(address)
            record = (draft or self.draft).to_record()

            run.enter(CommandState.AUTHORIZING)
            self._gate.authorize(
                session.role,
                Operation.CREATE,
                caller=session.caller_address,
                target=holder,
            )

            self._switch_holder(holder)
            async with self._holder_lock(holder):
                run.enter(CommandState.SUBMITTING)
                await store.create_record(holder, record, listener=run.on_mutation)
        except LedgerError as exc:
            if not exc.mutation_confirmed:
                return run.fail(exc)
            self.draft = DiplomaDraft()
            return run.reload_failed("Diploma added", exc)
        except DiplomaRegistryError as exc:
            return run.fail(exc)

        self.draft = DiplomaDraft()
        return run.succeed("Diploma added", store.cached_records(holder))

    def start_edit(self, index: int) -> DiplomaDraft:
        """Enter edit mode for a record of the current holder.

        Copies the record's fields into the draft and remembers which
        record is being edited.

        Raises:
            NotReadyError: No active session.
            AuthorizationError: Caller is not the issuer.
            ValidationError: Index not in the loaded records.
        """
        session, store = self._require_ready("start_edit")
        self._gate.authorize(
            session.role,
            Operation.UPDATE,
            caller=session.caller_address,
            target=self.holder_address,
        )
        arena = store.arena(self.holder_address) if self.holder_address else None
        if arena is None:
            raise ValidationError("Load a holder's diplomas before editing")

        entry = arena.at(index)
        self._editing_record_id = entry.record_id
        self.draft = DiplomaDraft.from_record(entry.record)
        return self.draft

    def cancel_edit(self) -> None:
        """Leave edit mode, clearing both the draft and the edited record."""
        self._editing_record_id = None
        self.draft = DiplomaDraft()

    async def update(self, draft: DiplomaDraft | None = None) -> CommandResult:
        """Replace the record being edited with the draft's values."""
        run = self._begin("update")
        try:
            session, store = self._require_ready("update")
            run.enter(CommandState.VALIDATING)
            if self._editing_record_id is None:
                raise ValidationError("No diploma is being edited")
            holder = store.validate_address(self.holder_address)
            record = (draft or self.draft).to_record()

            run.enter(CommandState.AUTHORIZING)
            self._gate.authorize(
                session.role,
                Operation.UPDATE,
                caller=session.caller_address,
                target=holder,
            )

            async with self._holder_lock(holder):
                index = self._project_index(store, holder, self._editing_record_id)
                run.enter(CommandState.SUBMITTING)
                await store.update_record(
                    holder, index, record, listener=run.on_mutation
                )
        except LedgerError as exc:
            if not exc.mutation_confirmed:
                return run.fail(exc)
            self.cancel_edit()
            return run.reload_failed("Diploma updated", exc)
        except DiplomaRegistryError as exc:
            return run.fail(exc)

        self.cancel_edit()
        return run.succeed("Diploma updated", store.cached_records(holder))

    async def delete(self, index: int, address: str | None = None) -> CommandResult:
        """Delete a record of a holder (the current holder by default).

        The record is selected from the loaded snapshot; its ledger index
        is recomputed once the holder lock is held.
        """
        run = self._begin("delete")
        try:
            session, store = self._require_ready("delete")
            run.enter(CommandState.VALIDATING)
            holder = store.validate_address(
                address if address is not None else self.holder_address
            )
            arena = store.arena(holder)
            if arena is None:
                raise ValidationError("Load the holder's diplomas before deleting")
            record_id = arena.at(index).record_id

            run.enter(CommandState.AUTHORIZING)
            self._gate.authorize(
                session.role,
                Operation.DELETE,
                caller=session.caller_address,
                target=holder,
            )

            self._switch_holder(holder)
            async with self._holder_lock(holder):
                ledger_index = self._project_index(store, holder, record_id)
                run.enter(CommandState.SUBMITTING)
                await store.delete_record(
                    holder, ledger_index, listener=run.on_mutation
                )
        except LedgerError as exc:
            if not exc.mutation_confirmed:
                return run.fail(exc)
            if self._editing_record_id == record_id:
                self.cancel_edit()
            return run.reload_failed("Diploma deleted", exc)
        except DiplomaRegistryError as exc:
            return run.fail(exc)

        if self._editing_record_id == record_id:
            self.cancel_edit()
        return run.succeed("Diploma deleted", store.cached_records(holder))

    def search(self, query: str) -> list[tuple[int, DiplomaRecord]]:
        """Filter the current holder's records by free text.

        Returns:
            (ledger index, record) pairs, so results can be edited or
            deleted by their real position rather than their rank.
        """
        return [
            (index, record)
            for index, record in enumerate(self.records)
            if matches_query(record, query)
        ]

    # Internals

    def _begin(self, command: str) -> _CommandRun:
        set_correlation_id(generate_correlation_id())
        return _CommandRun(self, command)

    def _enter_state(self, command: str, state: CommandState) -> None:
        self.state = state
        self.state_history.append((command, state))
        self._log_operation(command).debug("command_state_changed", state=state.value)

    def _require_session(self, operation: str) -> SessionContext:
        if self._session is None:
            raise NotReadyError(operation)
        self._session.require_active(operation)
        return self._session

    def _require_ready(self, operation: str) -> tuple[SessionContext, RecordStoreClient]:
        session = self._require_session(operation)
        if self._store is None:
            raise NotReadyError(operation)
        return session, self._store

    def _holder_lock(self, holder: str) -> asyncio.Lock:
        key = address_key(holder)
        if key not in self._holder_locks:
            self._holder_locks[key] = asyncio.Lock()
        return self._holder_locks[key]

    def _switch_holder(self, holder: str) -> None:
        """Make a holder the current context, dropping the previous one."""
        if addresses_match(self.holder_address, holder):
            return
        if self._store is not None and self.holder_address:
            self._store.invalidate(self.holder_address)
        self._editing_record_id = None
        self.holder_address = holder

    @staticmethod
    def _project_index(
        store: RecordStoreClient, holder: str, record_id: UUID
    ) -> int:
        arena = store.arena(holder)
        if arena is None:
            raise ValidationError("The holder's diplomas are no longer loaded")
        return arena.index_of(record_id)

    def _reset_session_state(self) -> None:
        self._session = None
        self._store = None
        self._holder_locks.clear()
        self._editing_record_id = None
        self.holder_address = ""
        self.draft = DiplomaDraft()
        self.state = CommandState.IDLE

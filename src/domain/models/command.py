"""Diploma command state machine models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from src.domain.errors.identity import NotReadyError
from src.domain.errors.ledger import LedgerError
from src.domain.exceptions import DiplomaRegistryError
from src.domain.models.diploma_record import DiplomaRecord
from src.domain.models.mutation import MutationReceipt


class CommandState(Enum):
    """States of a diploma command.

    Success path:
        IDLE -> VALIDATING -> AUTHORIZING -> SUBMITTING -> CONFIRMING
        -> REFRESHING -> IDLE
    Failure path:
        any state -> FAILED -> IDLE

    Read commands skip SUBMITTING and CONFIRMING.
    """

    IDLE = "idle"
    VALIDATING = "validating"
    AUTHORIZING = "authorizing"
    SUBMITTING = "submitting"
    CONFIRMING = "confirming"
    REFRESHING = "refreshing"
    FAILED = "failed"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command.

    Attributes:
        command: Command name (create, update, delete, lookup, ...).
        state: IDLE on success, when the command was deferred, or when a
            confirmed mutation could not be reloaded; FAILED on error.
        message: User-facing summary.
        error: The domain error, when the command did not succeed.
        records: Holder records after the command (refreshed on success).
        receipt: Mutation receipt, for mutating commands that submitted.
        states: Every state visited, in order.
    """

    command: str
    state: CommandState
    message: str
    error: DiplomaRegistryError | None = None
    records: tuple[DiplomaRecord, ...] = ()
    receipt: MutationReceipt | None = None
    states: tuple[CommandState, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.error is None or self.stale

    @property
    def stale(self) -> bool:
        """True when the mutation went through but the records were not reloaded."""
        return isinstance(self.error, LedgerError) and self.error.mutation_confirmed

    @property
    def failed(self) -> bool:
        return self.state == CommandState.FAILED

    @property
    def deferred(self) -> bool:
        """True when the session was not ready; retry once it is."""
        return isinstance(self.error, NotReadyError)

"""Ledger mutation tracking models.

Every mutating ledger call goes through two observable states:
SUBMITTED (accepted, outcome unknown) and CONFIRMED (finalized). A
mutation that fails before confirmation ends as FAILED.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class MutationKind(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class MutationStatus(Enum):
    """Lifecycle of a ledger mutation.

    Values:
        SUBMITTED: Accepted by the ledger, not yet final.
        CONFIRMED: Finalized; local cache may now be refreshed.
        FAILED: Rejected or reverted; cache untouched.
    """

    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class MutationReceipt:
    """Tracked state of one mutation.

    Mutable on purpose: the record store client moves it from SUBMITTED
    to CONFIRMED (or FAILED) in place so observers holding a reference
    see the transition.

    Attributes:
        kind: What the mutation does.
        holder: Holder address affected.
        index: Ledger index targeted (None for create).
        tx_hash: Transaction hash reported on submission.
        status: Current lifecycle state.
        block_number: Block of inclusion, once confirmed.
        submitted_at: Submission time (UTC).
        confirmed_at: Confirmation time (UTC), once confirmed.
    """

    kind: MutationKind
    holder: str
    tx_hash: str
    index: int | None = None
    status: MutationStatus = MutationStatus.SUBMITTED
    block_number: int | None = None
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    confirmed_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == MutationStatus.SUBMITTED

    def mark_confirmed(self, block_number: int | None) -> None:
        self.status = MutationStatus.CONFIRMED
        self.block_number = block_number
        self.confirmed_at = datetime.now(timezone.utc)

    def mark_failed(self) -> None:
        self.status = MutationStatus.FAILED

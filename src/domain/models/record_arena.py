"""Local cache of one holder's diplomas, keyed by surrogate ids.

The ledger addresses records by position only, and positions shift when
a record is deleted. The arena gives every fetched record a stable
surrogate id so local code can refer to "that record" without holding an
index; the index is recomputed from the arena only when a ledger call
needs it.

An arena is a snapshot: it is never patched. After any mutation the
whole arena is replaced by a fresh fetch; ids of unchanged records
survive the replacement.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.errors.diploma import ValidationError
from src.domain.models.diploma_record import DiplomaRecord


@dataclass(frozen=True)
class StoredDiploma:
    """A cached record together with its surrogate id.

    Attributes:
        record_id: Surrogate id assigned at fetch time (not durable).
        record: The diploma as read from the ledger.
    """

    record_id: UUID
    record: DiplomaRecord


@dataclass(frozen=True)
class RecordArena:
    """Immutable snapshot of a holder's record sequence.

    Attributes:
        holder: Holder address the records belong to.
        entries: Records in ledger order.
        fetched_at: When the snapshot was read (UTC).
    """

    holder: str
    entries: tuple[StoredDiploma, ...] = ()
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_records(
        cls, holder: str, records: Sequence[DiplomaRecord]
    ) -> RecordArena:
        """Build an arena, assigning a fresh surrogate id per record."""
        return cls(
            holder=holder,
            entries=tuple(
                StoredDiploma(record_id=uuid4(), record=record) for record in records
            ),
        )

    def refreshed(self, records: Sequence[DiplomaRecord]) -> RecordArena:
        """Build the next snapshot from a fresh read of the ledger.

        Surrogate ids carry over to records that are unchanged: each new
        record takes the id of the first not-yet-matched equal record of
        this snapshot, in order. Changed or new records get fresh ids, so
        a selection made on a record that was since modified no longer
        resolves.
        """
        available = list(self.entries)
        entries: list[StoredDiploma] = []
        for record in records:
            match = next(
                (entry for entry in available if entry.record == record), None
            )
            if match is not None:
                available.remove(match)
                entries.append(match)
            else:
                entries.append(StoredDiploma(record_id=uuid4(), record=record))
        return RecordArena(holder=self.holder, entries=tuple(entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[StoredDiploma]:
        return iter(self.entries)

    @property
    def records(self) -> tuple[DiplomaRecord, ...]:
        return tuple(entry.record for entry in self.entries)

    def at(self, index: int) -> StoredDiploma:
        """Return the entry at a ledger position.

        Raises:
            ValidationError: If the index is outside the current sequence.
        """
        if not 0 <= index < len(self.entries):
            raise ValidationError(
                f"No diploma at index {index} for {self.holder} "
                f"({len(self.entries)} record(s) loaded)",
                fields=("index",),
            )
        return self.entries[index]

    def get(self, record_id: UUID) -> StoredDiploma | None:
        for entry in self.entries:
            if entry.record_id == record_id:
                return entry
        return None

    def index_of(self, record_id: UUID) -> int:
        """Project a surrogate id to its current ledger index.

        Raises:
            ValidationError: If the record is not part of this snapshot
                (e.g. the cache was refreshed since it was selected).
        """
        for index, entry in enumerate(self.entries):
            if entry.record_id == record_id:
                return index
        raise ValidationError(
            "The selected diploma is no longer loaded; reload the list and retry",
            fields=("index",),
        )

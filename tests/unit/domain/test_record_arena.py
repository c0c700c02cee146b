"""Unit tests for the surrogate-id record cache."""

import pytest

from src.domain.errors.diploma import ValidationError
from src.domain.models.diploma_record import DiplomaRecord
from src.domain.models.record_arena import RecordArena

HOLDER = "0x" + "2" * 40

A = DiplomaRecord("Alice", "B.Sc. CS", "Tech U", 2024)
B = DiplomaRecord("Bob", "M.Sc. Math", "State U", 2022)
C = DiplomaRecord("Carol", "PhD Physics", "Tech U", 2019)


class TestRecordArena:
    def test_from_records_keeps_ledger_order(self) -> None:
        arena = RecordArena.from_records(HOLDER, [A, B, C])
        assert arena.records == (A, B, C)
        assert len(arena) == 3

    def test_surrogate_ids_are_unique(self) -> None:
        arena = RecordArena.from_records(HOLDER, [A, A, A])
        assert len({entry.record_id for entry in arena}) == 3

    def test_index_is_projected_from_id(self) -> None:
        arena = RecordArena.from_records(HOLDER, [A, B, C])
        record_id = arena.at(2).record_id
        assert arena.index_of(record_id) == 2
        assert arena.get(record_id).record == C

    def test_at_rejects_out_of_range(self) -> None:
        arena = RecordArena.from_records(HOLDER, [A])
        with pytest.raises(ValidationError) as exc_info:
            arena.at(1)
        assert exc_info.value.fields == ("index",)
        with pytest.raises(ValidationError):
            arena.at(-1)

    def test_index_of_unknown_id(self) -> None:
        arena = RecordArena.from_records(HOLDER, [A])
        other = RecordArena.from_records(HOLDER, [A])
        with pytest.raises(ValidationError):
            arena.index_of(other.at(0).record_id)


class TestRefreshed:
    def test_ids_survive_deletion_with_compacted_indices(self) -> None:
        """After a delete, later records keep their id but shift down one index."""
        arena = RecordArena.from_records(HOLDER, [A, B, C])
        c_id = arena.at(2).record_id

        refreshed = arena.refreshed([A, C])

        assert refreshed.index_of(c_id) == 1
        assert refreshed.at(0).record_id == arena.at(0).record_id

    def test_changed_record_gets_new_id(self) -> None:
        arena = RecordArena.from_records(HOLDER, [A, B])
        b_id = arena.at(1).record_id

        refreshed = arena.refreshed([A, B.with_year(2023)])

        assert refreshed.get(b_id) is None
        with pytest.raises(ValidationError):
            refreshed.index_of(b_id)

    def test_duplicates_matched_in_order(self) -> None:
        arena = RecordArena.from_records(HOLDER, [A, A])
        first, second = (entry.record_id for entry in arena)

        refreshed = arena.refreshed([A, A, A])

        assert [entry.record_id for entry in refreshed][:2] == [first, second]
        assert refreshed.at(2).record_id not in (first, second)

    def test_refresh_is_a_new_snapshot(self) -> None:
        arena = RecordArena.from_records(HOLDER, [A])
        refreshed = arena.refreshed([A, B])
        assert arena.records == (A,)
        assert refreshed.records == (A, B)
        assert refreshed.holder == HOLDER

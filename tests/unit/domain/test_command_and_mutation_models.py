"""Unit tests for mutation receipts, command results and domain errors."""

from src.domain.errors.diploma import AuthorizationError, InvalidAddressError, ValidationError
from src.domain.errors.identity import NO_WALLET_INSTRUCTION, NoWalletError, NotReadyError
from src.domain.errors.ledger import GENERIC_LEDGER_MESSAGE, LedgerError
from src.domain.exceptions import DiplomaRegistryError
from src.domain.models.command import CommandResult, CommandState
from src.domain.models.mutation import MutationKind, MutationReceipt, MutationStatus


class TestMutationReceipt:
    def test_starts_submitted(self) -> None:
        receipt = MutationReceipt(kind=MutationKind.CREATE, holder="0xh", tx_hash="0x1")
        assert receipt.status == MutationStatus.SUBMITTED
        assert receipt.is_pending
        assert receipt.confirmed_at is None

    def test_mark_confirmed(self) -> None:
        receipt = MutationReceipt(kind=MutationKind.DELETE, holder="0xh", tx_hash="0x1", index=0)
        receipt.mark_confirmed(12)
        assert receipt.status == MutationStatus.CONFIRMED
        assert receipt.block_number == 12
        assert receipt.confirmed_at is not None
        assert not receipt.is_pending

    def test_mark_failed(self) -> None:
        receipt = MutationReceipt(kind=MutationKind.UPDATE, holder="0xh", tx_hash="0x1", index=1)
        receipt.mark_failed()
        assert receipt.status == MutationStatus.FAILED
        assert not receipt.is_pending


class TestCommandResult:
    def test_success(self) -> None:
        result = CommandResult(command="create", state=CommandState.IDLE, message="Diploma added")
        assert result.succeeded
        assert not result.failed
        assert not result.deferred

    def test_failure(self) -> None:
        result = CommandResult(
            command="create",
            state=CommandState.FAILED,
            message="nope",
            error=LedgerError("nope"),
        )
        assert result.failed
        assert not result.succeeded
        assert not result.deferred

    def test_deferred(self) -> None:
        error = NotReadyError("create")
        result = CommandResult(
            command="create", state=CommandState.IDLE, message=error.message, error=error
        )
        assert result.deferred
        assert not result.failed

    def test_confirmed_mutation_with_failed_reload(self) -> None:
        error = LedgerError("network unreachable", mutation_confirmed=True)
        result = CommandResult(
            command="delete", state=CommandState.IDLE, message="Diploma deleted", error=error
        )
        assert result.stale
        assert result.succeeded
        assert not result.failed
        assert not result.deferred

    def test_plain_ledger_failure_is_not_stale(self) -> None:
        result = CommandResult(
            command="delete",
            state=CommandState.FAILED,
            message="nope",
            error=LedgerError("nope"),
        )
        assert not result.stale


class TestDomainErrors:
    def test_all_errors_share_base(self) -> None:
        for error in (
            NoWalletError(),
            NotReadyError("lookup"),
            InvalidAddressError("0x1"),
            ValidationError("bad"),
            AuthorizationError("holder", "create"),
            LedgerError(),
        ):
            assert isinstance(error, DiplomaRegistryError)

    def test_no_wallet_message_has_instructions(self) -> None:
        assert NoWalletError().message == NO_WALLET_INSTRUCTION
        assert "MetaMask" in NO_WALLET_INSTRUCTION

    def test_ledger_error_defaults_to_generic_message(self) -> None:
        error = LedgerError()
        assert error.message == GENERIC_LEDGER_MESSAGE
        assert error.to_dict() == {
            "kind": "LedgerError",
            "message": GENERIC_LEDGER_MESSAGE,
            "reason": None,
            "user_rejected": False,
            "mutation_confirmed": False,
        }

    def test_to_dict_includes_context(self) -> None:
        assert InvalidAddressError("0xbad").to_dict()["address"] == "0xbad"
        assert ValidationError("bad", fields=("year",)).to_dict()["fields"] == ["year"]
        assert AuthorizationError("holder", "create").to_dict()["role"] == "holder"
        assert NotReadyError("lookup").to_dict()["operation"] == "lookup"

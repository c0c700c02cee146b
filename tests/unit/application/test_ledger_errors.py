"""Unit tests for ledger failure normalization."""

from src.application.ports.diploma_ledger import (
    USER_REJECTED_CODE,
    LedgerSubmissionError,
    SignatureRejectedError,
)
from src.application.services.ledger_errors import (
    extract_reason,
    is_user_rejection,
    to_ledger_error,
)
from src.domain.errors.ledger import GENERIC_LEDGER_MESSAGE, LedgerError


class _ProviderError(Exception):
    def __init__(self, message: str, code: object = None) -> None:
        super().__init__(message)
        self.code = code


class TestToLedgerError:
    def test_reason_preferred_over_message(self) -> None:
        error = to_ledger_error(LedgerSubmissionError(reason="Only admin can perform this action"))
        assert isinstance(error, LedgerError)
        assert error.message == "Only admin can perform this action"
        assert not error.user_rejected

    def test_signature_rejection_flagged(self) -> None:
        error = to_ledger_error(SignatureRejectedError())
        assert error.user_rejected

    def test_provider_code_4001_is_rejection(self) -> None:
        assert is_user_rejection(_ProviderError("denied", code=USER_REJECTED_CODE))
        assert is_user_rejection(_ProviderError("denied", code="ACTION_REJECTED"))
        assert not is_user_rejection(_ProviderError("boom", code=-32000))
        assert not is_user_rejection(_ProviderError("boom", code={"nested": 1}))

    def test_empty_error_gets_generic_message(self) -> None:
        error = to_ledger_error(RuntimeError())
        assert error.reason is None
        assert error.message == GENERIC_LEDGER_MESSAGE

    def test_ledger_error_passes_through(self) -> None:
        original = LedgerError("already normalized")
        assert to_ledger_error(original) is original


def test_extract_reason_strips_text() -> None:
    assert extract_reason(RuntimeError("  timeout  ")) == "timeout"

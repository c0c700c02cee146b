"""Shared addresses and deterministic factories for registry tests."""

from __future__ import annotations

from uuid import UUID

ADMIN = "0x1111111111111111111111111111111111111111"
STUDENT = "0x2222222222222222222222222222222222222222"
OTHER_STUDENT = "0x3333333333333333333333333333333333333333"
VERIFY_BASE_URL = "https://verify.test.example"


class SequentialIds:
    """Certificate id factory yielding predictable UUID strings.

    Usage:
        ids = SequentialIds()
        generator = CertificateGeneratorService(url, id_factory=ids)
        ids.issued  # every id handed out so far
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start
        self.issued: list[str] = []

    def __call__(self) -> str:
        value = str(UUID(int=self._next, version=4))
        self._next += 1
        self.issued.append(value)
        return value

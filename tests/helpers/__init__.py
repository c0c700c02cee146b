"""Test helpers for diploma registry tests.

Helpers:
    ADMIN, STUDENT, OTHER_STUDENT: Well-formed test addresses
    VERIFY_BASE_URL: Verification origin used by certificate tests
    SequentialIds: Deterministic certificate id factory

Usage:
    from tests.helpers import ADMIN, SequentialIds
"""

from tests.helpers.registry_values import (
    ADMIN,
    OTHER_STUDENT,
    STUDENT,
    VERIFY_BASE_URL,
    SequentialIds,
)

__all__ = ["ADMIN", "OTHER_STUDENT", "STUDENT", "VERIFY_BASE_URL", "SequentialIds"]

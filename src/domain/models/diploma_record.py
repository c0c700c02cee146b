"""Diploma record domain models.

This module defines the diploma data the registry works with:
- DiplomaRecord: Immutable diploma as stored on the ledger
- DiplomaDraft: Mutable form state used to create or edit a record

Developer Golden Rules:
1. LEDGER IS AUTHORITATIVE - Records read back from the ledger are
   accepted as-is; validation applies to what we submit
2. FULL REPLACE - An update always carries all four fields
3. TRIM BEFORE SUBMIT - Text inputs are whitespace-trimmed
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from src.domain.errors.diploma import ValidationError

# Field order is significant: it is the ledger argument order and the
# fingerprint concatenation order.
RECORD_FIELDS: tuple[str, ...] = (
    "student_name",
    "diploma_title",
    "institution",
    "year",
)


@dataclass(frozen=True, eq=True)
class DiplomaRecord:
    """A diploma recorded against a holder address.

    Identity is positional within the holder's sequence on the ledger;
    this object itself carries no key.

    Attributes:
        student_name: Name of the graduate.
        diploma_title: Degree or diploma title (e.g. "B.Sc. CS").
        institution: Issuing institution.
        year: Graduation year.
    """

    student_name: str
    diploma_title: str
    institution: str
    year: int

    def field_values(self) -> tuple[str, str, str, str]:
        """Return the four fields as text, in canonical order."""
        return (self.student_name, self.diploma_title, self.institution, str(self.year))

    def search_text(self) -> str:
        """Return the lower-cased text matched by free-text search."""
        return " ".join(self.field_values()).lower()

    def with_year(self, year: int) -> DiplomaRecord:
        """Return a copy with a different year."""
        return DiplomaRecord(
            student_name=self.student_name,
            diploma_title=self.diploma_title,
            institution=self.institution,
            year=year,
        )

    def to_dict(self) -> dict[str, str | int]:
        return {
            "student_name": self.student_name,
            "diploma_title": self.diploma_title,
            "institution": self.institution,
            "year": self.year,
        }


def validate_record(record: DiplomaRecord) -> None:
    """Check that every required field of a record is present.

    Args:
        record: The record about to be submitted.

    Raises:
        ValidationError: If any text field is blank.
    """
    missing = tuple(
        name
        for name in ("student_name", "diploma_title", "institution")
        if not str(getattr(record, name)).strip()
    )
    if missing:
        raise ValidationError(
            f"All fields are required; missing: {', '.join(missing)}",
            fields=missing,
        )


@dataclass
class DiplomaDraft:
    """Editable form state for a diploma.

    Every value is kept as raw text, the way a user typed it. Converting
    to a DiplomaRecord trims, checks presence and parses the year.
    """

    student_name: str = ""
    diploma_title: str = ""
    institution: str = ""
    year: str = ""

    @classmethod
    def from_record(cls, record: DiplomaRecord) -> DiplomaDraft:
        """Copy a record's fields into a new draft (edit mode)."""
        return cls(
            student_name=record.student_name,
            diploma_title=record.diploma_title,
            institution=record.institution,
            year=str(record.year),
        )

    def is_empty(self) -> bool:
        return not any(
            (self.student_name, self.diploma_title, self.institution, self.year)
        )

    def to_record(self) -> DiplomaRecord:
        """Build a validated record from the draft.

        Returns:
            DiplomaRecord with trimmed text and an integer year.

        Raises:
            ValidationError: If a field is blank or the year is not an integer.
        """
        values = {
            "student_name": self.student_name.strip(),
            "diploma_title": self.diploma_title.strip(),
            "institution": self.institution.strip(),
            "year": self.year.strip(),
        }
        missing = tuple(name for name in RECORD_FIELDS if not values[name])
        if missing:
            raise ValidationError(
                f"All fields are required; missing: {', '.join(missing)}",
                fields=missing,
            )

        try:
            year = int(values["year"])
        except ValueError:
            raise ValidationError(
                f"Year must be a whole number, got {values['year']!r}",
                fields=("year",),
            ) from None

        return DiplomaRecord(
            student_name=values["student_name"],
            diploma_title=values["diploma_title"],
            institution=values["institution"],
            year=year,
        )


def matches_query(record: DiplomaRecord, query: str) -> bool:
    """Case-insensitive substring match against "name title institution year".

    An empty query matches every record.
    """
    needle = query.strip().lower()
    return not needle or needle in record.search_text()


def filter_records(
    records: Iterable[DiplomaRecord], query: str
) -> list[DiplomaRecord]:
    """Filter records by free-text search (see matches_query)."""
    return [record for record in records if matches_query(record, query)]

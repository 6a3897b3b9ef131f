# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: Decoded response types.
# ============================================================================
"""Decoded Result Types.

Contains the tagged result variants produced by ResponseDecoder.
This is in a separate file so the paginator and the client can import the
types without pulling in the XML parser.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


class DecodedRecord(Mapping[str, str]):
    """Immutable, ordered mapping of lower-cased field id to value."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, str] | None = None) -> None:
        self._fields: dict[str, str] = dict(fields or {})

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    # Equality comes from Mapping and ignores field order; hash must agree.
    def __hash__(self) -> int:
        return hash(frozenset(self._fields.items()))

    def __repr__(self) -> str:
        return f"DecodedRecord({self._fields!r})"

    def to_dict(self) -> dict[str, str]:
        """Return a mutable copy."""
        return dict(self._fields)


@dataclass(frozen=True)
class EmptyResult:
    """No data: zero records, or one record without fields."""

    def records(self) -> list[DecodedRecord]:
        return []


@dataclass(frozen=True)
class ScalarResult:
    """Single unnamed integer, e.g. the id returned by a save procedure."""

    value: int

    def records(self) -> list[DecodedRecord]:
        return []


@dataclass(frozen=True)
class RecordResult:
    """Exactly one named record."""

    record: DecodedRecord

    def records(self) -> list[DecodedRecord]:
        return [self.record]


@dataclass(frozen=True)
class RowsResult:
    """Several named records, in response order."""

    rows: tuple[DecodedRecord, ...] = field(default_factory=tuple)

    def records(self) -> list[DecodedRecord]:
        return list(self.rows)


DecodedResult = EmptyResult | ScalarResult | RecordResult | RowsResult


def as_records(result: DecodedResult) -> list[dict[str, Any]]:
    """Get result data as a list of plain dicts.

    Returns:
        One dict per record; empty list for Empty and Scalar results.
    """
    return [record.to_dict() for record in result.records()]

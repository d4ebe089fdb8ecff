"""Field lookup on a single row.

A row is the ordered sequence of string fields produced by the CSV reader.
Two accessor strategies share one interface so the entry parser does not
care whether a deployment addresses fields by spreadsheet letters or by
zero-based position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Union

from .columns import column_index
from .errors import FieldIndexError

Row = Sequence[str]
FieldKey = Union[str, int]


def get_field(row: Row, address: str) -> str:
    """Return the field at a spreadsheet column address.

    Raises:
        InvalidAddressError: When ``address`` is not a valid column address.
        FieldIndexError: When the resolved index is outside the row.
    """

    index = column_index(address)
    if index >= len(row):
        raise FieldIndexError(index, len(row), address)
    return row[index]


class FieldAccessor(Protocol):
    """Strategy interface for looking up a row field by key."""

    def get(self, row: Row, key: FieldKey) -> str:
        ...


@dataclass(frozen=True)
class LetterFieldAccessor:
    """Look up fields by spreadsheet column letters (``"A"``, ``"AJ"``)."""

    def get(self, row: Row, key: FieldKey) -> str:
        if not isinstance(key, str):
            raise TypeError(f"Letter addressing expects column letters, got {key!r}")
        return get_field(row, key)


@dataclass(frozen=True)
class PositionFieldAccessor:
    """Look up fields by zero-based position."""

    def get(self, row: Row, key: FieldKey) -> str:
        if isinstance(key, bool) or not isinstance(key, int):
            raise TypeError(f"Position addressing expects integer positions, got {key!r}")
        # Negative positions must not wrap around to the end of the row.
        if key < 0 or key >= len(row):
            raise FieldIndexError(key, len(row))
        return row[key]


__all__ = [
    "FieldAccessor",
    "FieldKey",
    "LetterFieldAccessor",
    "PositionFieldAccessor",
    "Row",
    "get_field",
]

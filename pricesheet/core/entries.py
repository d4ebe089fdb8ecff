"""Entry model and row parsing for the price sheet pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import FieldIndexError, MalformedRowError
from .fields import FieldAccessor, FieldKey, LetterFieldAccessor, PositionFieldAccessor, Row

_INTEGER = re.compile(r"[+-]?[0-9]+")

KeySpec = Union[FieldKey, Sequence[FieldKey]]


class DepositType(Enum):
    """Deposit classification of a beverage container."""

    REUSABLE = "Mehrweg"
    DISPOSABLE = "Einweg"

    @property
    def label(self) -> str:
        """Upper-case label printed on price sheet pages."""
        return self.value.upper()

    @classmethod
    def parse(cls, text: str) -> "DepositType":
        """Classify a free-text field by its first non-blank character.

        ``M``/``m`` means reusable, ``E``/``e`` means disposable.

        Raises:
            ValueError: For blank text or any other leading character.
        """

        stripped = text.strip()
        if not stripped:
            raise ValueError("Deposit type field is blank")
        lead = stripped[0].upper()
        if lead == "M":
            return cls.REUSABLE
        if lead == "E":
            return cls.DISPOSABLE
        raise ValueError(f"Unrecognized deposit type: {text!r}")


class AddressingMode(str, Enum):
    """How a deployment addresses row fields."""

    LETTERS = "letters"
    POSITIONS = "positions"


@dataclass(frozen=True)
class CrateInfo:
    contents: str
    unit_price: str
    price: str
    deposit: str


@dataclass(frozen=True)
class BottleInfo:
    contents: str
    price: str
    deposit: str


@dataclass(frozen=True)
class Entry:
    """Validated projection of one input row; one entry renders as one page."""

    article_no: int
    title: str
    crate: CrateInfo
    bottle: BottleInfo
    deposit_type: DepositType


@dataclass(frozen=True)
class EntryLayout:
    """Field keys each Entry attribute is read from.

    Every attribute holds a tuple of keys. Attributes backed by more than one
    key are joined with ``join``.
    """

    article_no: Tuple[FieldKey, ...]
    title: Tuple[FieldKey, ...]
    crate_contents: Tuple[FieldKey, ...]
    crate_unit_price: Tuple[FieldKey, ...]
    crate_price: Tuple[FieldKey, ...]
    crate_deposit: Tuple[FieldKey, ...]
    bottle_contents: Tuple[FieldKey, ...]
    bottle_price: Tuple[FieldKey, ...]
    bottle_deposit: Tuple[FieldKey, ...]
    deposit_type: Tuple[FieldKey, ...]
    join: str = field(default=" x ")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, KeySpec], join: str = " x ") -> "EntryLayout":
        """Build a layout from ``attribute -> key or keys``.

        Raises:
            TypeError: When the mapping has unknown or missing attributes.
        """

        return cls(join=join, **{name: _as_keys(spec) for name, spec in mapping.items()})

    def override(self, mapping: Mapping[str, KeySpec]) -> "EntryLayout":
        """Return a copy with some attributes re-pointed to other keys."""

        changes = {
            name: (spec if name == "join" else _as_keys(spec)) for name, spec in mapping.items()
        }
        return replace(self, **changes)

    def keys(self) -> List[FieldKey]:
        """All keys referenced by the layout."""

        collected: List[FieldKey] = []
        for attribute in fields(self):
            if attribute.name != "join":
                collected.extend(getattr(self, attribute.name))
        return collected


def _as_keys(spec: KeySpec) -> Tuple[FieldKey, ...]:
    if isinstance(spec, (str, int)):
        return (spec,)
    keys = tuple(spec)
    if not keys:
        raise ValueError("Layout attribute must reference at least one key")
    return keys


LETTER_LAYOUT = EntryLayout.from_mapping(
    {
        "article_no": "A",
        "title": "B",
        "crate_contents": ["C", "D"],
        "crate_unit_price": "AJ",
        "crate_price": "K",
        "crate_deposit": "AL",
        "bottle_contents": "D",
        "bottle_price": "L",
        "bottle_deposit": "AM",
        "deposit_type": "AN",
    }
)

POSITION_LAYOUT = EntryLayout.from_mapping(
    {
        "article_no": 0,
        "title": 1,
        "crate_contents": 2,
        "crate_unit_price": 3,
        "crate_price": 4,
        "crate_deposit": 5,
        "bottle_contents": 6,
        "bottle_price": 7,
        "bottle_deposit": 8,
        "deposit_type": 9,
    }
)


def accessor_for(mode: AddressingMode) -> FieldAccessor:
    if AddressingMode(mode) is AddressingMode.POSITIONS:
        return PositionFieldAccessor()
    return LetterFieldAccessor()


def layout_for(mode: AddressingMode) -> EntryLayout:
    if AddressingMode(mode) is AddressingMode.POSITIONS:
        return POSITION_LAYOUT
    return LETTER_LAYOUT


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"Article number is not an integer: {text!r}")
    return int(text)


def parse_entry(
    row: Row,
    accessor: Optional[FieldAccessor] = None,
    layout: Optional[EntryLayout] = None,
) -> Entry:
    """Parse one row into an :class:`Entry`.

    Args:
        row: Field values of the record.
        accessor: Field lookup strategy; defaults to column letters.
        layout: Keys for every Entry attribute; defaults to
            :data:`LETTER_LAYOUT`.

    Raises:
        MalformedRowError: When the article number is not an integer, a key
            is out of range for the row, or the deposit type is unknown. The
            original error is chained as ``__cause__``.
    """

    accessor = accessor or LetterFieldAccessor()
    layout = layout or LETTER_LAYOUT

    def read(keys: Tuple[FieldKey, ...]) -> str:
        return layout.join.join(accessor.get(row, key) for key in keys)

    try:
        article_no = _parse_int(read(layout.article_no))
        title = read(layout.title)
        crate = CrateInfo(
            contents=read(layout.crate_contents),
            unit_price=read(layout.crate_unit_price),
            price=read(layout.crate_price),
            deposit=read(layout.crate_deposit),
        )
        bottle = BottleInfo(
            contents=read(layout.bottle_contents),
            price=read(layout.bottle_price),
            deposit=read(layout.bottle_deposit),
        )
        deposit_type = DepositType.parse(read(layout.deposit_type))
    except (FieldIndexError, ValueError) as exc:
        raise MalformedRowError(str(exc)) from exc

    return Entry(
        article_no=article_no,
        title=title,
        crate=crate,
        bottle=bottle,
        deposit_type=deposit_type,
    )


@dataclass(frozen=True)
class RejectedRow:
    """A row dropped by :func:`parse_entries`; ``line`` is one-based."""

    line: int
    row: Tuple[str, ...]
    error: MalformedRowError


@dataclass(frozen=True)
class ParseOutcome:
    """Container for pipeline results."""

    entries: List[Entry]
    rejected: List[RejectedRow]


def parse_entries(
    rows: Iterable[Row],
    accessor: Optional[FieldAccessor] = None,
    layout: Optional[EntryLayout] = None,
) -> ParseOutcome:
    """Parse every row, keeping input order and skipping rows that fail.

    Zero-length rows are ignored without being reported as rejected.
    """

    entries: List[Entry] = []
    rejected: List[RejectedRow] = []
    for line, row in enumerate(rows, start=1):
        if len(row) == 0:
            continue
        try:
            entries.append(parse_entry(row, accessor, layout))
        except MalformedRowError as exc:
            rejected.append(RejectedRow(line=line, row=tuple(row), error=exc))
    return ParseOutcome(entries=entries, rejected=rejected)


__all__ = [
    "AddressingMode",
    "BottleInfo",
    "CrateInfo",
    "DepositType",
    "Entry",
    "EntryLayout",
    "LETTER_LAYOUT",
    "POSITION_LAYOUT",
    "ParseOutcome",
    "RejectedRow",
    "accessor_for",
    "layout_for",
    "parse_entries",
    "parse_entry",
]

"""Pure addressing, substitution and parsing logic.

Nothing in this package touches the filesystem or logs.
"""

from .columns import column_index, column_letters
from .entries import (
    LETTER_LAYOUT,
    POSITION_LAYOUT,
    AddressingMode,
    BottleInfo,
    CrateInfo,
    DepositType,
    Entry,
    EntryLayout,
    ParseOutcome,
    RejectedRow,
    accessor_for,
    layout_for,
    parse_entries,
    parse_entry,
)
from .errors import (
    ConfigError,
    FieldIndexError,
    InvalidAddressError,
    MalformedRowError,
    NoDataError,
    PriceSheetError,
)
from .fields import FieldAccessor, LetterFieldAccessor, PositionFieldAccessor, get_field
from .placeholders import PLACEHOLDER_PATTERN, find_placeholders, substitute

__all__ = [
    "AddressingMode",
    "BottleInfo",
    "ConfigError",
    "CrateInfo",
    "DepositType",
    "Entry",
    "EntryLayout",
    "FieldAccessor",
    "FieldIndexError",
    "InvalidAddressError",
    "LETTER_LAYOUT",
    "LetterFieldAccessor",
    "MalformedRowError",
    "NoDataError",
    "PLACEHOLDER_PATTERN",
    "POSITION_LAYOUT",
    "ParseOutcome",
    "PositionFieldAccessor",
    "PriceSheetError",
    "RejectedRow",
    "accessor_for",
    "column_index",
    "column_letters",
    "find_placeholders",
    "get_field",
    "layout_for",
    "parse_entries",
    "parse_entry",
    "substitute",
]

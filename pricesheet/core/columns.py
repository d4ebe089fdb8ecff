"""Spreadsheet column addressing.

Column addresses are bijective base-26 numbers written with the letters
``A``-``Z`` (``A`` is 1, ``Z`` is 26, there is no zero digit), which is
exactly how spreadsheet applications name their columns. The helpers here
convert between that notation and zero-based field indices.
"""

from __future__ import annotations

from .errors import InvalidAddressError

_BASE = 26
_ORD_A = ord("A")


def _is_address(address: str) -> bool:
    return bool(address) and all("A" <= char <= "Z" for char in address)


def column_index(address: str) -> int:
    """Return the zero-based field index for a column address.

    Args:
        address: Uppercase column letters such as ``"A"`` or ``"AJ"``.

    Returns:
        Zero-based index, e.g. ``0`` for ``"A"`` and ``35`` for ``"AJ"``.

    Raises:
        InvalidAddressError: When ``address`` is empty or contains anything
            other than uppercase ASCII letters.
    """

    if not isinstance(address, str) or not _is_address(address):
        raise InvalidAddressError(address)

    index = 0
    for char in address:
        index = index * _BASE + (ord(char) - _ORD_A + 1)
    return index - 1


def column_letters(index: int) -> str:
    """Return the column address for a zero-based field index."""

    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")

    letters = []
    number = index + 1
    while number:
        number, remainder = divmod(number - 1, _BASE)
        letters.append(chr(_ORD_A + remainder))
    return "".join(reversed(letters))


__all__ = ["column_index", "column_letters"]

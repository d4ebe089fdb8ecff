"""Placeholder substitution for template text.

Templates mark fields with ``${<column>}`` tokens, e.g. ``${B}`` or
``${AJ}``. Substitution resolves every token against one row; if any token
fails, the whole substitution fails and nothing is returned.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from .fields import Row, get_field

# Captures anything up to the next closing brace so that malformed content
# such as ``${a}`` or ``${A1}`` reaches the resolver and fails loudly.
PLACEHOLDER_PATTERN = re.compile(r"\$\{(.*?)\}")

ValueEscaper = Callable[[str], str]


def find_placeholders(template: str) -> List[str]:
    """Return the addresses captured by each token, in order of appearance."""

    return [match.group(1) for match in PLACEHOLDER_PATTERN.finditer(template)]


def substitute(row: Row, template: str, *, escape: Optional[ValueEscaper] = None) -> str:
    """Replace every placeholder token in ``template`` with its row field.

    Args:
        row: Field values of a single record.
        template: Arbitrary text containing zero or more ``${...}`` tokens.
        escape: Optional transform applied to each field value before it is
            inserted, e.g. escaping for PDF literal strings.

    Returns:
        The template with all tokens replaced; text outside tokens is kept
        unchanged.

    Raises:
        InvalidAddressError: When a token does not hold a valid column address.
        FieldIndexError: When a token addresses a column beyond the row.
    """

    parts: List[str] = []
    position = 0
    for match in PLACEHOLDER_PATTERN.finditer(template):
        value = get_field(row, match.group(1))
        parts.append(template[position : match.start()])
        parts.append(escape(value) if escape else value)
        position = match.end()
    if not parts:
        return template
    parts.append(template[position:])
    return "".join(parts)


__all__ = ["PLACEHOLDER_PATTERN", "ValueEscaper", "find_placeholders", "substitute"]

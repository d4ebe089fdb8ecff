"""Unit tests for placeholder substitution."""

from __future__ import annotations

import pytest

from pricesheet.core.errors import FieldIndexError, InvalidAddressError
from pricesheet.core.placeholders import find_placeholders, substitute


@pytest.mark.parametrize("template", ["", "plain text", "price: 1.99 $", "{A}", "$A", "${"])
def test_template_without_tokens_is_unchanged(template: str) -> None:
    assert substitute(["x", "y"], template) == template
    assert substitute([], template) == template


def test_single_token_template() -> None:
    assert substitute(["x"], "${A}") == "x"


def test_surrounding_text_is_preserved() -> None:
    row = ["7", "Cola"]
    assert substitute(row, "BT (${B}) Tj [${A}]\n ET") == "BT (Cola) Tj [7]\n ET"


def test_adjacent_tokens_resolve_independently() -> None:
    row = ["a", "b", "c"]
    assert substitute(row, "${C}${A}${B}${A}") == "caba"


def test_multi_letter_addresses() -> None:
    row = [str(i) for i in range(40)]
    assert substitute(row, "${AJ}/${AN}") == "35/39"


def test_non_greedy_match_stops_at_first_brace() -> None:
    row = ["x", "y"]
    assert substitute(row, "${A}}${B}") == "x}y"


def test_out_of_range_token_fails_whole_substitution() -> None:
    with pytest.raises(FieldIndexError):
        substitute(["only"], "first=${A} second=${B}")


@pytest.mark.parametrize("template", ["${a}", "${A1}", "${}", "ok ${A} bad ${b}"])
def test_invalid_address_surfaces(template: str) -> None:
    with pytest.raises(InvalidAddressError):
        substitute(["x", "y"], template)


def test_escape_is_applied_to_values_only() -> None:
    escaped = substitute(["(a)"], "(${A})", escape=lambda value: value.upper())
    assert escaped == "((A))"


def test_find_placeholders_lists_tokens_in_order() -> None:
    assert find_placeholders("${B} and ${AJ} and ${B} and ${x}") == ["B", "AJ", "B", "x"]
    assert find_placeholders("nothing here") == []

# topmark:header:start
#
#   project      : webext-typings
#   file         : test_identifiers.py
#   file_relpath : tests/declarations/test_identifiers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for identifier classification and reserved words."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from tests.conftest import parametrize
from webext_typings.declarations.identifiers import (
    IdentifierTreatment,
    find_identifier_treatment,
    is_reserved_word,
    is_valid_identifier,
)


@parametrize(
    "name, treatment",
    [
        ("tabs", IdentifierTreatment.VALID),
        ("_private", IdentifierTreatment.VALID),
        ("$x1", IdentifierTreatment.VALID),
        ("foo-bar", IdentifierTreatment.ESCAPED),
        ("3d", IdentifierTreatment.ESCAPED),
        ("with space", IdentifierTreatment.ESCAPED),
        ("", IdentifierTreatment.INVALID),
        ("123", IdentifierTreatment.INVALID),
        ("-", IdentifierTreatment.INVALID),
    ],
)
def test_identifier_treatment(name: str, treatment: IdentifierTreatment) -> None:
    """It should classify names as valid, escaped, or invalid member names."""
    assert find_identifier_treatment(name) is treatment


@parametrize("word", ["delete", "import", "default", "function", "null"])
def test_reserved_words(word: str) -> None:
    """It should flag words that cannot name an exported function."""
    assert is_reserved_word(word)
    assert is_valid_identifier(word)


def test_ordinary_names_are_not_reserved() -> None:
    """It should not flag ordinary API names."""
    assert not is_reserved_word("create")
    assert not is_reserved_word("Delete")


@given(st.from_regex(r"[A-Za-z_$][A-Za-z0-9_$]{0,15}", fullmatch=True))
def test_plain_identifiers_are_valid(name: str) -> None:
    """It should accept every name that matches the plain identifier grammar."""
    assert is_valid_identifier(name)

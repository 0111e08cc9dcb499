# topmark:header:start
#
#   project      : webext-typings
#   file         : identifiers.py
#   file_relpath : src/webext_typings/declarations/identifiers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identifier rules of the declaration language.

A schema name can be used in three ways:

- ``VALID``: a plain identifier, emitted as is (``fooBar``);
- ``ESCAPED``: not an identifier but usable as a quoted member key
  (``"foo-bar"``);
- ``INVALID``: unusable as a member name at all (the empty string).
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

_PLAIN_IDENTIFIER_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class IdentifierTreatment(Enum):
    """How a name must be rendered when used as a member name."""

    INVALID = 0
    VALID = 1
    ESCAPED = 2


def find_identifier_treatment(name: str) -> IdentifierTreatment:
    """Classify ``name`` as a valid, escaped, or invalid member name."""
    if _PLAIN_IDENTIFIER_RE.match(name):
        return IdentifierTreatment.VALID
    if any(ch.isalpha() or ch in "$_" for ch in name):
        return IdentifierTreatment.ESCAPED
    return IdentifierTreatment.INVALID


def is_valid_identifier(name: str) -> bool:
    """Return True if ``name`` can be emitted without quoting."""
    return find_identifier_treatment(name) is IdentifierTreatment.VALID


# Words that cannot name an exported function in the declaration language.
RESERVED_WORDS: Final[frozenset[str]] = frozenset(
    {
        # ECMAScript reserved words
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        # Literal keywords
        "false",
        "null",
        "true",
        # Strict mode reserved words
        "implements",
        "interface",
        "let",
        "package",
        "private",
        "protected",
        "public",
        "static",
        "yield",
    }
)


def is_reserved_word(name: str) -> bool:
    """Return True if ``name`` collides with a reserved word."""
    return name in RESERVED_WORDS

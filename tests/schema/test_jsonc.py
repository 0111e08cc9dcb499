# topmark:header:start
#
#   project      : webext-typings
#   file         : test_jsonc.py
#   file_relpath : tests/schema/test_jsonc.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for comment stripping in schema JSON."""

from __future__ import annotations

import json

import pytest

from tests.conftest import parametrize
from webext_typings.schema.jsonc import loads_jsonc, strip_json_comments


def test_license_header_and_inline_comments_are_removed() -> None:
    """It should drop a leading block comment and trailing line comments."""
    text = (
        "/* This Source Code Form is subject to the terms of the MPL. */\n"
        "[\n"
        '  {"namespace": "tabs"} // the tabs API\n'
        "]\n"
    )
    assert loads_jsonc(text) == [{"namespace": "tabs"}]


@parametrize(
    "text, expected",
    [
        ('{"url": "https://example.com"}', {"url": "https://example.com"}),
        ('{"glob": "/*.js"}', {"glob": "/*.js"}),
        ('{"quote": "say \\"//hi\\""}', {"quote": 'say "//hi"'}),
    ],
)
def test_comment_markers_inside_strings_are_kept(text: str, expected: object) -> None:
    """It should leave ``//`` and ``/*`` inside string literals alone."""
    assert loads_jsonc(text) == expected


def test_line_breaks_inside_block_comments_are_preserved() -> None:
    """It should keep the line count so decoder errors point at the right line."""
    text = "/* one\ntwo\nthree */[1]"
    stripped = strip_json_comments(text)
    assert stripped.count("\n") == 2
    assert json.loads(stripped) == [1]


def test_invalid_json_raises_decode_error() -> None:
    """It should surface JSON errors to the caller."""
    with pytest.raises(json.JSONDecodeError):
        loads_jsonc("[1, // trailing\n")

# topmark:header:start
#
#   project      : webext-typings
#   file         : jsonc.py
#   file_relpath : src/webext_typings/schema/jsonc.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON-with-comments (JSONC) support for schema files.

WebExtension schema files usually start with a license comment block and may
carry ``//`` comments between entries. Plain `json` rejects both, so comments
are blanked out first by a tiny state machine that never touches the contents
of JSON strings (URLs such as ``"https://..."`` survive intact).
"""

from __future__ import annotations

import json
from typing import Any


def strip_json_comments(text: str) -> str:
    r"""Return ``text`` with ``//`` and ``/* ... */`` comments removed.

    Tracks three states: in_string (JSON double-quoted), in_line_comment and
    in_block_comment. String escapes (e.g. ``\"``) are honored. Line breaks
    inside removed comments are kept so decoder error positions still point
    at the right line.
    """
    out: list[str] = []
    in_string = False
    in_line_comment = False
    in_block_comment = False
    i: int = 0
    n: int = len(text)

    while i < n:
        ch: str = text[i]

        if in_line_comment:
            if ch == "\n" or ch == "\r":
                in_line_comment = False
                out.append(ch)
            i += 1
            continue

        if in_block_comment:
            if ch == "*" and i + 1 < n and text[i + 1] == "/":
                in_block_comment = False
                i += 2
            else:
                if ch == "\n" or ch == "\r":
                    out.append(ch)
                i += 1
            continue

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                # Copy the escaped code point verbatim
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == "/" and i + 1 < n:
            nxt: str = text[i + 1]
            if nxt == "/":
                in_line_comment = True
                i += 2
                continue
            if nxt == "*":
                in_block_comment = True
                i += 2
                continue

        if ch == '"':
            in_string = True

        out.append(ch)
        i += 1

    return "".join(out)


def loads_jsonc(text: str) -> Any:
    """Decode a JSON document that may contain comments.

    Raises:
        json.JSONDecodeError: If the document is not valid JSON once comments are removed.
    """
    return json.loads(strip_json_comments(text))

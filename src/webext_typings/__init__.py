# topmark:header:start
#
#   project      : webext-typings
#   file         : __init__.py
#   file_relpath : src/webext_typings/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""webext-typings package.

webext-typings turns a directory of WebExtension API schema fragments into a
single TypeScript declaration file. It merges the fragments into a namespace
catalog, maps every schema descriptor onto declaration nodes, and prints the
resulting tree. It exposes both a CLI and a small typed engine API.
"""

from __future__ import annotations

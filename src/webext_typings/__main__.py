# topmark:header:start
#
#   project      : webext-typings
#   file         : __main__.py
#   file_relpath : src/webext_typings/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running webext-typings via ``python -m webext_typings``.

Examples:
    Generate declarations using the module interface::

        python -m webext_typings generate --schema-dir schemas --outfile types/messenger.d.ts
"""

from __future__ import annotations

from webext_typings.cli.main import cli

if __name__ == "__main__":
    cli()

# topmark:header:start
#
#   project      : webext-typings
#   file         : __init__.py
#   file_relpath : src/webext_typings/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the ``webext-typings`` CLI."""

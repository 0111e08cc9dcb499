# topmark:header:start
#
#   project      : webext-typings
#   file         : __init__.py
#   file_relpath : src/webext_typings/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, dependency-free building blocks shared by the engine and the CLI."""

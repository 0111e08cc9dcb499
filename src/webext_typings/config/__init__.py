# topmark:header:start
#
#   project      : webext-typings
#   file         : __init__.py
#   file_relpath : src/webext_typings/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer: logging setup, TOML keys and I/O, and the config model.

The package itself imports nothing so that `webext_typings.config.logging`
stays importable from every layer. Import the model types from
`webext_typings.config.model`.
"""

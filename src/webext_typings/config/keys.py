# topmark:header:start
#
#   project      : webext-typings
#   file         : keys.py
#   file_relpath : src/webext_typings/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for webext-typings configuration.

The constants below are the external configuration schema, as it appears in
``webext-typings.toml`` and under ``[tool.webext-typings]`` in
``pyproject.toml``. Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by webext-typings configuration."""

    # [generator]
    SECTION_GENERATOR: Final[str] = "generator"

    KEY_ROOT_NAMESPACE: Final[str] = "root_namespace"
    KEY_ALIAS_NAMESPACE: Final[str] = "alias_namespace"
    KEY_IGNORED_NAMESPACES: Final[str] = "ignored_namespaces"
    KEY_HOST_INTERFACE: Final[str] = "host_interface"
    KEY_EVENT_INTERFACE: Final[str] = "event_interface"

    # [io]
    SECTION_IO: Final[str] = "io"

    KEY_SCHEMA_DIR: Final[str] = "schema_dir"
    KEY_OUTFILE: Final[str] = "outfile"

    # ---------------------------- Schema helpers ----------------------------

    ALLOWED_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset({SECTION_GENERATOR, SECTION_IO})

    ALLOWED_SECTION_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_GENERATOR: frozenset(
            {
                KEY_ROOT_NAMESPACE,
                KEY_ALIAS_NAMESPACE,
                KEY_IGNORED_NAMESPACES,
                KEY_HOST_INTERFACE,
                KEY_EVENT_INTERFACE,
            }
        ),
        SECTION_IO: frozenset(
            {
                KEY_SCHEMA_DIR,
                KEY_OUTFILE,
            }
        ),
    }

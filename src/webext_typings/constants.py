# topmark:header:start
#
#   project      : webext-typings
#   file         : constants.py
#   file_relpath : src/webext_typings/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""webext-typings constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    WEBEXT_TYPINGS_VERSION: str = get_version("webext-typings")
except PackageNotFoundError:  # pragma: no cover - only when running from a bare checkout
    WEBEXT_TYPINGS_VERSION = "0.0.0"

# Environment variable consulted for the internal log level
LOG_LEVEL_ENV_VAR: Final[str] = "WEBEXT_TYPINGS_LOG_LEVEL"

# Configuration discovery
CONFIG_FILE_NAME: Final[str] = "webext-typings.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_TABLE: Final[str] = "webext-typings"

# Schema discovery
SCHEMA_FILE_SUFFIX: Final[str] = ".json"

# Namespace whose types may be referenced without qualification from any namespace
MANIFEST_NAMESPACE: Final[str] = "manifest"

# Generated artifact defaults
DEFAULT_ROOT_NAMESPACE: Final[str] = "messenger"
DEFAULT_HOST_INTERFACE: Final[str] = "Window"
DEFAULT_EVENT_INTERFACE: Final[str] = "WebExtEvent"
DEFERRED_RESULT_WRAPPER: Final[str] = "Promise"
CALLBACK_PARAMETER_NAME: Final[str] = "callback"
RESERVED_NAME_PREFIX: Final[str] = "__"

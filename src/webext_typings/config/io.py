# topmark:header:start
#
#   project      : webext-typings
#   file         : io.py
#   file_relpath : src/webext_typings/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML configuration I/O.

Parsing is done with `tomlkit` and returned as plain ``dict`` structures.
Unlike the generator, a broken configuration is fatal: unreadable or
malformed files and values of the wrong type raise `ConfigError`. Unknown
sections and keys are only reported as warnings.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from webext_typings.config.keys import Toml
from webext_typings.config.logging import get_logger
from webext_typings.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_EVENT_INTERFACE,
    DEFAULT_HOST_INTERFACE,
    DEFAULT_ROOT_NAMESPACE,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_TABLE,
)

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.diagnostic.model import DiagnosticLog

logger: WebextLogger = get_logger(__name__)

TomlTable = dict[str, Any]


class ConfigError(Exception):
    """A configuration source is unreadable, malformed, or holds a wrong value type."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(f"{path}: {message}" if path is not None else message)
        self.path = path


def load_defaults_dict() -> TomlTable:
    """Return the built-in defaults as a fresh TOML-shaped dict."""
    return {
        Toml.SECTION_GENERATOR: {
            Toml.KEY_ROOT_NAMESPACE: DEFAULT_ROOT_NAMESPACE,
            Toml.KEY_IGNORED_NAMESPACES: [],
            Toml.KEY_HOST_INTERFACE: DEFAULT_HOST_INTERFACE,
            Toml.KEY_EVENT_INTERFACE: DEFAULT_EVENT_INTERFACE,
        },
        Toml.SECTION_IO: {},
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as exc:
        raise ConfigError(f"cannot read configuration ({exc.strerror or exc})", path) from exc
    except TomlkitParseError as exc:
        raise ConfigError(f"invalid TOML ({exc})", path) from exc
    data: Any = doc.unwrap()
    logger.debug("Loaded TOML from %s", path)
    return cast("TomlTable", data) if isinstance(data, dict) else {}


def extract_tool_table(pyproject: TomlTable) -> TomlTable | None:
    """Return ``[tool.webext-typings]`` from a parsed ``pyproject.toml``, if present."""
    tool = pyproject.get("tool")
    if not isinstance(tool, dict):
        return None
    table = tool.get(PYPROJECT_TOOL_TABLE)
    return cast("TomlTable", table) if isinstance(table, dict) else None


def discover_config_files(directory: Path) -> list[Path]:
    """Return the configuration files of ``directory``, lowest precedence first.

    ``pyproject.toml`` is only listed when it carries a ``[tool.webext-typings]``
    table; ``webext-typings.toml`` follows it.
    """
    found: list[Path] = []
    pyproject = directory / PYPROJECT_FILE_NAME
    if pyproject.is_file() and extract_tool_table(load_toml_dict(pyproject)) is not None:
        found.append(pyproject)
    tool_file = directory / CONFIG_FILE_NAME
    if tool_file.is_file():
        found.append(tool_file)
    logger.debug("Discovered config files in %s: %s", directory, found)
    return found


def check_unknown_keys(
    data: TomlTable, diagnostics: DiagnosticLog, source: str = "configuration"
) -> None:
    """Record a warning for every unknown section or key in ``data``."""
    for section, value in data.items():
        if section not in Toml.ALLOWED_TOP_LEVEL_KEYS:
            diagnostics.add_warning(f"Unknown section [{section}] in {source}")
            continue
        if not isinstance(value, dict):
            continue
        allowed = Toml.ALLOWED_SECTION_KEYS.get(section, frozenset())
        for key in value:
            if key not in allowed:
                diagnostics.add_warning(f"Unknown key '{key}' in [{section}] of {source}")


def get_table_value(table: TomlTable, key: str, path: Path | None = None) -> TomlTable:
    """Return the sub-table ``key`` (empty when missing).

    Raises:
        ConfigError: If ``key`` is present but not a table.
    """
    value = table.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"[{key}] must be a table", path)
    return cast("TomlTable", value)


def get_string_value_or_none(
    table: TomlTable, key: str, section: str, path: Path | None = None
) -> str | None:
    """Return the string ``key`` of ``table`` (None when missing).

    Raises:
        ConfigError: If the value is present but not a string.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(
            f"'{key}' in [{section}] must be a string, got {type(value).__name__}", path
        )
    return value


def get_string_list_or_none(
    table: TomlTable, key: str, section: str, path: Path | None = None
) -> list[str] | None:
    """Return the list of strings ``key`` of ``table`` (None when missing).

    Raises:
        ConfigError: If the value is not a list of strings.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' in [{section}] must be a list of strings", path)
    return list(value)


def to_toml(table: TomlTable) -> str:
    """Serialize a TOML-shaped dict to text."""
    return tomlkit.dumps(table)


def resolve_config_path(value: str, config_file: Path | None) -> Path:
    """Return ``value`` as a path, relative paths anchored at the config file's directory."""
    path = Path(value).expanduser()
    if config_file is not None and not path.is_absolute():
        return config_file.parent.resolve() / path
    return path

# topmark:header:start
#
#   project      : webext-typings
#   file         : cmd_common.py
#   file_relpath : src/webext_typings/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

Small helpers shared by the subcommands: configuration resolution, mapping
of collaborator exceptions to CLI errors, and diagnostic output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from webext_typings.cli.errors import (
    WebextConfigError,
    WebextError,
    WebextFileNotFoundError,
    WebextIOError,
    WebextPermissionDeniedError,
    WebextUsageError,
)
from webext_typings.config.io import ConfigError
from webext_typings.config.logging import get_logger
from webext_typings.config.model import MutableConfig
from webext_typings.diagnostic.model import DiagnosticLevel
from webext_typings.engine import OutputDirectoryError
from webext_typings.schema.loader import SchemaDirectoryError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from webext_typings.cli.console import ConsoleLike
    from webext_typings.config.logging import WebextLogger
    from webext_typings.config.model import Config
    from webext_typings.diagnostic.model import Diagnostic, DiagnosticStats

logger: WebextLogger = get_logger(__name__)

_LEVEL_THRESHOLDS: dict[DiagnosticLevel, int] = {
    DiagnosticLevel.INFO: logging.INFO,
    DiagnosticLevel.WARNING: logging.WARNING,
    DiagnosticLevel.ERROR: logging.CRITICAL,
}


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (a logging level) set by the group."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return int(obj.get("verbosity_level", logging.WARNING))


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the Click context by the group."""
    return ctx.obj["console"]


def resolve_config_from_click(
    *,
    no_config: bool,
    config_paths: Sequence[str],
    schema_dir: str | None = None,
    outfile: str | None = None,
    root_namespace: str | None = None,
    alias_namespace: str | None = None,
    ignored_namespaces: Sequence[str] = (),
) -> Config:
    """Build the frozen `Config` for a command.

    Resolution order (lowest to highest precedence): built-in defaults,
    ``[tool.webext-typings]`` in ``./pyproject.toml``, ``./webext-typings.toml``
    (both skipped with ``--no-config``), ``--config`` files in order, and the
    command-line options.

    Raises:
        WebextConfigError: If a configuration source is unreadable or invalid.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
        draft.apply_cli_args(
            {
                "schema_dir": schema_dir,
                "outfile": outfile,
                "root_namespace": root_namespace,
                "alias_namespace": alias_namespace,
                "ignored_namespaces": list(ignored_namespaces),
            }
        )
        return draft.freeze()
    except ConfigError as exc:
        raise WebextConfigError(str(exc)) from exc


def require_path(value: Path | None, option: str, key: str) -> Path:
    """Return ``value`` or fail with a usage error naming the option and config key."""
    if value is None:
        raise WebextUsageError(f"Missing {option} (or '{key}' in the [io] config section).")
    return value


def as_cli_error(exc: Exception) -> WebextError:
    """Map a file-system exception from the loader or engine to a CLI error."""
    if isinstance(exc, SchemaDirectoryError):
        if exc.reason == "Permission denied":
            return WebextPermissionDeniedError(str(exc))
        return WebextFileNotFoundError(str(exc))
    if isinstance(exc, OutputDirectoryError):
        return WebextFileNotFoundError(f"{exc} (use --force to create it)")
    if isinstance(exc, PermissionError):
        return WebextPermissionDeniedError(str(exc))
    return WebextIOError(str(exc))


def is_visible(level: DiagnosticLevel, verbosity: int) -> bool:
    """Return True if a diagnostic at ``level`` is shown at ``verbosity``."""
    return _LEVEL_THRESHOLDS[level] >= verbosity


def emit_diagnostics(
    console: ConsoleLike, diagnostics: Iterable[Diagnostic], *, verbosity: int
) -> int:
    """Print the visible diagnostics, coloured by level.

    Returns:
        int: The number of diagnostics printed.
    """
    color = getattr(console, "enable_color", False)
    shown = 0
    for diagnostic in diagnostics:
        if not is_visible(diagnostic.level, verbosity):
            continue
        text = str(diagnostic)
        console.print(diagnostic.level.color(text) if color else text)
        shown += 1
    return shown


def summary_line(stats: DiagnosticStats) -> str:
    """Return the ``N error(s), N warning(s), N info(s)`` summary."""
    return f"{stats.n_error} error(s), {stats.n_warning} warning(s), {stats.n_info} info(s)"

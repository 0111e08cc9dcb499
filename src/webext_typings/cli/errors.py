# topmark:header:start
#
#   project      : webext-typings
#   file         : errors.py
#   file_relpath : src/webext_typings/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the webext-typings CLI.

Raise these in commands to signal errors with standardized messages and exit
codes. They prefer the project console if one is present in the Click context
(see `WebextError.show`), and fall back to Click's default display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from webext_typings.core.exit_codes import ExitCode


class WebextError(click.ClickException):
    """Base class for all webext-typings CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colour is applied in `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class WebextUsageError(WebextError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class WebextConfigError(WebextError):
    """Error for configuration errors (unreadable/malformed config, bad values)."""

    exit_code = ExitCode.CONFIG_ERROR


class WebextFileNotFoundError(WebextError):
    """Error when the schema directory (or output directory) does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class WebextPermissionDeniedError(WebextError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class WebextIOError(WebextError):
    """Error for I/O errors reading schemas or writing the declaration file."""

    exit_code = ExitCode.IO_ERROR


class WebextStrictModeError(WebextError):
    """Error diagnostics were reported and ``--strict`` is in effect."""

    exit_code = ExitCode.FAILURE


class WebextInternalError(WebextError):
    """Error for internal invariant violations (a defect, not bad input)."""

    exit_code = ExitCode.INTERNAL_ERROR

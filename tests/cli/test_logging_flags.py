# topmark:header:start
#
#   project      : webext-typings
#   file         : test_logging_flags.py
#   file_relpath : tests/cli/test_logging_flags.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: verbosity and quietness flags.

Ensures that combinations of `-v`/`-vvv` and `-q`/`-qq` parse correctly,
map onto the diagnostics threshold, and that invoking `webext-typings version`
with them exits successfully.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import parametrize
from webext_typings.cli.cmd_common import is_visible
from webext_typings.cli.errors import WebextUsageError
from webext_typings.cli.options import resolve_verbosity
from webext_typings.config.logging import TRACE_LEVEL
from webext_typings.diagnostic.model import DiagnosticLevel

if TYPE_CHECKING:
    from click.testing import Result

pytestmark = pytest.mark.cli


def test_verbose_and_quiet_flags_parse() -> None:
    """It should accept verbosity and quietness flags and exit with code 0."""
    for args in (["-v", "version"], ["-vvv", "version"], ["-q", "version"], ["-qq", "version"]):
        result: Result = run_cli(args)

        assert_SUCCESS(result)


@parametrize(
    "verbose, quiet, level",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (4, 0, TRACE_LEVEL),
        (0, 2, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, level: int) -> None:
    """It should map flag counts onto a logging level."""
    assert resolve_verbosity(verbose, quiet) == level


def test_resolve_verbosity_rejects_both() -> None:
    """It should refuse ``-v`` together with ``-q``."""
    with pytest.raises(WebextUsageError):
        resolve_verbosity(1, 1)


@parametrize(
    "verbosity, visible",
    [
        (logging.WARNING, {DiagnosticLevel.ERROR, DiagnosticLevel.WARNING}),
        (logging.INFO, set(DiagnosticLevel)),
        (logging.ERROR, {DiagnosticLevel.ERROR}),
    ],
)
def test_diagnostic_visibility(verbosity: int, visible: set[DiagnosticLevel]) -> None:
    """It should always show errors, warnings unless quiet, and infos when verbose."""
    assert {level for level in DiagnosticLevel if is_visible(level, verbosity)} == visible

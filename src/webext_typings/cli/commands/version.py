# topmark:header:start
#
#   project      : webext-typings
#   file         : version.py
#   file_relpath : src/webext_typings/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""``version`` command.

Prints the webext-typings version as installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from webext_typings.cli.cli_types import EnumChoiceParam, OutputFormat
from webext_typings.cli.cmd_common import get_console
from webext_typings.constants import WEBEXT_TYPINGS_VERSION


@click.command(
    name="version",
    help="Show the current version of webext-typings.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of webext-typings."""
    console = get_console(click.get_current_context())
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps({"version": WEBEXT_TYPINGS_VERSION}))
    else:
        console.print(console.styled(WEBEXT_TYPINGS_VERSION, bold=True))

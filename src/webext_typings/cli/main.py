# topmark:header:start
#
#   project      : webext-typings
#   file         : main.py
#   file_relpath : src/webext_typings/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for the ``webext-typings`` command.

Group-level options (verbosity, colour) are initialized once and placed into
``ctx.obj`` for the subcommands.
"""

from __future__ import annotations

import click

from webext_typings.cli.commands.generate import generate_command
from webext_typings.cli.commands.namespaces import namespaces_command
from webext_typings.cli.commands.version import version_command
from webext_typings.cli.console import ClickConsole
from webext_typings.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from webext_typings.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Generate TypeScript declarations from WebExtension API schemas.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the webext-typings CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
    )
    if ctx.invoked_subcommand is None:
        console = ctx.obj["console"]
        console.print("Hint: use 'webext-typings generate --schema-dir DIR --outfile FILE'.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(generate_command)

cli.add_command(namespaces_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()

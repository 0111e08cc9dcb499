# topmark:header:start
#
#   project      : webext-typings
#   file         : generate.py
#   file_relpath : src/webext_typings/cli/commands/generate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""``generate`` command: write the TypeScript declaration file.

Loads the schema directory, generates the declarations, writes the output
file, then prints the diagnostics (gated by verbosity) and a summary line.
Schema defects never abort the run; ``--strict`` turns error diagnostics
into a non-zero exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from webext_typings.cli.cmd_common import (
    as_cli_error,
    emit_diagnostics,
    get_console,
    get_effective_verbosity,
    require_path,
    resolve_config_from_click,
    summary_line,
)
from webext_typings.cli.errors import WebextInternalError, WebextStrictModeError
from webext_typings.cli.options import common_config_options, schema_dir_option
from webext_typings.config.io import to_toml
from webext_typings.config.logging import get_logger
from webext_typings.engine import OutputDirectoryError, create_typings_file
from webext_typings.generator.errors import ContextCorruptedError
from webext_typings.schema.loader import SchemaDirectoryError

if TYPE_CHECKING:
    from webext_typings.engine import GenerationResult

logger = get_logger(__name__)


@click.command(
    name="generate",
    help="Generate a TypeScript declaration file from WebExtension API schemas.",
)
@schema_dir_option
@click.option(
    "--outfile",
    "outfile",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Path of the .d.ts file to write.",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Create the output directory if it does not exist.",
)
@common_config_options
@click.option(
    "--root-namespace",
    "root_namespace",
    default=None,
    help="Name of the ambient root namespace (default: messenger).",
)
@click.option(
    "--alias-namespace",
    "alias_namespace",
    default=None,
    help="Re-export every namespace under this second root (e.g. browser).",
)
@click.option(
    "--ignore-namespace",
    "ignored_namespaces",
    multiple=True,
    metavar="NS",
    help="Leave this namespace out of the output (repeatable).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with a failure code when error diagnostics were reported.",
)
def generate_command(
    *,
    schema_dir: str | None,
    outfile: str | None,
    force: bool,
    no_config: bool,
    config_paths: tuple[str, ...],
    root_namespace: str | None,
    alias_namespace: str | None,
    ignored_namespaces: tuple[str, ...],
    strict: bool,
) -> None:
    """Generate the declaration file and report diagnostics."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    verbosity = get_effective_verbosity(ctx)

    config = resolve_config_from_click(
        no_config=no_config,
        config_paths=config_paths,
        schema_dir=schema_dir,
        outfile=outfile,
        root_namespace=root_namespace,
        alias_namespace=alias_namespace,
        ignored_namespaces=ignored_namespaces,
    )
    schema_path = require_path(config.schema_dir, "--schema-dir", "schema_dir")
    outfile_path = require_path(config.outfile, "--outfile", "outfile")
    logger.debug("Effective config:\n%s", to_toml(config.to_toml_dict()))

    try:
        result: GenerationResult = create_typings_file(
            schema_path, outfile_path, force=force, config=config
        )
    except (SchemaDirectoryError, OutputDirectoryError, OSError) as exc:
        raise as_cli_error(exc) from exc
    except ContextCorruptedError as exc:
        logger.exception("Generator context corrupted")
        raise WebextInternalError(f"Internal error: {exc}") from exc

    emit_diagnostics(console, result.diagnostics, verbosity=verbosity)
    stats = result.diagnostics.stats()
    console.print(
        console.styled(
            f"Wrote {result.outfile} ({len(result.namespaces)} namespace(s)): "
            f"{summary_line(stats)}",
            bold=True,
        )
    )
    if strict and result.diagnostics.has_error():
        raise WebextStrictModeError(
            f"{stats.n_error} error diagnostic(s) reported and --strict is in effect."
        )

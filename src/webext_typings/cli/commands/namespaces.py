# topmark:header:start
#
#   project      : webext-typings
#   file         : namespaces.py
#   file_relpath : src/webext_typings/cli/commands/namespaces.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""``namespaces`` command: list the merged schema catalog."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from webext_typings.cli.cli_types import EnumChoiceParam, OutputFormat
from webext_typings.cli.cmd_common import (
    as_cli_error,
    emit_diagnostics,
    get_console,
    get_effective_verbosity,
    require_path,
    resolve_config_from_click,
)
from webext_typings.cli.options import common_config_options, schema_dir_option
from webext_typings.diagnostic.model import DiagnosticLog
from webext_typings.schema.loader import SchemaDirectoryError, load_catalog

if TYPE_CHECKING:
    from webext_typings.schema.catalog import NamespaceEntry


def namespace_summary(entry: NamespaceEntry) -> dict[str, Any]:
    """Return the listing record of one catalog entry."""
    return {
        "namespace": entry.name,
        "types": len(entry.types),
        "functions": len(entry.functions),
        "events": len(entry.events),
        "properties": len(entry.properties),
        "source_file": entry.source_file,
    }


@click.command(
    name="namespaces",
    help="List the namespaces of the merged schema catalog.",
)
@schema_dir_option
@common_config_options
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def namespaces_command(
    *,
    schema_dir: str | None,
    no_config: bool,
    config_paths: tuple[str, ...],
    output_format: OutputFormat | None = None,
) -> None:
    """List namespace names with their type, function, event, and property counts."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    config = resolve_config_from_click(
        no_config=no_config, config_paths=config_paths, schema_dir=schema_dir
    )
    schema_path = require_path(config.schema_dir, "--schema-dir", "schema_dir")

    diagnostics = DiagnosticLog()
    try:
        catalog = load_catalog(schema_path, diagnostics)
    except SchemaDirectoryError as exc:
        raise as_cli_error(exc) from exc
    records = [namespace_summary(entry) for entry in catalog.values()]

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(
            json.dumps(
                {"namespaces": records, "diagnostics": diagnostics.to_dict()},
                indent=2,
            )
        )
        return

    emit_diagnostics(console, diagnostics, verbosity=get_effective_verbosity(ctx))
    if not records:
        console.print(console.styled("No namespaces found.", fg="blue"))
        return
    width = max(len(record["namespace"]) for record in records)
    for record in records:
        console.print(
            f"{console.styled(record['namespace'].ljust(width), bold=True)}  "
            f"types={record['types']} functions={record['functions']} "
            f"events={record['events']} properties={record['properties']}  "
            f"({record['source_file']})"
        )

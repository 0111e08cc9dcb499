# topmark:header:start
#
#   project      : webext-typings
#   file         : engine.py
#   file_relpath : src/webext_typings/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end generation: schema directory in, declaration file out.

This module wires the collaborators together:

    load_catalog -> assemble_declarations -> print_declarations -> write

Generation itself never raises for schema defects; those surface as
diagnostics in the returned `GenerationResult`. File-system problems raise
`SchemaDirectoryError` (input side) or `OutputDirectoryError` /
`PermissionError` / `OSError` (output side).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from webext_typings.config.logging import get_logger
from webext_typings.config.model import Config
from webext_typings.constants import WEBEXT_TYPINGS_VERSION
from webext_typings.declarations.printer import print_declarations
from webext_typings.diagnostic.model import DiagnosticLog
from webext_typings.generator.namespaces import assemble_declarations
from webext_typings.schema.loader import load_catalog

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.declarations.nodes import Statement
    from webext_typings.diagnostic.model import FrozenDiagnosticLog
    from webext_typings.schema.catalog import SchemaCatalog

logger: WebextLogger = get_logger(__name__)

GENERATED_HEADER: str = (
    f"Generated by webext-typings {WEBEXT_TYPINGS_VERSION} from WebExtension API schemas.\n"
    "Do not edit this file by hand."
)


class OutputDirectoryError(Exception):
    """The directory of the output file is missing (and ``force`` is not set)."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of one generation run.

    Attributes:
        text (str): The printed declaration file.
        statements (tuple[Statement, ...]): Top-level declaration nodes.
        namespaces (tuple[str, ...]): Catalog namespaces, in catalog order.
        diagnostics (FrozenDiagnosticLog): Everything reported while loading
            and generating.
        outfile (Path | None): The written file, if any.
    """

    text: str
    statements: tuple[Statement, ...]
    namespaces: tuple[str, ...]
    diagnostics: FrozenDiagnosticLog
    outfile: Path | None = None


def generate_typings(
    catalog: SchemaCatalog, config: Config, diagnostics: DiagnosticLog
) -> tuple[Statement, ...]:
    """Generate the declaration tree for ``catalog`` using the names in ``config``."""
    return assemble_declarations(
        catalog,
        diagnostics,
        root_namespace=config.root_namespace,
        alias_namespace=config.alias_namespace,
        ignored_namespaces=config.ignored_namespaces,
        host_interface=config.host_interface,
        event_interface=config.event_interface,
    )


def render_typings(schema_dir: Path, config: Config | None = None) -> GenerationResult:
    """Load ``schema_dir`` and render the declaration file text without writing it.

    Raises:
        SchemaDirectoryError: If ``schema_dir`` is missing, not a directory, or
            not readable.
    """
    config = config or Config()
    diagnostics = DiagnosticLog.from_iterable(config.diagnostics)
    catalog = load_catalog(schema_dir, diagnostics)
    statements = generate_typings(catalog, config, diagnostics)
    text = print_declarations(statements, header=GENERATED_HEADER)
    stats = diagnostics.stats()
    logger.info(
        "Generated %d namespace(s): %d error(s), %d warning(s)",
        len(catalog),
        stats.n_error,
        stats.n_warning,
    )
    return GenerationResult(
        text=text,
        statements=statements,
        namespaces=tuple(catalog),
        diagnostics=diagnostics.freeze(),
    )


def prepare_output_directory(outfile: Path, *, force: bool) -> Path:
    """Make sure the directory of ``outfile`` exists and is writable.

    Args:
        outfile (Path): Path of the file to write.
        force (bool): Create the directory (and its parents) when missing.

    Returns:
        Path: The output directory.

    Raises:
        OutputDirectoryError: If the directory is missing and ``force`` is False,
            or the parent path is not a directory.
        PermissionError: If the directory exists but is not writable.
    """
    directory = outfile.parent if str(outfile.parent) else Path(".")
    if not directory.exists():
        if not force:
            raise OutputDirectoryError(directory, "Output directory does not exist")
        logger.info("Creating output directory %s", directory)
        directory.mkdir(parents=True, exist_ok=True)
    elif not directory.is_dir():
        raise OutputDirectoryError(directory, "Output path parent is not a directory")
    if not os.access(directory, os.W_OK):
        raise PermissionError(f"Output directory is not writable: {directory}")
    return directory


def write_typings(outfile: Path, text: str) -> int:
    """Write ``text`` to ``outfile`` as UTF-8 with LF line endings.

    Returns:
        int: The number of bytes written.
    """
    with open(outfile, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    bytes_written: int = len(text.encode("utf-8"))
    logger.debug("Wrote %d bytes to %s", bytes_written, outfile)
    return bytes_written


def create_typings_file(
    schema_dir: Path,
    outfile: Path,
    *,
    force: bool = False,
    config: Config | None = None,
) -> GenerationResult:
    """Generate the declaration file for ``schema_dir`` and write it to ``outfile``.

    The output directory is checked before any schema is read, so a bad
    destination fails fast.

    Args:
        schema_dir (Path): Directory holding the schema fragments.
        outfile (Path): Destination ``.d.ts`` file.
        force (bool): Create a missing output directory.
        config (Config | None): Generator settings (defaults when None).

    Returns:
        GenerationResult: The rendered result, with ``outfile`` set.

    Raises:
        SchemaDirectoryError: If ``schema_dir`` cannot be scanned.
        OutputDirectoryError: If the output directory is missing and not forced.
        PermissionError: If the output directory is not writable.
        OSError: If writing the file fails.
    """
    prepare_output_directory(outfile, force=force)
    result = render_typings(schema_dir, config)
    write_typings(outfile, result.text)
    return GenerationResult(
        text=result.text,
        statements=result.statements,
        namespaces=result.namespaces,
        diagnostics=result.diagnostics,
        outfile=outfile,
    )

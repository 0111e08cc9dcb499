# topmark:header:start
#
#   project      : webext-typings
#   file         : loader.py
#   file_relpath : src/webext_typings/schema/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load schema fragments from a directory.

Design goals:
  - No CLI dependencies: problems with the directory itself raise
    `SchemaDirectoryError`; problems with individual files become diagnostics.
  - Deterministic order: files are read sorted by name, fragments in file order,
    so the merged catalog (and therefore the generated artifact) is stable.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING

from webext_typings.config.logging import get_logger
from webext_typings.constants import SCHEMA_FILE_SUFFIX
from webext_typings.schema.catalog import SchemaCatalog, SchemaFragment, merge_fragments
from webext_typings.schema.jsonc import loads_jsonc

if TYPE_CHECKING:
    from pathlib import Path

    from webext_typings.config.logging import WebextLogger
    from webext_typings.diagnostic.model import DiagnosticLog

logger: WebextLogger = get_logger(__name__)


class SchemaDirectoryError(Exception):
    """The schema directory is missing, not a directory, or unreadable."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


def list_schema_files(schema_dir: Path) -> list[Path]:
    """Return the schema files (``*.json``) directly inside ``schema_dir``, sorted by name.

    Raises:
        SchemaDirectoryError: If ``schema_dir`` does not exist, is not a directory,
            or cannot be listed.
    """
    if not schema_dir.exists():
        raise SchemaDirectoryError(schema_dir, "Schema directory does not exist")
    if not schema_dir.is_dir():
        raise SchemaDirectoryError(schema_dir, "Schema path is not a directory")
    try:
        candidates = list(schema_dir.iterdir())
    except PermissionError as exc:
        raise SchemaDirectoryError(schema_dir, "Permission denied") from exc
    return sorted(
        (p for p in candidates if p.is_file() and p.suffix.lower() == SCHEMA_FILE_SUFFIX),
        key=lambda p: p.name,
    )


def read_schema_file(path: Path, diagnostics: DiagnosticLog) -> list[SchemaFragment]:
    """Decode one schema file into its list of fragments.

    Unreadable files, invalid JSON, and documents that are not an array are
    reported as errors and contribute no fragments. Non-object array items
    are reported and dropped individually.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        diagnostics.add_error(f"Cannot read schema file {path.name}: {exc}")
        return []

    try:
        document = loads_jsonc(text)
    except json.JSONDecodeError as exc:
        diagnostics.add_error(f"Error parsing schema in {path.name}: {exc}")
        return []

    if not isinstance(document, list):
        diagnostics.add_error(f"Schema in {path.name} is not an array")
        return []

    fragments: list[SchemaFragment] = []
    for index, item in enumerate(document):
        if isinstance(item, Mapping):
            fragments.append(item)
        else:
            diagnostics.add_error(f"Schema entry #{index} in {path.name} is not an object")
    logger.debug("Read %d fragment(s) from %s", len(fragments), path)
    return fragments


def load_schema_fragments(
    schema_dir: Path, diagnostics: DiagnosticLog
) -> list[tuple[str, SchemaFragment]]:
    """Return ``(file_name, fragment)`` pairs for every fragment in ``schema_dir``."""
    pairs: list[tuple[str, SchemaFragment]] = []
    for path in list_schema_files(schema_dir):
        pairs.extend((path.name, fragment) for fragment in read_schema_file(path, diagnostics))
    return pairs


def load_catalog(schema_dir: Path, diagnostics: DiagnosticLog) -> SchemaCatalog:
    """Load and merge every schema fragment in ``schema_dir`` into a catalog."""
    catalog = merge_fragments(load_schema_fragments(schema_dir, diagnostics), diagnostics)
    logger.info("Loaded %d namespace(s) from %s", len(catalog), schema_dir)
    return catalog

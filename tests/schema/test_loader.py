# topmark:header:start
#
#   project      : webext-typings
#   file         : test_loader.py
#   file_relpath : tests/schema/test_loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for schema file loading and fragment merging."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import make_catalog, write_schema
from webext_typings.diagnostic.model import DiagnosticLevel, DiagnosticLog
from webext_typings.schema.catalog import merge_fragments
from webext_typings.schema.loader import (
    SchemaDirectoryError,
    list_schema_files,
    load_catalog,
    read_schema_file,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_schema_files_are_listed_by_name(tmp_path: Path) -> None:
    """It should list ``*.json`` files in name order and ignore everything else."""
    write_schema(tmp_path, "tabs.json", [])
    write_schema(tmp_path, "alarms.json", [])
    write_schema(tmp_path, "README.md", "not a schema")
    (tmp_path / "nested").mkdir()
    write_schema(tmp_path / "nested", "deep.json", [])

    assert [p.name for p in list_schema_files(tmp_path)] == ["alarms.json", "tabs.json"]


def test_missing_directory(tmp_path: Path) -> None:
    """It should raise for a directory that does not exist."""
    with pytest.raises(SchemaDirectoryError) as excinfo:
        list_schema_files(tmp_path / "missing")
    assert excinfo.value.reason == "Schema directory does not exist"


def test_path_is_not_a_directory(tmp_path: Path) -> None:
    """It should raise when the schema path is a file."""
    path = write_schema(tmp_path, "file.json", [])
    with pytest.raises(SchemaDirectoryError) as excinfo:
        list_schema_files(path)
    assert excinfo.value.reason == "Schema path is not a directory"


def test_invalid_json_is_an_error_diagnostic(tmp_path: Path) -> None:
    """It should report a file that does not parse and load nothing from it."""
    path = write_schema(tmp_path, "broken.json", "[{")
    diagnostics = DiagnosticLog()
    assert read_schema_file(path, diagnostics) == []
    (diagnostic,) = list(diagnostics)
    assert diagnostic.level is DiagnosticLevel.ERROR
    assert diagnostic.message.startswith("Error parsing schema in broken.json")


def test_document_must_be_an_array(tmp_path: Path) -> None:
    """It should reject a schema document that is not an array."""
    path = write_schema(tmp_path, "object.json", '{"namespace": "tabs"}')
    diagnostics = DiagnosticLog()
    assert read_schema_file(path, diagnostics) == []
    assert [d.message for d in diagnostics] == ["Schema in object.json is not an array"]


def test_non_object_entries_are_dropped(tmp_path: Path) -> None:
    """It should drop non-object array items and keep the others."""
    path = write_schema(tmp_path, "mixed.json", '[1, {"namespace": "tabs"}]')
    diagnostics = DiagnosticLog()
    assert read_schema_file(path, diagnostics) == [{"namespace": "tabs"}]
    assert [d.message for d in diagnostics] == ["Schema entry #0 in mixed.json is not an object"]


def test_one_bad_file_does_not_stop_the_load(tmp_path: Path) -> None:
    """It should still load the valid files of a directory."""
    write_schema(tmp_path, "a.json", "not json")
    write_schema(tmp_path, "b.json", [{"namespace": "tabs"}])
    diagnostics = DiagnosticLog()

    catalog = load_catalog(tmp_path, diagnostics)

    assert list(catalog) == ["tabs"]
    assert catalog["tabs"].source_file == "b.json"
    assert diagnostics.has_error()


def test_fragment_without_namespace_is_rejected() -> None:
    """It should exclude a fragment that lacks ``namespace`` and keep the rest."""
    diagnostics = DiagnosticLog()
    catalog = merge_fragments(
        [("x.json", {"types": []}), ("x.json", {"namespace": "tabs"})], diagnostics
    )
    assert list(catalog) == ["tabs"]
    assert [d.message for d in diagnostics] == [
        "Schema fragment in x.json does not have a namespace"
    ]


def test_fragment_with_malformed_list_is_rejected() -> None:
    """It should exclude a fragment whose ``types`` is not a list."""
    diagnostics = DiagnosticLog()
    catalog = merge_fragments([("x.json", {"namespace": "tabs", "types": {}})], diagnostics)
    assert len(catalog) == 0
    assert diagnostics.has_error()


def test_lists_are_concatenated_in_load_order() -> None:
    """It should append later fragments' entries after earlier ones."""
    catalog = make_catalog(
        {"namespace": "tabs", "types": [{"id": "A"}], "permissions": ["tabs"]},
        {"namespace": "other"},
        {"namespace": "tabs", "types": [{"id": "B"}], "events": [{"name": "onX"}]},
    )
    entry = catalog["tabs"]
    assert [t["id"] for t in entry.types] == ["A", "B"]
    assert [e["name"] for e in entry.events] == ["onX"]
    assert entry.permissions == ("tabs",)
    assert list(catalog) == ["tabs", "other"]


def test_properties_merge_into_properties() -> None:
    """It should merge namespace properties by name, the later definition winning."""
    diagnostics = DiagnosticLog()
    catalog = make_catalog(
        {"namespace": "runtime", "properties": {"id": {"type": "string"}}},
        {
            "namespace": "runtime",
            "properties": {"lastError": {"type": "object"}, "id": {"type": "integer"}},
        },
        diagnostics=diagnostics,
    )
    entry = catalog["runtime"]
    assert list(entry.properties) == ["id", "lastError"]
    assert entry.properties["id"] == {"type": "integer"}
    assert entry.permissions == ()
    assert [d.level for d in diagnostics] == [DiagnosticLevel.WARNING]


def test_first_non_empty_description_is_kept() -> None:
    """It should fill an empty description from a later fragment only."""
    catalog = make_catalog(
        {"namespace": "a"},
        {"namespace": "a", "description": "First."},
        {"namespace": "a", "description": "Second."},
    )
    assert catalog["a"].description == "First."


def test_catalog_is_read_only() -> None:
    """It should expose entries that cannot be modified."""
    catalog = make_catalog({"namespace": "tabs", "properties": {"x": {"value": 1}}})
    entry = catalog["tabs"]
    with pytest.raises(TypeError):
        entry.properties["y"] = {"value": 2}  # type: ignore[index]
    with pytest.raises(AttributeError):
        entry.name = "other"  # type: ignore[misc]


def test_find_type_helpers() -> None:
    """It should find types by namespace and in the manifest namespace."""
    catalog = make_catalog(
        {"namespace": "manifest", "types": [{"id": "Permission", "type": "string"}]},
        {"namespace": "tabs", "types": [{"id": "Tab", "type": "object"}]},
    )
    assert catalog.find_type("tabs", "Tab") == {"id": "Tab", "type": "object"}
    assert catalog.find_type("tabs", "Missing") is None
    assert catalog.find_type("nope", "Tab") is None
    assert catalog.find_manifest_type("Permission") is not None

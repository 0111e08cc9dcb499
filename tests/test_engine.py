# topmark:header:start
#
#   project      : webext-typings
#   file         : test_engine.py
#   file_relpath : tests/test_engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests: schema directory in, declaration text out."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import make_config, mark_integration, write_schema
from webext_typings.declarations.nodes import (
    ANY,
    VOID,
    FunctionDeclaration,
    NamespaceDeclaration,
    TypeReference,
    UnionType,
    VariableStatement,
)
from webext_typings.diagnostic.model import DiagnosticLog
from webext_typings.engine import (
    GENERATED_HEADER,
    OutputDirectoryError,
    create_typings_file,
    prepare_output_directory,
    render_typings,
)
from webext_typings.schema.loader import SchemaDirectoryError, load_catalog

if TYPE_CHECKING:
    from pathlib import Path

    from webext_typings.declarations.nodes import Statement
    from webext_typings.engine import GenerationResult


def _namespace_body(result: GenerationResult, namespace: str) -> tuple[Statement, ...]:
    root = result.statements[2]
    assert isinstance(root, NamespaceDeclaration)
    for statement in root.body:
        if isinstance(statement, NamespaceDeclaration) and statement.name == namespace:
            return statement.body
    raise AssertionError(f"namespace {namespace} not generated")


@mark_integration
def test_scenario_single_function_without_callback(tmp_path: Path) -> None:
    """It should declare ``alarms.create(name, alarmInfo): void`` with two mandatory parameters."""
    schemas = tmp_path / "schemas"
    write_schema(
        schemas,
        "alarms.json",
        [
            {
                "namespace": "alarms",
                "functions": [
                    {
                        "name": "create",
                        "type": "function",
                        "parameters": [
                            {"name": "name", "type": "string"},
                            {
                                "name": "alarmInfo",
                                "type": "object",
                                "properties": {"when": {"type": "number", "optional": True}},
                            },
                        ],
                    }
                ],
            }
        ],
    )

    result = render_typings(schemas)

    body = _namespace_body(result, "alarms")
    assert len(body) == 1
    declaration = body[0]
    assert isinstance(declaration, FunctionDeclaration)
    assert declaration.exported
    assert [p.name for p in declaration.parameters] == ["name", "alarmInfo"]
    assert not any(p.optional for p in declaration.parameters)
    assert declaration.return_type == VOID
    assert len(result.diagnostics) == 0


@mark_integration
def test_scenario_callback_result_becomes_return_type(tmp_path: Path) -> None:
    """It should return the callback parameter type and drop ``callback`` from the parameters."""
    schemas = tmp_path / "schemas"
    write_schema(
        schemas,
        "alarms.json",
        [
            {
                "namespace": "alarms",
                "types": [{"id": "Alarm", "type": "object", "properties": {}}],
                "functions": [
                    {
                        "name": "get",
                        "type": "function",
                        "parameters": [
                            {"name": "name", "type": "string", "optional": True},
                            {
                                "name": "callback",
                                "type": "function",
                                "parameters": [{"name": "alarm", "$ref": "Alarm"}],
                            },
                        ],
                    }
                ],
            }
        ],
    )

    result = render_typings(schemas)

    functions = [s for s in _namespace_body(result, "alarms") if isinstance(s, FunctionDeclaration)]
    assert len(functions) == 1
    (get,) = functions
    assert [p.name for p in get.parameters] == ["name"]
    assert get.return_type == TypeReference("Alarm")
    assert "export function get(name?: string): Alarm;" in result.text


@mark_integration
def test_scenario_event_with_leading_optional(tmp_path: Path) -> None:
    """It should type the listener as a union of callback signatures."""
    schemas = tmp_path / "schemas"
    write_schema(
        schemas,
        "runtime.json",
        [
            {
                "namespace": "runtime",
                "events": [
                    {
                        "name": "onConnect",
                        "type": "function",
                        "parameters": [
                            {"name": "info", "type": "any", "optional": True},
                            {"name": "port", "type": "string"},
                        ],
                    }
                ],
            }
        ],
    )

    result = render_typings(schemas)

    (event,) = _namespace_body(result, "runtime")
    assert isinstance(event, VariableStatement)
    assert isinstance(event.type, TypeReference)
    (callback_type,) = event.type.type_arguments
    assert isinstance(callback_type, UnionType)
    shapes = [
        tuple(p.name for p in member.parameters)  # type: ignore[union-attr]
        for member in callback_type.members
    ]
    assert ("info", "port") in shapes
    assert ("port",) in shapes
    assert callback_type.members[0].parameters[0].type == ANY  # type: ignore[union-attr]


@mark_integration
def test_scenario_fragments_merge_across_files(tmp_path: Path) -> None:
    """It should merge two ``tabs`` fragments into one catalog entry."""
    schemas = tmp_path / "schemas"
    write_schema(
        schemas,
        "a.json",
        [{"namespace": "tabs", "types": [{"id": "Tab", "type": "object", "properties": {}}]}],
    )
    write_schema(
        schemas,
        "b.json",
        [{"namespace": "tabs", "functions": [{"name": "query", "type": "function"}]}],
    )

    catalog = load_catalog(schemas, DiagnosticLog())

    assert list(catalog) == ["tabs"]
    entry = catalog["tabs"]
    assert [t["id"] for t in entry.types] == ["Tab"]
    assert [f["name"] for f in entry.functions] == ["query"]
    assert entry.source_file == "a.json"

    text = render_typings(schemas).text
    assert text.count("namespace tabs {") == 1
    assert "export interface Tab {}" in text
    assert "export function query(): void;" in text


@mark_integration
def test_output_header_and_order(tmp_path: Path) -> None:
    """It should start with the generated-file header and keep the bootstrap order."""
    schemas = tmp_path / "schemas"
    write_schema(schemas, "x.json", [{"namespace": "x"}])

    result = render_typings(schemas, make_config(alias_namespace="browser"))

    first_line = GENERATED_HEADER.splitlines()[0]
    assert result.text.startswith(f"// {first_line}\n")
    positions = [
        result.text.index("interface Window {"),
        result.text.index("interface WebExtEvent<"),
        result.text.index("declare namespace messenger {"),
        result.text.index("declare namespace browser {"),
    ]
    assert positions == sorted(positions)
    assert result.text.endswith("}\n")


@mark_integration
def test_configured_names_are_used(tmp_path: Path) -> None:
    """It should honour the configured root, host, and event interface names."""
    schemas = tmp_path / "schemas"
    write_schema(
        schemas,
        "x.json",
        [{"namespace": "x", "events": [{"name": "onX", "type": "function", "parameters": []}]}],
    )
    config = make_config(root_namespace="chrome", host_interface="Global", event_interface="Ev")

    text = render_typings(schemas, config).text

    assert "interface Global {\n    chrome: typeof chrome;\n}" in text
    assert "interface Ev<TCallback" in text
    assert "export const onX: Ev<() => void>;" in text
    assert "declare namespace chrome {" in text


@mark_integration
def test_config_diagnostics_are_carried_into_the_result(tmp_path: Path) -> None:
    """It should report configuration warnings alongside generation diagnostics."""
    schemas = tmp_path / "schemas"
    write_schema(schemas, "x.json", [{"namespace": "x"}])
    draft = make_config().thaw()
    draft.diagnostics.add_warning("Unknown key 'foo' in [generator] of test")

    result = render_typings(schemas, draft.freeze())

    assert [d.message for d in result.diagnostics] == ["Unknown key 'foo' in [generator] of test"]


@mark_integration
def test_create_typings_file_writes_lf_text(tmp_path: Path) -> None:
    """It should write the rendered text as UTF-8 with LF line endings."""
    schemas = tmp_path / "schemas"
    write_schema(schemas, "x.json", [{"namespace": "x"}])
    outfile = tmp_path / "types" / "messenger.d.ts"

    result = create_typings_file(schemas, outfile, force=True)

    assert result.outfile == outfile
    data = outfile.read_bytes()
    assert b"\r\n" not in data
    assert data.decode("utf-8") == result.text


def test_missing_output_directory_requires_force(tmp_path: Path) -> None:
    """It should refuse to create the output directory without ``force``."""
    with pytest.raises(OutputDirectoryError):
        prepare_output_directory(tmp_path / "missing" / "out.d.ts", force=False)
    assert prepare_output_directory(tmp_path / "made" / "out.d.ts", force=True).is_dir()


def test_output_parent_must_be_a_directory(tmp_path: Path) -> None:
    """It should reject an output path below a regular file."""
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(OutputDirectoryError):
        prepare_output_directory(blocker / "out.d.ts", force=True)


def test_missing_schema_directory_raises(tmp_path: Path) -> None:
    """It should raise SchemaDirectoryError for a missing schema directory."""
    with pytest.raises(SchemaDirectoryError) as excinfo:
        render_typings(tmp_path / "nope")
    assert excinfo.value.reason == "Schema directory does not exist"

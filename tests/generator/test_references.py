# topmark:header:start
#
#   project      : webext-typings
#   file         : test_references.py
#   file_relpath : tests/generator/test_references.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ``$ref`` resolution."""

from __future__ import annotations

from tests.conftest import make_catalog, make_context
from webext_typings.declarations.nodes import TypeReference
from webext_typings.diagnostic.model import DiagnosticLevel, DiagnosticLog
from webext_typings.generator.dispatch import create_inline_type
from webext_typings.generator.namespaces import create_namespace_body

CATALOG_FRAGMENTS = (
    {"namespace": "manifest", "types": [{"id": "ExtensionURL", "type": "string"}]},
    {"namespace": "runtime", "types": [{"id": "Port", "type": "object"}]},
    {
        "namespace": "tabs",
        "types": [{"id": "Tab", "type": "object", "properties": {}}],
    },
)


def test_local_reference_is_kept() -> None:
    """It should emit a reference to a sibling type unchanged, without diagnostics."""
    catalog = make_catalog(*CATALOG_FRAGMENTS)
    ctx = make_context(catalog, "tabs")
    assert create_inline_type({"$ref": "Tab"}, ctx) == TypeReference("Tab")
    assert len(ctx.diagnostics) == 0


def test_qualified_reference_to_known_type() -> None:
    """It should keep ``runtime.Port`` when the catalog declares it."""
    catalog = make_catalog(*CATALOG_FRAGMENTS)
    ctx = make_context(catalog, "tabs")
    assert create_inline_type({"$ref": "runtime.Port"}, ctx) == TypeReference("runtime.Port")
    assert len(ctx.diagnostics) == 0


def test_manifest_fallback_qualifies_with_a_warning() -> None:
    """It should rewrite a bare manifest type to ``manifest.X`` and warn."""
    catalog = make_catalog(*CATALOG_FRAGMENTS)
    ctx = make_context(catalog, "tabs")
    node = create_inline_type({"$ref": "ExtensionURL"}, ctx)
    assert node == TypeReference("manifest.ExtensionURL")
    items = list(ctx.diagnostics)
    assert [d.level for d in items] == [DiagnosticLevel.WARNING]


def test_dangling_reference_is_emitted_verbatim() -> None:
    """It should keep an unresolvable name and record one warning."""
    catalog = make_catalog(*CATALOG_FRAGMENTS)
    ctx = make_context(catalog, "tabs")
    assert create_inline_type({"$ref": "Missing"}, ctx) == TypeReference("Missing")
    assert create_inline_type({"$ref": "other.Missing"}, ctx) == TypeReference("other.Missing")
    messages = [d.message for d in ctx.diagnostics]
    assert messages == [
        "Dangling reference 'Missing' in namespace tabs",
        "Dangling reference 'other.Missing' in namespace tabs",
    ]


def test_dangling_reference_is_reported_once_across_overloads() -> None:
    """It should report a dangling reference once even when overloads repeat it."""
    catalog = make_catalog(
        {
            "namespace": "test",
            "functions": [
                {
                    "name": "f",
                    "type": "function",
                    "parameters": [
                        {"name": "a", "$ref": "Missing", "optional": True},
                        {"name": "b", "$ref": "Missing"},
                    ],
                }
            ],
        }
    )
    diagnostics = DiagnosticLog()
    create_namespace_body("test", catalog, diagnostics)

    dangling = [d for d in diagnostics if d.message.startswith("Dangling reference")]
    assert len(dangling) == 1


def test_dangling_reference_is_reported_for_each_declaration() -> None:
    """It should warn once per declaration that uses the missing type."""
    catalog = make_catalog(
        {
            "namespace": "test",
            "types": [
                {"id": "A", "type": "object", "properties": {"x": {"$ref": "Missing"}}},
                {"id": "B", "type": "object", "properties": {"y": {"$ref": "Missing"}}},
            ],
        }
    )
    diagnostics = DiagnosticLog()
    create_namespace_body("test", catalog, diagnostics)

    dangling = [d for d in diagnostics if d.message.startswith("Dangling reference")]
    assert len(dangling) == 2
    assert all(d.level is DiagnosticLevel.WARNING for d in dangling)

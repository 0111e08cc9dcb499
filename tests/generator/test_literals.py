# topmark:header:start
#
#   project      : webext-typings
#   file         : test_literals.py
#   file_relpath : tests/generator/test_literals.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for string enums and static values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import parametrize
from webext_typings.declarations.nodes import (
    NEVER,
    STRING,
    JSDoc,
    LiteralType,
    PropertySignature,
    TypeAliasDeclaration,
    UnionType,
    VariableStatement,
)
from webext_typings.declarations.printer import print_declarations
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.dispatch import create_inline_type, create_single_typing
from webext_typings.generator.errors import GenerationError
from webext_typings.generator.static_values import literal_for_value

if TYPE_CHECKING:
    from webext_typings.generator.context import GeneratorContext


def test_empty_enum_is_never(empty_context: GeneratorContext) -> None:
    """It should emit ``never`` for an enum without choices."""
    result = create_single_typing({"id": "Nothing", "type": "string", "enum": []}, empty_context)
    assert result.node == TypeAliasDeclaration(name="Nothing", type=NEVER)
    assert print_declarations([result.node]) == "export type Nothing = never;\n"


def test_single_choice_enum_is_the_literal(empty_context: GeneratorContext) -> None:
    """It should emit the lone literal, not a one-member union."""
    node = create_inline_type({"type": "string", "enum": ["normal"]}, empty_context)
    assert node == LiteralType("normal")


def test_enum_choices_keep_descriptions(empty_context: GeneratorContext) -> None:
    """It should document object choices and keep the declared order."""
    node = create_inline_type(
        {
            "type": "string",
            "enum": ["a", {"name": "b", "description": "The <code>b</code> choice"}],
        },
        empty_context,
    )
    assert node == UnionType(
        (LiteralType("a"), LiteralType("b", doc=JSDoc(description="The `b` choice")))
    )


def test_unusable_enum_choice_is_dropped_with_warning(empty_context: GeneratorContext) -> None:
    """It should drop a choice that is neither a string nor a named object."""
    node = create_inline_type({"id": "E", "type": "string", "enum": ["ok", 42]}, empty_context)
    assert node == LiteralType("ok")
    assert empty_context.diagnostics.has_warning()
    assert not empty_context.diagnostics.has_error()


def test_plain_string_alias(empty_context: GeneratorContext) -> None:
    """It should alias a named plain string to ``string``."""
    result = create_single_typing({"id": "Url", "type": "string"}, empty_context)
    assert result.node == TypeAliasDeclaration(name="Url", type=STRING)


@parametrize(
    "value, rendered",
    [
        (-5, "-5"),
        (0, "0"),
        (2.5, "2.5"),
        (True, "true"),
        (False, "false"),
        ("chrome", '"chrome"'),
    ],
)
def test_static_value_property_renders_literal(
    empty_context: GeneratorContext, value: object, rendered: str
) -> None:
    """It should declare a constant typed by the literal of its value."""
    result = create_single_typing({"name": "LIMIT", "value": value}, empty_context)
    assert isinstance(result.node, VariableStatement)
    assert print_declarations([result.node]) == f"export const LIMIT: {rendered};\n"


def test_static_value_inside_interface(empty_context: GeneratorContext) -> None:
    """It should produce a property signature at interface context."""
    ctx = empty_context.at(GenerationContext.INTERFACE)
    result = create_single_typing({"name": "kind", "value": "tab", "optional": True}, ctx)
    assert result.node == PropertySignature(name="kind", type=LiteralType("tab"), optional=True)


def test_boolean_value_is_not_a_number() -> None:
    """It should keep booleans as boolean literals."""
    literal = literal_for_value(True)
    assert literal.value is True


@parametrize("value", [None, [1], {"a": 1}, float("nan")])
def test_unsupported_static_values_raise(value: object) -> None:
    """It should reject values that have no literal type."""
    with pytest.raises(GenerationError):
        literal_for_value(value)


def test_unsupported_static_value_becomes_diagnostic(empty_context: GeneratorContext) -> None:
    """It should report an unusable static value through the dispatcher."""
    result = create_single_typing({"name": "nothing", "value": None}, empty_context)
    assert result.node is None
    assert empty_context.diagnostics.has_error()

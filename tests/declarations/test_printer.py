# topmark:header:start
#
#   project      : webext-typings
#   file         : test_printer.py
#   file_relpath : tests/declarations/test_printer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the declaration printer.

The printer is purely presentational, so these tests build node trees by hand
and compare the rendered text exactly.
"""

from __future__ import annotations

import math

import pytest

from tests.conftest import parametrize
from webext_typings.declarations.nodes import (
    ANY,
    BOOLEAN,
    NUMBER,
    STRING,
    VOID,
    ArrayType,
    ExportAliasDeclaration,
    FunctionDeclaration,
    FunctionType,
    ImportAliasDeclaration,
    IndexSignature,
    InterfaceDeclaration,
    IntersectionType,
    JSDoc,
    LiteralType,
    MethodSignature,
    NamespaceDeclaration,
    Parameter,
    PropertySignature,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeReference,
    UnionType,
)
from webext_typings.declarations.printer import (
    DeclarationPrinter,
    PrinterError,
    print_declarations,
    render_jsdoc,
    render_literal,
    render_member_name,
)


@parametrize(
    "value, expected",
    [
        (-5, "-5"),
        (0, "0"),
        (2.5, "2.5"),
        (3.0, "3"),
        (True, "true"),
        (False, "false"),
        ("chrome", '"chrome"'),
        ('say "hi"', '"say \\"hi\\""'),
    ],
)
def test_render_literal(value: str | int | float | bool, expected: str) -> None:
    """It should spell literal values the way the declaration language does."""
    assert render_literal(value) == expected


@parametrize("value", [math.nan, math.inf, -math.inf])
def test_render_literal_rejects_non_finite_numbers(value: float) -> None:
    """It should refuse to render a number without a literal spelling."""
    with pytest.raises(PrinterError):
        render_literal(value)


@parametrize(
    "name, expected",
    [
        ("fooBar", "fooBar"),
        ("$ref", "$ref"),
        ("foo-bar", '"foo-bar"'),
        ("2d", '"2d"'),
    ],
)
def test_member_names_are_quoted_when_needed(name: str, expected: str) -> None:
    """It should quote member names that are not plain identifiers."""
    assert render_member_name(name) == expected


def test_jsdoc_block_escapes_comment_terminators() -> None:
    """It should keep ``*/`` in descriptions from closing the comment early."""
    doc = JSDoc(description="Matches a/*/b patterns.\nSecond line.", deprecated="Use y.")
    assert render_jsdoc(doc, "") == [
        "/**",
        " * Matches a/*\\/b patterns.",
        " * Second line.",
        " *",
        " * @deprecated Use y.",
        " */",
    ]
    assert render_jsdoc(JSDoc(), "") == []
    assert render_jsdoc(None, "    ") == []


def test_bare_deprecation_tag() -> None:
    """It should render ``@deprecated`` on its own when there is no reason."""
    assert render_jsdoc(JSDoc(deprecated=""), "") == ["/**", " * @deprecated", " */"]


def test_compound_types_are_parenthesised() -> None:
    """It should wrap function members of unions and compound array elements."""
    printer = DeclarationPrinter()
    callback = FunctionType((Parameter("x", STRING),), VOID)
    assert printer.type_text(UnionType((callback, STRING))) == "((x: string) => void) | string"
    assert printer.type_text(ArrayType(UnionType((STRING, NUMBER)))) == "(string | number)[]"
    assert printer.type_text(ArrayType(STRING)) == "string[]"
    assert (
        printer.type_text(IntersectionType((TypeReference("A"), UnionType((STRING, NUMBER)))))
        == "A & (string | number)"
    )


def test_type_arguments_and_parameters() -> None:
    """It should render generic references and rest or optional parameters."""
    printer = DeclarationPrinter()
    assert printer.type_text(TypeReference("Promise", (VOID,))) == "Promise<void>"
    params = (
        Parameter("a", STRING),
        Parameter("b", NUMBER, optional=True),
        Parameter("rest", ArrayType(ANY), rest=True),
    )
    assert printer.parameters_text(params) == "a: string, b?: number, ...rest: any[]"


def test_interface_with_all_member_kinds() -> None:
    """It should print properties, methods, index signatures and nested literals."""
    interface = InterfaceDeclaration(
        "Options",
        (
            PropertySignature("url", STRING, doc=JSDoc(description="Target URL.")),
            PropertySignature("active", BOOLEAN, optional=True),
            PropertySignature("bounds", TypeLiteral((PropertySignature("left", NUMBER),))),
            MethodSignature("close", (), VOID, optional=True),
            IndexSignature(ANY),
        ),
    )
    assert print_declarations([interface]) == (
        "export interface Options {\n"
        "    /**\n"
        "     * Target URL.\n"
        "     */\n"
        "    url: string;\n"
        "    active?: boolean;\n"
        "    bounds: {\n"
        "        left: number;\n"
        "    };\n"
        "    close?(): void;\n"
        "    [key: string]: any;\n"
        "}\n"
    )


def test_statements_are_separated_by_blank_lines() -> None:
    """It should separate top-level blocks and render the header as line comments."""
    statements = [
        TypeAliasDeclaration("Kind", UnionType((LiteralType("a"), LiteralType("b")))),
        FunctionDeclaration("__delete", (), VOID, exported=False),
        ExportAliasDeclaration("__delete", "delete"),
    ]
    assert print_declarations(statements, header="Generated file.\n\nDo not edit.") == (
        "// Generated file.\n"
        "//\n"
        "// Do not edit.\n"
        "\n"
        'export type Kind = "a" | "b";\n'
        "\n"
        "function __delete(): void;\n"
        "\n"
        "export { __delete as delete };\n"
    )


def test_nested_namespaces_are_indented() -> None:
    """It should indent namespace bodies by four spaces per level."""
    root = NamespaceDeclaration(
        "messenger",
        (
            NamespaceDeclaration("empty"),
            NamespaceDeclaration("tabs", (TypeAliasDeclaration("Id", NUMBER),)),
        ),
        declare=True,
    )
    alias = NamespaceDeclaration(
        "browser", (ImportAliasDeclaration("tabs", "messenger.tabs"),), declare=True
    )
    assert print_declarations([root, alias]) == (
        "declare namespace messenger {\n"
        "    namespace empty {}\n"
        "    namespace tabs {\n"
        "        export type Id = number;\n"
        "    }\n"
        "}\n"
        "\n"
        "declare namespace browser {\n"
        "    export import tabs = messenger.tabs;\n"
        "}\n"
    )


def test_inline_literal_docs() -> None:
    """It should render enum member docs as inline comments on one line."""
    literal = LiteralType("x", doc=JSDoc(description="The x\n  choice."))
    assert DeclarationPrinter().type_text(literal) == '/** The x choice. */ "x"'

# topmark:header:start
#
#   project      : webext-typings
#   file         : printer.py
#   file_relpath : src/webext_typings/declarations/printer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render a declaration tree as TypeScript declaration text.

The printer is purely presentational: it never decides *what* to emit, only how
to spell it. Layout follows the TypeScript compiler's own printer (four-space
indentation, one member per line, multi-line type literals).
"""

from __future__ import annotations

import json
import math
from typing import TYPE_CHECKING, Final

from webext_typings.declarations.identifiers import is_valid_identifier
from webext_typings.declarations.nodes import (
    ArrayType,
    ExportAliasDeclaration,
    FunctionDeclaration,
    FunctionType,
    ImportAliasDeclaration,
    IndexSignature,
    InterfaceDeclaration,
    IntersectionType,
    KeywordType,
    LiteralType,
    MethodSignature,
    NamespaceDeclaration,
    PropertySignature,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeQuery,
    TypeReference,
    UnionType,
    VariableStatement,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from webext_typings.declarations.nodes import (
        JSDoc,
        LiteralValue,
        Member,
        Parameter,
        Statement,
        TypeNode,
        TypeParameter,
    )

INDENT: Final[str] = "    "


class PrinterError(ValueError):
    """Raised when a node cannot be rendered (e.g. a non-finite number literal)."""


def render_literal(value: LiteralValue) -> str:
    """Return the source spelling of a literal type value.

    Booleans are checked before numbers (``bool`` is an ``int`` subclass);
    negative numbers keep their sign (``-5``).
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise PrinterError(f"Cannot render non-finite number literal: {value!r}")
        return str(int(value)) if value.is_integer() else repr(value)
    raise PrinterError(f"Unsupported literal value: {value!r}")


def render_member_name(name: str) -> str:
    """Return ``name`` as a member key, quoting it when it is not a plain identifier."""
    return name if is_valid_identifier(name) else json.dumps(name, ensure_ascii=False)


def _escape_comment(text: str) -> str:
    return text.replace("*/", "*\\/")


def render_jsdoc(doc: JSDoc | None, indent: str) -> list[str]:
    """Return the lines of a block JSDoc comment (empty when there is nothing to say)."""
    if doc is None or doc.is_empty:
        return []
    lines: list[str] = [f"{indent}/**"]
    if doc.description:
        lines.extend(
            f"{indent} * {line}".rstrip() for line in _escape_comment(doc.description).splitlines()
        )
    if doc.deprecated is not None:
        if doc.description:
            lines.append(f"{indent} *")
        lines.append(f"{indent} * @deprecated {_escape_comment(doc.deprecated)}".rstrip())
    lines.append(f"{indent} */")
    return lines


def _inline_jsdoc(doc: JSDoc | None) -> str:
    if doc is None or doc.is_empty:
        return ""
    parts: list[str] = []
    if doc.description:
        parts.append(" ".join(doc.description.split()))
    if doc.deprecated is not None:
        parts.append(f"@deprecated {' '.join(doc.deprecated.split())}")
    return f"/** {_escape_comment(' '.join(parts))} */ "


class DeclarationPrinter:
    """Stateless renderer from declaration nodes to text."""

    # --- types ---

    def type_text(self, node: TypeNode, level: int = 0) -> str:
        """Render a type node; ``level`` is the indentation depth of the enclosing line."""
        if isinstance(node, KeywordType):
            return node.keyword
        if isinstance(node, LiteralType):
            return f"{_inline_jsdoc(node.doc)}{render_literal(node.value)}"
        if isinstance(node, TypeReference):
            if not node.type_arguments:
                return node.name
            args = ", ".join(self.type_text(arg, level) for arg in node.type_arguments)
            return f"{node.name}<{args}>"
        if isinstance(node, TypeQuery):
            return f"typeof {node.name}"
        if isinstance(node, ArrayType):
            element = self.type_text(node.element, level)
            if isinstance(node.element, (UnionType, IntersectionType, FunctionType)):
                element = f"({element})"
            return f"{element}[]"
        if isinstance(node, UnionType):
            return " | ".join(
                self._wrapped(member, level, (FunctionType,)) for member in node.members
            )
        if isinstance(node, IntersectionType):
            return " & ".join(
                self._wrapped(member, level, (FunctionType, UnionType)) for member in node.members
            )
        if isinstance(node, FunctionType):
            params = self.parameters_text(node.parameters, level)
            return f"({params}) => {self.type_text(node.return_type, level)}"
        if isinstance(node, TypeLiteral):
            if not node.members:
                return "{}"
            lines = ["{"]
            for member in node.members:
                lines.extend(self.member_lines(member, level + 1))
            lines.append(f"{INDENT * level}}}")
            return "\n".join(lines)
        raise PrinterError(f"Unknown type node: {node!r}")

    def _wrapped(self, node: TypeNode, level: int, needs_parens: tuple[type, ...]) -> str:
        text = self.type_text(node, level)
        return f"({text})" if isinstance(node, needs_parens) else text

    def parameters_text(self, parameters: Sequence[Parameter], level: int = 0) -> str:
        """Render a parameter list (without the surrounding parentheses)."""
        return ", ".join(self.parameter_text(param, level) for param in parameters)

    def parameter_text(self, param: Parameter, level: int = 0) -> str:
        """Render one parameter."""
        rest = "..." if param.rest else ""
        optional = "?" if param.optional else ""
        type_text = self.type_text(param.type, level)
        return f"{_inline_jsdoc(param.doc)}{rest}{param.name}{optional}: {type_text}"

    def type_parameters_text(self, type_parameters: Sequence[TypeParameter]) -> str:
        """Render ``<T extends C, ...>`` (empty string when there are none)."""
        if not type_parameters:
            return ""
        rendered = [
            f"{tp.name} extends {self.type_text(tp.constraint)}" if tp.constraint else tp.name
            for tp in type_parameters
        ]
        return f"<{', '.join(rendered)}>"

    # --- members ---

    def member_lines(self, member: Member, level: int) -> list[str]:
        """Render an interface / type literal member at ``level``."""
        indent = INDENT * level
        if isinstance(member, PropertySignature):
            optional = "?" if member.optional else ""
            name = render_member_name(member.name)
            return [
                *render_jsdoc(member.doc, indent),
                f"{indent}{name}{optional}: {self.type_text(member.type, level)};",
            ]
        if isinstance(member, MethodSignature):
            optional = "?" if member.optional else ""
            name = render_member_name(member.name)
            params = self.parameters_text(member.parameters, level)
            returns = self.type_text(member.return_type, level)
            return [
                *render_jsdoc(member.doc, indent),
                f"{indent}{name}{optional}({params}): {returns};",
            ]
        if isinstance(member, IndexSignature):
            key_type = self.type_text(member.key_type, level)
            value_type = self.type_text(member.value_type, level)
            return [f"{indent}[{member.key_name}: {key_type}]: {value_type};"]
        raise PrinterError(f"Unknown member node: {member!r}")

    # --- statements ---

    def statement_lines(self, node: Statement, level: int = 0) -> list[str]:
        """Render a statement at ``level``."""
        indent = INDENT * level
        doc_lines = render_jsdoc(getattr(node, "doc", None), indent)
        export = "export " if getattr(node, "exported", False) else ""

        if isinstance(node, TypeAliasDeclaration):
            body = self.type_text(node.type, level)
            return [*doc_lines, f"{indent}{export}type {node.name} = {body};"]
        if isinstance(node, InterfaceDeclaration):
            head = f"{indent}{export}interface {node.name}"
            head += self.type_parameters_text(node.type_parameters)
            if not node.members:
                return [*doc_lines, f"{head} {{}}"]
            lines = [*doc_lines, f"{head} {{"]
            for member in node.members:
                lines.extend(self.member_lines(member, level + 1))
            lines.append(f"{indent}}}")
            return lines
        if isinstance(node, FunctionDeclaration):
            params = self.parameters_text(node.parameters, level)
            returns = self.type_text(node.return_type, level)
            return [*doc_lines, f"{indent}{export}function {node.name}({params}): {returns};"]
        if isinstance(node, VariableStatement):
            type_text = self.type_text(node.type, level)
            return [*doc_lines, f"{indent}{export}const {node.name}: {type_text};"]
        if isinstance(node, ExportAliasDeclaration):
            return [f"{indent}export {{ {node.local_name} as {node.exported_name} }};"]
        if isinstance(node, ImportAliasDeclaration):
            return [f"{indent}{export}import {node.name} = {node.target};"]
        if isinstance(node, NamespaceDeclaration):
            declare = "declare " if node.declare else ""
            head = f"{indent}{declare}namespace {node.name}"
            if not node.body:
                return [*doc_lines, f"{head} {{}}"]
            lines = [*doc_lines, f"{head} {{"]
            for statement in node.body:
                lines.extend(self.statement_lines(statement, level + 1))
            lines.append(f"{indent}}}")
            return lines
        raise PrinterError(f"Unknown statement node: {node!r}")


def print_declarations(statements: Iterable[Statement], *, header: str | None = None) -> str:
    """Render top-level statements as the text of a declaration file.

    Args:
        statements: Top-level statements in output order.
        header: Optional leading comment text (one ``//`` line per text line).

    Returns:
        str: The file content, LF line endings, ending with a newline.
    """
    printer = DeclarationPrinter()
    blocks: list[str] = []
    if header:
        blocks.append("\n".join(f"// {line}".rstrip() for line in header.splitlines()))
    for statement in statements:
        blocks.append("\n".join(printer.statement_lines(statement)))
    return "\n\n".join(blocks) + "\n"

# topmark:header:start
#
#   project      : webext-typings
#   file         : nodes.py
#   file_relpath : src/webext_typings/declarations/nodes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declaration tree for the generated TypeScript artifact.

The tree is deliberately small: it covers what an ambient `.d.ts` file for a
WebExtension API needs and nothing more. All nodes are frozen dataclasses
holding tuples, so two generations of the same descriptor compare equal
structurally.

Sections:
    * JSDoc: leading documentation comment.
    * Type nodes: keyword, literal, reference, ``typeof`` query, array, union,
      intersection, function type, and type literal.
    * Members: property, method, and index signatures (used by type literals
      and interfaces).
    * Statements: type alias, interface, function, ``const``, export alias,
      import alias, and namespace declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

LiteralValue = Union[str, int, float, bool]


@dataclass(frozen=True)
class JSDoc:
    """Leading documentation comment (description and deprecation notice)."""

    description: str | None = None
    deprecated: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return True if there is nothing to print."""
        return not self.description and self.deprecated is None


# --- Type nodes ---


@dataclass(frozen=True)
class KeywordType:
    """Built-in keyword type (``any``, ``string``, ``void``, ``never``, ...)."""

    keyword: str


@dataclass(frozen=True)
class LiteralType:
    """Literal type: string, number (sign included), or boolean."""

    value: LiteralValue
    doc: JSDoc | None = None


@dataclass(frozen=True)
class TypeReference:
    """Reference to a named type, optionally with type arguments."""

    name: str
    type_arguments: tuple[TypeNode, ...] = ()


@dataclass(frozen=True)
class TypeQuery:
    """``typeof name`` type query."""

    name: str


@dataclass(frozen=True)
class ArrayType:
    """``T[]``."""

    element: TypeNode


@dataclass(frozen=True)
class UnionType:
    """``A | B | ...``."""

    members: tuple[TypeNode, ...]


@dataclass(frozen=True)
class IntersectionType:
    """``A & B & ...``."""

    members: tuple[TypeNode, ...]


@dataclass(frozen=True)
class Parameter:
    """Function parameter."""

    name: str
    type: TypeNode
    optional: bool = False
    rest: bool = False
    doc: JSDoc | None = None


@dataclass(frozen=True)
class FunctionType:
    """``(params) => R``."""

    parameters: tuple[Parameter, ...]
    return_type: TypeNode


@dataclass(frozen=True)
class TypeLiteral:
    """``{ members }``."""

    members: tuple[Member, ...]


TypeNode = Union[
    KeywordType,
    LiteralType,
    TypeReference,
    TypeQuery,
    ArrayType,
    UnionType,
    IntersectionType,
    FunctionType,
    TypeLiteral,
]


ANY = KeywordType("any")
STRING = KeywordType("string")
NUMBER = KeywordType("number")
BOOLEAN = KeywordType("boolean")
VOID = KeywordType("void")
NEVER = KeywordType("never")
NULL = KeywordType("null")
UNDEFINED = KeywordType("undefined")


# --- Members ---


@dataclass(frozen=True)
class PropertySignature:
    """``name?: T`` member."""

    name: str
    type: TypeNode
    optional: bool = False
    doc: JSDoc | None = None


@dataclass(frozen=True)
class MethodSignature:
    """``name?(params): R`` member."""

    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeNode
    optional: bool = False
    doc: JSDoc | None = None


@dataclass(frozen=True)
class IndexSignature:
    """``[key: string]: T`` member."""

    value_type: TypeNode
    key_name: str = "key"
    key_type: TypeNode = STRING


Member = Union[PropertySignature, MethodSignature, IndexSignature]


def open_index_signature(value_type: TypeNode = ANY) -> IndexSignature:
    """Return the ``[key: string]: value_type`` member used for dynamic keys."""
    return IndexSignature(value_type=value_type)


# --- Statements ---


@dataclass(frozen=True)
class TypeParameter:
    """Generic type parameter with an optional constraint."""

    name: str
    constraint: TypeNode | None = None


@dataclass(frozen=True)
class TypeAliasDeclaration:
    """``export type Name = T;``."""

    name: str
    type: TypeNode
    exported: bool = True
    doc: JSDoc | None = None


@dataclass(frozen=True)
class InterfaceDeclaration:
    """``export interface Name<TParams> { members }``."""

    name: str
    members: tuple[Member, ...]
    type_parameters: tuple[TypeParameter, ...] = ()
    exported: bool = True
    doc: JSDoc | None = None


@dataclass(frozen=True)
class FunctionDeclaration:
    """``export function name(params): R;``."""

    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeNode
    exported: bool = True
    doc: JSDoc | None = None


@dataclass(frozen=True)
class VariableStatement:
    """``export const name: T;``."""

    name: str
    type: TypeNode
    exported: bool = True
    doc: JSDoc | None = None


@dataclass(frozen=True)
class ExportAliasDeclaration:
    """``export { local as exported };``."""

    local_name: str
    exported_name: str


@dataclass(frozen=True)
class ImportAliasDeclaration:
    """``export import name = target;``."""

    name: str
    target: str
    exported: bool = True


@dataclass(frozen=True)
class NamespaceDeclaration:
    """``declare namespace name { body }`` (``declare`` only at the top level)."""

    name: str
    body: tuple[Statement, ...] = field(default_factory=tuple)
    declare: bool = False
    doc: JSDoc | None = None


Statement = Union[
    TypeAliasDeclaration,
    InterfaceDeclaration,
    FunctionDeclaration,
    VariableStatement,
    ExportAliasDeclaration,
    ImportAliasDeclaration,
    NamespaceDeclaration,
]

Node = Union[TypeNode, Member, Statement]

NAMED_DECLARATIONS: tuple[type, ...] = (
    TypeAliasDeclaration,
    InterfaceDeclaration,
    FunctionDeclaration,
)


def declared_type_name(node: object) -> str | None:
    """Return the name a node declares in type space, or None.

    Only type aliases, interfaces, and function declarations count: those are
    the nodes a same-namespace reference can point at.
    """
    if isinstance(node, NAMED_DECLARATIONS):
        return node.name  # type: ignore[attr-defined]
    return None


def is_type_node(node: object) -> bool:
    """Return True if ``node`` can stand where a type is expected."""
    return isinstance(
        node,
        (
            KeywordType,
            LiteralType,
            TypeReference,
            TypeQuery,
            ArrayType,
            UnionType,
            IntersectionType,
            FunctionType,
            TypeLiteral,
        ),
    )

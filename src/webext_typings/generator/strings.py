# topmark:header:start
#
#   project      : webext-typings
#   file         : strings.py
#   file_relpath : src/webext_typings/generator/strings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator for strings and string enums.

An enum becomes a union of string literal types, each carrying the JSDoc of
its choice. Choices are bare strings or ``{name, description}`` objects; any
other choice is dropped with a warning. An enum with no usable choice accepts
no value at all and is emitted as ``never``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from webext_typings.config.logging import get_logger
from webext_typings.declarations.nodes import (
    NEVER,
    STRING,
    LiteralType,
    TypeAliasDeclaration,
    UnionType,
)
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import require_name
from webext_typings.generator.docs import jsdoc_for, jsdoc_text
from webext_typings.generator.errors import InvalidContextError

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.declarations.nodes import Node, TypeNode
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import StringDescriptor

logger: WebextLogger = get_logger(__name__)


def enum_type(descriptor: StringDescriptor, ctx: GeneratorContext) -> TypeNode:
    """Return the union of literal types for the enum choices (``never`` when empty)."""
    literals: list[LiteralType] = []
    for choice in descriptor.enum or ():
        if isinstance(choice, str):
            literals.append(LiteralType(choice))
        elif isinstance(choice, Mapping) and isinstance(choice.get("name"), str):
            literals.append(LiteralType(choice["name"], doc=jsdoc_text(choice.get("description"))))
        else:
            ctx.diagnostics.add_warning(
                f"Dropping unusable enum choice {choice!r} of "
                f"{descriptor.traits.identifier or 'anonymous string'}",
                namespace=ctx.current_namespace,
            )
    if not literals:
        logger.debug("Empty enum %s emitted as never", descriptor.traits.identifier)
        return NEVER
    if len(literals) == 1:
        return literals[0]
    return UnionType(tuple(literals))


def generate_string(descriptor: StringDescriptor, ctx: GeneratorContext) -> Node:
    type_node = STRING if descriptor.enum is None else enum_type(descriptor, ctx)
    match ctx.context:
        case GenerationContext.INLINE:
            return type_node
        case GenerationContext.NAMESPACE | GenerationContext.INTERFACE:
            return TypeAliasDeclaration(
                name=require_name(descriptor.traits.identifier, "string", ctx.context),
                type=type_node,
                doc=jsdoc_for(descriptor.traits),
            )
    raise InvalidContextError("string", ctx.context)

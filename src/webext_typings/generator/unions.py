# topmark:header:start
#
#   project      : webext-typings
#   file         : unions.py
#   file_relpath : src/webext_typings/generator/unions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator for unions (``choices``): every choice is generated inline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from webext_typings.declarations.nodes import TypeAliasDeclaration, UnionType
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import require_name
from webext_typings.generator.dispatch import create_inline_type
from webext_typings.generator.docs import jsdoc_for
from webext_typings.generator.errors import GenerationError, InvalidContextError

if TYPE_CHECKING:
    from webext_typings.declarations.nodes import Node, TypeNode
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import UnionDescriptor


def union_type(descriptor: UnionDescriptor, ctx: GeneratorContext) -> TypeNode:
    """Return the union of the usable choices.

    Raises:
        GenerationError: If no choice yields a type.
    """
    members: list[TypeNode] = []
    for choice in descriptor.choices:
        member = create_inline_type(choice, ctx)
        if member is not None:
            members.append(member)
    if not members:
        raise GenerationError(f"union {descriptor.traits.identifier or ''} has no usable choice")
    return members[0] if len(members) == 1 else UnionType(tuple(members))


def generate_union(descriptor: UnionDescriptor, ctx: GeneratorContext) -> Node:
    match ctx.context:
        case GenerationContext.INLINE:
            return union_type(descriptor, ctx)
        case GenerationContext.NAMESPACE | GenerationContext.INTERFACE:
            name = require_name(descriptor.traits.id, "union", ctx.context)
            return TypeAliasDeclaration(
                name=name,
                type=union_type(descriptor, ctx),
                doc=jsdoc_for(descriptor.traits),
            )
    raise InvalidContextError("union", ctx.context)

# topmark:header:start
#
#   project      : webext-typings
#   file         : arrays.py
#   file_relpath : src/webext_typings/generator/arrays.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator for arrays: items are always generated inline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from webext_typings.declarations.nodes import ANY, ArrayType, TypeAliasDeclaration
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import require_name
from webext_typings.generator.dispatch import create_inline_type
from webext_typings.generator.docs import jsdoc_for
from webext_typings.generator.errors import InvalidContextError

if TYPE_CHECKING:
    from webext_typings.declarations.nodes import Node
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import ArrayDescriptor


def generate_array(descriptor: ArrayDescriptor, ctx: GeneratorContext) -> Node:
    # Items that yield nothing already carry their own diagnostic.
    item_type = create_inline_type(descriptor.items, ctx) or ANY
    array_type = ArrayType(item_type)
    match ctx.context:
        case GenerationContext.INLINE:
            return array_type
        case GenerationContext.NAMESPACE | GenerationContext.INTERFACE:
            return TypeAliasDeclaration(
                name=require_name(descriptor.traits.identifier, "array", ctx.context),
                type=array_type,
                doc=jsdoc_for(descriptor.traits),
            )
    raise InvalidContextError("array", ctx.context)

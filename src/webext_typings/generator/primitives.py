# topmark:header:start
#
#   project      : webext-typings
#   file         : primitives.py
#   file_relpath : src/webext_typings/generator/primitives.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generators for the primitive variants: any, boolean, number/integer, null."""

from __future__ import annotations

from typing import TYPE_CHECKING

from webext_typings.declarations.nodes import (
    ANY,
    BOOLEAN,
    NULL,
    NUMBER,
    TypeAliasDeclaration,
)
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import require_name
from webext_typings.generator.docs import jsdoc_for
from webext_typings.generator.errors import GenerationError, InvalidContextError

if TYPE_CHECKING:
    from webext_typings.declarations.nodes import KeywordType, Node
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import (
        AnyDescriptor,
        BooleanDescriptor,
        NullDescriptor,
        NumberDescriptor,
        Traits,
    )


def _keyword_typing(
    keyword: KeywordType, traits: Traits, variant: str, ctx: GeneratorContext
) -> Node:
    match ctx.context:
        case GenerationContext.INLINE:
            return keyword
        case GenerationContext.NAMESPACE | GenerationContext.INTERFACE:
            return TypeAliasDeclaration(
                name=require_name(traits.identifier, variant, ctx.context),
                type=keyword,
                doc=jsdoc_for(traits),
            )
    raise InvalidContextError(variant, ctx.context)


def generate_any(descriptor: AnyDescriptor, ctx: GeneratorContext) -> Node:
    return _keyword_typing(ANY, descriptor.traits, "any", ctx)


def generate_boolean(descriptor: BooleanDescriptor, ctx: GeneratorContext) -> Node:
    return _keyword_typing(BOOLEAN, descriptor.traits, "boolean", ctx)


def generate_number(descriptor: NumberDescriptor, ctx: GeneratorContext) -> Node:
    variant = "integer" if descriptor.integer else "number"
    return _keyword_typing(NUMBER, descriptor.traits, variant, ctx)


def generate_null(descriptor: NullDescriptor, ctx: GeneratorContext) -> Node:
    """Return ``null``; the variant only exists inline."""
    match ctx.context:
        case GenerationContext.INLINE:
            return NULL
        case GenerationContext.NAMESPACE | GenerationContext.INTERFACE:
            name = descriptor.traits.identifier or "anonymous"
            raise GenerationError(f"null has no standalone declaration ({name})")
    raise InvalidContextError("null", ctx.context)

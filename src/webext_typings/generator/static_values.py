# topmark:header:start
#
#   project      : webext-typings
#   file         : static_values.py
#   file_relpath : src/webext_typings/generator/static_values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator for static values (compile-time constants)."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from webext_typings.declarations.nodes import LiteralType, PropertySignature, VariableStatement
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import require_name
from webext_typings.generator.docs import jsdoc_for
from webext_typings.generator.errors import GenerationError, InvalidContextError

if TYPE_CHECKING:
    from webext_typings.declarations.nodes import Node
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import StaticValueDescriptor


def literal_for_value(value: Any) -> LiteralType:
    """Return the literal type for a string, number, or boolean value.

    ``bool`` is checked before numbers because it is an ``int`` subclass.

    Raises:
        GenerationError: For any other kind of value (null, list, object,
            non-finite number).
    """
    if isinstance(value, bool):
        return LiteralType(value)
    if isinstance(value, int):
        return LiteralType(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise GenerationError(f"unsupported static value: {value!r}")
        return LiteralType(value)
    if isinstance(value, str):
        return LiteralType(value)
    raise GenerationError(f"unsupported static value of type {type(value).__name__}: {value!r}")


def generate_static_value(descriptor: StaticValueDescriptor, ctx: GeneratorContext) -> Node:
    literal = literal_for_value(descriptor.value)
    traits = descriptor.traits
    match ctx.context:
        case GenerationContext.INLINE:
            return literal
        case GenerationContext.NAMESPACE:
            return VariableStatement(
                name=require_name(traits.member_name, "static value", ctx.context),
                type=literal,
                doc=jsdoc_for(traits),
            )
        case GenerationContext.INTERFACE:
            return PropertySignature(
                name=require_name(traits.member_name, "static value", ctx.context),
                type=literal,
                optional=traits.optional,
                doc=jsdoc_for(traits),
            )
    raise InvalidContextError("static value", ctx.context)

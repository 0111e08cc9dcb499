# topmark:header:start
#
#   project      : webext-typings
#   file         : functions.py
#   file_relpath : src/webext_typings/generator/functions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator for function descriptors.

Return type resolution, in order:

1. a parameter named ``callback`` whose own parameter list has exactly one
   entry: that entry's type (the value the callback would receive);
2. the ``returns`` descriptor;
3. ``void``.

Asynchronous functions (``async: true`` or ``async: "callback"``) wrap the
result in ``Promise<...>``. The ``callback`` parameter itself is consumed, not
exposed, except while generating a sub-callback signature (``in_callback``),
where parameters are kept verbatim and rule 1 does not apply.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from webext_typings.constants import CALLBACK_PARAMETER_NAME, DEFERRED_RESULT_WRAPPER
from webext_typings.declarations.nodes import (
    ANY,
    UNDEFINED,
    VOID,
    FunctionDeclaration,
    FunctionType,
    MethodSignature,
    Parameter,
    TypeAliasDeclaration,
    TypeReference,
    UnionType,
)
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import Traits, require_name
from webext_typings.generator.dispatch import create_inline_type
from webext_typings.generator.docs import jsdoc_for
from webext_typings.generator.errors import InvalidContextError
from webext_typings.generator.predicates import is_optional

if TYPE_CHECKING:
    from webext_typings.declarations.nodes import Node, TypeNode
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import FunctionDescriptor


def is_callback_parameter(raw: Any) -> bool:
    """Return True for the parameter named ``callback``."""
    return isinstance(raw, Mapping) and raw.get("name") == CALLBACK_PARAMETER_NAME


def without_callback(parameters: Sequence[Any]) -> list[Any]:
    """Return ``parameters`` minus the ``callback`` parameter."""
    return [param for param in parameters if not is_callback_parameter(param)]


def _is_mandatory(raw: Any) -> bool:
    return not (isinstance(raw, Mapping) and is_optional(raw))


def resolve_return_type(descriptor: FunctionDescriptor, ctx: GeneratorContext) -> TypeNode:
    """Return the logical return type of a function (already wrapped when async)."""
    return_type: TypeNode | None = None

    if not ctx.in_callback:
        callback = next((p for p in descriptor.parameters if is_callback_parameter(p)), None)
        callback_params = callback.get("parameters") if callback is not None else None
        if isinstance(callback_params, list) and len(callback_params) == 1:
            return_type = create_inline_type(callback_params[0], ctx, in_callback=True)

    if return_type is None and descriptor.returns is not None:
        return_type = create_inline_type(descriptor.returns, ctx)

    if return_type is None:
        return_type = VOID

    if descriptor.is_async:
        return_type = TypeReference(DEFERRED_RESULT_WRAPPER, (return_type,))
    return return_type


def build_parameter_list(
    raw_parameters: Sequence[Any], ctx: GeneratorContext
) -> tuple[Parameter, ...]:
    """Generate the parameters of a signature.

    Parameter types are generated inline as part of a callback signature. A
    parameter whose type cannot be generated is typed ``any``. An optional
    parameter followed by a mandatory one cannot carry ``?``; it is emitted as
    a mandatory ``T | undefined`` instead.
    """
    parameters: list[Parameter] = []
    for index, raw in enumerate(raw_parameters):
        traits = Traits.from_raw(raw) if isinstance(raw, Mapping) else Traits()
        type_node = create_inline_type(raw, ctx, in_callback=True) or ANY
        optional = traits.optional
        if optional and any(_is_mandatory(later) for later in raw_parameters[index + 1 :]):
            type_node = UnionType((type_node, UNDEFINED))
            optional = False
        parameters.append(
            Parameter(
                name=traits.name or f"param{index}",
                type=type_node,
                optional=optional,
                doc=jsdoc_for(traits),
            )
        )
    return tuple(parameters)


def generate_function(descriptor: FunctionDescriptor, ctx: GeneratorContext) -> Node:
    return_type = resolve_return_type(descriptor, ctx)
    raw_parameters = (
        list(descriptor.parameters) if ctx.in_callback else without_callback(descriptor.parameters)
    )
    parameters = build_parameter_list(raw_parameters, ctx)
    traits = descriptor.traits

    match ctx.context:
        case GenerationContext.INLINE:
            return FunctionType(parameters=parameters, return_type=return_type)
        case GenerationContext.NAMESPACE:
            if traits.name is None and traits.id is not None:
                # function *type* declared in ``types``
                return TypeAliasDeclaration(
                    name=traits.id,
                    type=FunctionType(parameters=parameters, return_type=return_type),
                    doc=jsdoc_for(traits),
                )
            return FunctionDeclaration(
                name=require_name(traits.name, "function", ctx.context),
                parameters=parameters,
                return_type=return_type,
                doc=jsdoc_for(traits),
            )
        case GenerationContext.INTERFACE:
            return MethodSignature(
                name=require_name(traits.name, "function", ctx.context),
                parameters=parameters,
                return_type=return_type,
                optional=traits.optional,
                doc=jsdoc_for(traits),
            )
    raise InvalidContextError("function", ctx.context)

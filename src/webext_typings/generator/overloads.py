# topmark:header:start
#
#   project      : webext-typings
#   file         : overloads.py
#   file_relpath : src/webext_typings/generator/overloads.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Overload expansion for functions with infix optional parameters.

A declaration can mark trailing parameters optional, but not an optional
parameter followed by a mandatory one. For such a function one overload is
emitted per combination of the *infix optional* parameters being present or
absent.

Let ``I`` be the positions that are optional and have a later mandatory
parameter, ``k = len(I)``. The expansion yields the baseline list (all
parameters as declared) plus one list per bit pattern ``b`` in
``0 .. 2**k - 2``: bit ``j`` clear omits ``I[j]``, bit ``j`` set keeps it as a
mandatory parameter. The all-ones pattern equals the baseline and is not
repeated, so there are exactly ``2**k`` lists.

The ``callback`` parameter is consumed into the return type, so positions are
computed on the list without it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Final

from webext_typings.config.logging import get_logger
from webext_typings.constants import RESERVED_NAME_PREFIX
from webext_typings.declarations.identifiers import is_reserved_word
from webext_typings.declarations.nodes import (
    ExportAliasDeclaration,
    FunctionDeclaration,
    InterfaceDeclaration,
    TypeAliasDeclaration,
)
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.dispatch import create_single_typing
from webext_typings.generator.functions import is_callback_parameter, without_callback
from webext_typings.generator.predicates import (
    has_functions,
    has_properties,
    is_object_type,
    is_optional,
)

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.declarations.nodes import Statement
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.schema.catalog import Descriptor

logger: WebextLogger = get_logger(__name__)

# Traits carried over when a parameter is rewritten into a reference.
_PARAMETER_TRAIT_KEYS: Final[tuple[str, ...]] = ("name", "description", "deprecated", "optional")


def _optional(raw: Any) -> bool:
    return isinstance(raw, Mapping) and is_optional(raw)


def infix_optional_positions(parameters: Sequence[Any]) -> tuple[int, ...]:
    """Return the positions of optional parameters that have a later mandatory one."""
    positions: list[int] = []
    for index, param in enumerate(parameters):
        if _optional(param) and any(not _optional(later) for later in parameters[index + 1 :]):
            positions.append(index)
    return tuple(positions)


def force_mandatory(raw: Any) -> Any:
    """Return a copy of a parameter descriptor with ``optional: false``."""
    if not isinstance(raw, Mapping):
        return raw
    return {**raw, "optional": False}


def expand_parameter_lists(parameters: Sequence[Any]) -> list[list[Any]]:
    """Return the baseline parameter list followed by one list per omission pattern.

    Args:
        parameters: Parameter descriptors, without the ``callback`` parameter.

    Returns:
        list[list[Any]]: ``2**k`` parameter lists, ``k`` being the number of
            infix optional parameters. Parameters outside ``I`` keep their
            declared optionality in every list.
    """
    positions = infix_optional_positions(parameters)
    lists: list[list[Any]] = [list(parameters)]
    for pattern in range(2 ** len(positions) - 1):
        kept = {pos for bit, pos in enumerate(positions) if pattern >> bit & 1}
        omitted = set(positions) - kept
        lists.append(
            [
                force_mandatory(param) if index in kept else param
                for index, param in enumerate(parameters)
                if index not in omitted
            ]
        )
    return lists


def pascal_case(*words: str) -> str:
    """Join ``words`` with their first letters upper-cased (``CreateInfo``)."""
    return "".join(word[:1].upper() + word[1:] for word in words)


def _is_hoistable(raw: Any) -> bool:
    return (
        isinstance(raw, Mapping)
        and isinstance(raw.get("name"), str)
        and is_object_type(raw)
        and (has_properties(raw) or has_functions(raw))
    )


def _reference_to(raw: Mapping[str, Any], name: str) -> dict[str, Any]:
    rewritten = {key: raw[key] for key in _PARAMETER_TRAIT_KEYS if key in raw}
    rewritten["$ref"] = name
    return rewritten


def hoist_object_parameters(
    function_name: str,
    parameters: Sequence[Any],
    ctx: GeneratorContext,
) -> tuple[list[Any], list[Statement]]:
    """Move inline object parameters into named interfaces.

    Each object parameter declaring properties or functions becomes
    ``export interface <Function><Param>`` and the parameter a reference to it.
    An interface hoisted earlier in the namespace under the same name is
    reused, not emitted again. A parameter whose interface name collides with a
    schema type or another declaration of the namespace stays inline, with a
    warning, as does one whose interface cannot be generated.

    Returns:
        tuple[list[Any], list[Statement]]: The rewritten parameters and the new
            declarations (already recorded as defined).
    """
    hoist_ctx = ctx.at(GenerationContext.NAMESPACE, in_callback=True)
    rewritten: list[Any] = []
    hoisted: list[Statement] = []
    for param in parameters:
        if not _is_hoistable(param):
            rewritten.append(param)
            continue
        interface_name = pascal_case(function_name, param["name"])
        if interface_name not in ctx.hoisted_names:
            if ctx.find_local_type(interface_name) is not None or ctx.is_defined(interface_name):
                ctx.diagnostics.add_warning(
                    f"Cannot hoist parameter {param['name']} of {function_name}: "
                    f"{interface_name} is already declared in namespace {ctx.current_namespace}",
                    namespace=ctx.current_namespace,
                )
                rewritten.append(param)
                continue
            result = create_single_typing({**param, "id": interface_name}, hoist_ctx)
            if not isinstance(result.node, (InterfaceDeclaration, TypeAliasDeclaration)):
                rewritten.append(param)
                continue
            logger.debug("Hoisted parameter %s into %s", param["name"], interface_name)
            ctx.define(result.node)
            ctx.hoisted_names.add(interface_name)
            hoisted.append(result.node)
        rewritten.append(_reference_to(param, interface_name))
    return rewritten, hoisted


def generate_function_overloads(raw: Descriptor, ctx: GeneratorContext) -> list[Statement]:
    """Generate the declarations of one namespace function.

    Emits the hoisted parameter interfaces (only when overloads are needed),
    then one exported function declaration per parameter list. A function
    named after a reserved word is declared as ``__<name>`` and re-exported
    once, after its last overload, as ``export { __<name> as <name> };``.

    Every emitted statement is recorded in the namespace's already-defined set.
    """
    ctx = ctx.expansion_scope()
    ns_ctx = ctx.at(GenerationContext.NAMESPACE, in_callback=False)
    name = raw.get("name")
    raw_parameters = raw.get("parameters")
    parameters: list[Any] = raw_parameters if isinstance(raw_parameters, list) else []
    callbacks = [param for param in parameters if is_callback_parameter(param)]
    signature = without_callback(parameters)

    statements: list[Statement] = []
    if infix_optional_positions(signature) and isinstance(name, str):
        signature, hoisted = hoist_object_parameters(name, signature, ctx)
        statements.extend(hoisted)

    reserved = isinstance(name, str) and is_reserved_word(name)
    overloads: list[FunctionDeclaration] = []
    for parameter_list in expand_parameter_lists(signature):
        result = create_single_typing({**raw, "parameters": [*parameter_list, *callbacks]}, ns_ctx)
        if result.skipped:
            break
        node = result.node
        if not isinstance(node, FunctionDeclaration):
            if node is not None:
                ctx.diagnostics.add_error(
                    f"Not a function declaration: {name}", namespace=ctx.current_namespace
                )
            continue
        if reserved:
            node = replace(node, name=f"{RESERVED_NAME_PREFIX}{name}", exported=False)
        ctx.define(node)
        overloads.append(node)

    statements.extend(overloads)
    if reserved and overloads:
        logger.debug("Function %s uses a reserved word, re-exported under an alias", name)
        statements.append(
            ExportAliasDeclaration(
                local_name=f"{RESERVED_NAME_PREFIX}{name}", exported_name=str(name)
            )
        )
    return statements

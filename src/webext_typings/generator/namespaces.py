# topmark:header:start
#
#   project      : webext-typings
#   file         : namespaces.py
#   file_relpath : src/webext_typings/generator/namespaces.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Namespace assembly and bootstrap declarations.

Per namespace, declarations are emitted in this order:

1. types: bare ``$ref`` types are reported (type merging is not supported)
   and skipped; the others are generated at namespace context;
2. functions, through the overload expander;
3. events: ``export const onX: WebExtEvent<Callback>;`` or, with
   ``extraParameters``, an inline listener object whose ``addListener``
   takes the extra parameters;
4. properties: constants typed by their descriptor.

The whole artifact is the host interface (``interface Window``), the generic
event interface, ``declare namespace <root>`` with one nested namespace per
catalog entry, and optionally an alias root re-exporting every first-level
namespace.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from webext_typings.config.logging import get_logger
from webext_typings.constants import (
    DEFAULT_EVENT_INTERFACE,
    DEFAULT_HOST_INTERFACE,
    DEFAULT_ROOT_NAMESPACE,
)
from webext_typings.declarations.nodes import (
    ANY,
    BOOLEAN,
    VOID,
    ArrayType,
    FunctionDeclaration,
    FunctionType,
    ImportAliasDeclaration,
    InterfaceDeclaration,
    MethodSignature,
    NamespaceDeclaration,
    Parameter,
    PropertySignature,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeParameter,
    TypeQuery,
    TypeReference,
    UnionType,
    VariableStatement,
)
from webext_typings.diagnostic.model import DiagnosticLog
from webext_typings.generator.context import GenerationContext, GeneratorContext
from webext_typings.generator.descriptors import (
    ArrayDescriptor,
    BooleanDescriptor,
    NumberDescriptor,
    ObjectDescriptor,
    ReferenceDescriptor,
    StaticValueDescriptor,
    StringDescriptor,
    Traits,
    classify,
    variant_label,
)
from webext_typings.generator.dispatch import create_inline_type, create_single_typing
from webext_typings.generator.docs import jsdoc_for, jsdoc_text
from webext_typings.generator.functions import build_parameter_list
from webext_typings.generator.overloads import force_mandatory, generate_function_overloads
from webext_typings.generator.predicates import (
    has_extra_parameters,
    is_optional,
    is_reference_type,
    is_unsupported,
    is_with_id,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from webext_typings.config.logging import WebextLogger
    from webext_typings.declarations.nodes import Statement, TypeNode
    from webext_typings.schema.catalog import Descriptor, SchemaCatalog

logger: WebextLogger = get_logger(__name__)

LISTENER_TYPE_PARAMETER = "TCallback"

# Variants a namespace property can be declared with (besides static values).
_CONSTANT_VARIANTS: tuple[type, ...] = (
    ArrayDescriptor,
    BooleanDescriptor,
    NumberDescriptor,
    ObjectDescriptor,
    ReferenceDescriptor,
    StringDescriptor,
)

_STATEMENT_TYPES: tuple[type, ...] = (
    FunctionDeclaration,
    TypeAliasDeclaration,
    InterfaceDeclaration,
    VariableStatement,
)


def _label(namespace: str, raw: Any) -> str:
    name = (raw.get("name") or raw.get("id")) if isinstance(raw, Mapping) else None
    return f"{namespace}.{name}" if name else namespace


# --- Types and functions ---


def _type_declarations(ctx: GeneratorContext, types: Iterable[Descriptor]) -> list[Statement]:
    statements: list[Statement] = []
    ns_ctx = ctx.at(GenerationContext.NAMESPACE)
    for raw in types:
        if not isinstance(raw, Mapping):
            ctx.diagnostics.add_error(
                f"Type entry is not an object: {raw!r}", namespace=ctx.current_namespace
            )
            continue
        if is_reference_type(raw):
            ctx.diagnostics.add_warning(
                f"Type merging is not supported, skipping reference type {raw['$ref']}",
                namespace=ctx.current_namespace,
            )
            continue
        if not is_with_id(raw):
            ctx.diagnostics.add_error(
                f"Type without an id in namespace {ctx.current_namespace}",
                namespace=ctx.current_namespace,
            )
            continue
        result = create_single_typing(raw, ns_ctx)
        node = result.node
        if node is None:
            continue
        if isinstance(node, _STATEMENT_TYPES):
            ctx.define(node)  # type: ignore[arg-type]
            statements.append(node)  # type: ignore[arg-type]
        else:
            ctx.diagnostics.add_warning(
                f"Unexpected declaration for type {raw['id']}", namespace=ctx.current_namespace
            )
    return statements


def _function_declarations(
    ctx: GeneratorContext, functions: Iterable[Descriptor]
) -> list[Statement]:
    statements: list[Statement] = []
    for raw in functions:
        if not isinstance(raw, Mapping):
            ctx.diagnostics.add_error(
                f"Function entry is not an object: {raw!r}", namespace=ctx.current_namespace
            )
            continue
        if is_unsupported(raw):
            ctx.diagnostics.add_warning(
                f"Skipping unsupported function {_label(ctx.current_namespace, raw)}",
                namespace=ctx.current_namespace,
            )
            continue
        statements.extend(generate_function_overloads(raw, ctx))
    return statements


# --- Events ---


def _first_index(parameters: Sequence[Any], *, optional: bool) -> int:
    for index, param in enumerate(parameters):
        if (isinstance(param, Mapping) and is_optional(param)) is optional:
            return index
    return -1


def listener_split_points(parameters: Sequence[Any]) -> range:
    """Return the split points of an event listener with leading optional parameters.

    When the first optional parameter comes before the first mandatory one,
    every split point ``i`` from the first optional index to the first
    mandatory index (inclusive) yields one candidate signature. Otherwise the
    range is empty.
    """
    first_optional = _first_index(parameters, optional=True)
    first_mandatory = _first_index(parameters, optional=False)
    if first_optional < 0 or first_mandatory < 0 or first_optional >= first_mandatory:
        return range(0)
    return range(first_optional, first_mandatory + 1)


def listener_parameter_lists(parameters: Sequence[Any]) -> list[list[Any]]:
    """Return the candidate listener parameter lists, one per split point.

    For split point ``i``, parameters ``[i, first_mandatory)`` are forced
    mandatory and followed by the rest of the list.
    """
    split_points = listener_split_points(parameters)
    if not split_points:
        return []
    first_mandatory = split_points[-1]
    return [
        [
            *(force_mandatory(param) for param in parameters[split:first_mandatory]),
            *parameters[first_mandatory:],
        ]
        for split in split_points
    ]


def _listener_object(callback_type: TypeNode, extra: tuple[Parameter, ...]) -> TypeLiteral:
    callback = Parameter(name="callback", type=callback_type)
    return TypeLiteral(
        (
            MethodSignature("addListener", (callback, *extra), VOID),
            MethodSignature("removeListener", (callback,), VOID),
            MethodSignature("hasListener", (callback,), BOOLEAN),
        )
    )


def generate_event(
    raw: Descriptor,
    ctx: GeneratorContext,
    *,
    event_interface: str = DEFAULT_EVENT_INTERFACE,
) -> VariableStatement | None:
    """Generate the constant declaring one event, or None (with a diagnostic)."""
    namespace = ctx.current_namespace
    label = _label(namespace, raw)
    name = raw.get("name")
    if is_unsupported(raw):
        ctx.diagnostics.add_warning(f"Skipping unsupported event {label}", namespace=namespace)
        return None
    if not isinstance(name, str) or not name:
        ctx.diagnostics.add_error(f"Event without a name in {namespace}", namespace=namespace)
        return None

    raw_parameters = raw.get("parameters")
    parameters: list[Any] = raw_parameters if isinstance(raw_parameters, list) else []
    variants = listener_parameter_lists(parameters)
    with_extra = has_extra_parameters(raw)
    if variants and with_extra:
        ctx.diagnostics.add_error(
            f"Event {label} needs both a union of listener signatures and extra listener "
            "parameters; these cannot be combined",
            namespace=namespace,
        )
        return None

    listener_ctx = ctx.expansion_scope().at(GenerationContext.INLINE, in_callback=True)
    result = create_single_typing(raw, listener_ctx)
    if not isinstance(result.node, FunctionType):
        ctx.diagnostics.add_error(f"Error creating event typing for {label}", namespace=namespace)
        return None
    callback_type: TypeNode = result.node

    if variants:
        candidates: list[TypeNode] = []
        for variant in variants:
            candidate = create_single_typing({**raw, "parameters": variant}, listener_ctx).node
            if isinstance(candidate, FunctionType) and candidate not in candidates:
                candidates.append(candidate)
        if candidates:
            callback_type = candidates[0] if len(candidates) == 1 else UnionType(tuple(candidates))

    if with_extra:
        extra = build_parameter_list(raw["extraParameters"], listener_ctx)
        event_type: TypeNode = _listener_object(callback_type, extra)
    else:
        event_type = TypeReference(event_interface, (callback_type,))

    return VariableStatement(name=name, type=event_type, doc=jsdoc_for(Traits.from_raw(raw)))


def _event_declarations(
    ctx: GeneratorContext, events: Iterable[Descriptor], event_interface: str
) -> list[Statement]:
    statements: list[Statement] = []
    for raw in events:
        if not isinstance(raw, Mapping):
            ctx.diagnostics.add_error(
                f"Event entry is not an object: {raw!r}", namespace=ctx.current_namespace
            )
            continue
        declaration = generate_event(raw, ctx, event_interface=event_interface)
        if declaration is not None:
            statements.append(declaration)
    return statements


# --- Properties ---


def generate_property(name: str, raw: Any, ctx: GeneratorContext) -> VariableStatement | None:
    """Generate the constant declaring one namespace property, or None (with a diagnostic)."""
    namespace = ctx.current_namespace
    if not isinstance(raw, Mapping):
        ctx.diagnostics.add_error(
            f"Property {namespace}.{name} is not an object", namespace=namespace
        )
        return None
    if is_unsupported(raw):
        ctx.diagnostics.add_warning(
            f"Skipping unsupported property {namespace}.{name}", namespace=namespace
        )
        return None

    descriptor = classify(raw)
    if isinstance(descriptor, StaticValueDescriptor):
        result = create_single_typing({**raw, "name": name}, ctx.at(GenerationContext.NAMESPACE))
        return result.node if isinstance(result.node, VariableStatement) else None
    if isinstance(descriptor, _CONSTANT_VARIANTS):
        type_node = create_inline_type(raw, ctx)
        if type_node is None:
            return None
        return VariableStatement(name=name, type=type_node, doc=jsdoc_for(descriptor.traits))

    kind = variant_label(descriptor) if descriptor is not None else "unclassified"
    ctx.diagnostics.add_warning(
        f"Property {namespace}.{name} of kind {kind} cannot be declared as a constant",
        namespace=namespace,
    )
    return None


def _property_declarations(
    ctx: GeneratorContext, properties: Mapping[str, Any]
) -> list[Statement]:
    statements: list[Statement] = []
    for name, raw in properties.items():
        declaration = generate_property(name, raw, ctx)
        if declaration is not None:
            statements.append(declaration)
    return statements


# --- Assembly ---


def create_namespace_body(
    namespace: str,
    catalog: SchemaCatalog,
    diagnostics: DiagnosticLog,
    *,
    event_interface: str = DEFAULT_EVENT_INTERFACE,
) -> tuple[Statement, ...]:
    """Generate the declarations of one catalog namespace, in emission order."""
    entry = catalog[namespace]
    ctx = GeneratorContext(
        current_namespace=namespace,
        known_types=entry.types,
        catalog=catalog,
        diagnostics=diagnostics,
    )
    logger.info("Generating namespace %s", namespace)
    body: list[Statement] = [
        *_type_declarations(ctx, entry.types),
        *_function_declarations(ctx, entry.functions),
        *_event_declarations(ctx, entry.events, event_interface),
        *_property_declarations(ctx, entry.properties),
    ]
    logger.debug("Namespace %s: %d declaration(s)", namespace, len(body))
    return tuple(body)


def bootstrap_host_interface(
    roots: Sequence[str], host_interface: str = DEFAULT_HOST_INTERFACE
) -> InterfaceDeclaration:
    """Return ``interface Window { messenger: typeof messenger; }`` (one member per root)."""
    return InterfaceDeclaration(
        name=host_interface,
        members=tuple(PropertySignature(name=root, type=TypeQuery(root)) for root in roots),
        exported=False,
    )


def bootstrap_event_interface(
    event_interface: str = DEFAULT_EVENT_INTERFACE,
) -> InterfaceDeclaration:
    """Return the generic listener interface used by every event constant."""
    callback = Parameter(name="cb", type=TypeReference(LISTENER_TYPE_PARAMETER))
    return InterfaceDeclaration(
        name=event_interface,
        members=(
            MethodSignature("addListener", (callback,), VOID),
            MethodSignature("removeListener", (callback,), VOID),
            MethodSignature("hasListener", (callback,), BOOLEAN),
        ),
        type_parameters=(
            TypeParameter(
                name=LISTENER_TYPE_PARAMETER,
                constraint=FunctionType(
                    parameters=(Parameter(name="args", type=ArrayType(ANY), rest=True),),
                    return_type=ANY,
                ),
            ),
        ),
        exported=False,
    )


def alias_namespace_declaration(
    alias: str, root: str, namespaces: Iterable[str]
) -> NamespaceDeclaration:
    """Return ``declare namespace <alias>`` re-exporting each first-level namespace of ``root``."""
    first_level: list[str] = []
    for namespace in namespaces:
        head = namespace.split(".", 1)[0]
        if head not in first_level:
            first_level.append(head)
    return NamespaceDeclaration(
        name=alias,
        body=tuple(
            ImportAliasDeclaration(name=head, target=f"{root}.{head}") for head in first_level
        ),
        declare=True,
    )


def assemble_declarations(
    catalog: SchemaCatalog,
    diagnostics: DiagnosticLog | None = None,
    *,
    root_namespace: str = DEFAULT_ROOT_NAMESPACE,
    alias_namespace: str | None = None,
    ignored_namespaces: Iterable[str] = (),
    host_interface: str = DEFAULT_HOST_INTERFACE,
    event_interface: str = DEFAULT_EVENT_INTERFACE,
) -> tuple[Statement, ...]:
    """Generate the complete declaration tree for ``catalog``.

    Args:
        catalog: The merged schema catalog (read only).
        diagnostics: Run diagnostics collector; a fresh one when None.
        root_namespace: Name of the ambient root namespace.
        alias_namespace: Optional second root re-exporting every namespace.
        ignored_namespaces: Namespaces not emitted (still used for reference
            resolution).
        host_interface: Global interface receiving the root as a property.
        event_interface: Name of the generic listener interface.

    Returns:
        tuple[Statement, ...]: Top-level statements in output order.
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    ignored = set(ignored_namespaces)
    emitted: list[str] = []
    modules: list[Statement] = []
    for namespace in catalog:
        if namespace in ignored:
            logger.info("Ignoring namespace %s", namespace)
            continue
        body = create_namespace_body(
            namespace, catalog, diagnostics, event_interface=event_interface
        )
        modules.append(
            NamespaceDeclaration(
                name=namespace, body=body, doc=jsdoc_text(catalog[namespace].description)
            )
        )
        emitted.append(namespace)

    roots = [root_namespace] + ([alias_namespace] if alias_namespace else [])
    statements: list[Statement] = [
        bootstrap_host_interface(roots, host_interface),
        bootstrap_event_interface(event_interface),
        NamespaceDeclaration(name=root_namespace, body=tuple(modules), declare=True),
    ]
    if alias_namespace:
        statements.append(alias_namespace_declaration(alias_namespace, root_namespace, emitted))
    return tuple(statements)

# topmark:header:start
#
#   project      : webext-typings
#   file         : objects.py
#   file_relpath : src/webext_typings/generator/objects.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator for object descriptors.

An object collects three independent contributions:

- members: declared ``properties`` (generated inline), methods from
  ``functions`` (generated at interface context), and ``patternProperties``
  whose pattern is a plain identifier (optional members);
- a dynamic part: one ``[key: string]: T`` index signature whose value is the
  union of the remaining pattern property types and the
  ``additionalProperties`` type;
- ``isInstanceOf``: a reference to the named external type.

Combination rules:

- members only, or a dynamic part only: one interface / type literal;
- members and a dynamic part, or an instance-of reference: an intersection
  (a property type does not have to conform to the index signature);
- nothing at all (inline): ``{ [key: string]: any }``.

The generator only reads the descriptor and the catalog, so generating the
same descriptor twice yields equal trees.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from webext_typings.config.logging import get_logger
from webext_typings.declarations.identifiers import is_valid_identifier
from webext_typings.declarations.nodes import (
    ANY,
    IndexSignature,
    InterfaceDeclaration,
    IntersectionType,
    MethodSignature,
    PropertySignature,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeReference,
    UnionType,
    open_index_signature,
)
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import Traits, require_name
from webext_typings.generator.dispatch import create_inline_type, create_single_typing
from webext_typings.generator.docs import jsdoc_for
from webext_typings.generator.errors import InvalidContextError

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.declarations.nodes import Member, Node, TypeNode
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import ObjectDescriptor
    from webext_typings.schema.catalog import Descriptor

logger: WebextLogger = get_logger(__name__)


@dataclass(frozen=True)
class ObjectShape:
    """The three contributions of an object descriptor."""

    members: tuple[Member, ...] = ()
    index: IndexSignature | None = None
    instance_of: TypeReference | None = None

    @property
    def is_plain(self) -> bool:
        """Return True if the shape fits a single interface body."""
        return self.instance_of is None and not (self.members and self.index is not None)

    def as_type(self) -> TypeNode:
        """Return the shape as one type node."""
        parts: list[TypeNode] = []
        if self.instance_of is not None:
            parts.append(self.instance_of)
        if self.members:
            parts.append(TypeLiteral(self.members))
        if self.index is not None:
            parts.append(TypeLiteral((self.index,)))
        if not parts:
            return TypeLiteral((open_index_signature(),))
        return parts[0] if len(parts) == 1 else IntersectionType(tuple(parts))


def _qualified(ctx: GeneratorContext, descriptor: ObjectDescriptor, name: str) -> str:
    return ".".join(
        part for part in (ctx.current_namespace, descriptor.traits.identifier, name) if part
    )


def _traits(raw: object) -> Traits:
    return Traits.from_raw(raw) if isinstance(raw, Mapping) else Traits()


def _property_members(descriptor: ObjectDescriptor, ctx: GeneratorContext) -> list[Member]:
    members: list[Member] = []
    for prop_name, raw in descriptor.properties.items():
        result = create_single_typing(raw, ctx.at(GenerationContext.INLINE))
        traits = _traits(raw)
        if result.node is None:
            label = _qualified(ctx, descriptor, prop_name)
            if result.skipped or traits.unsupported:
                ctx.diagnostics.add_warning(
                    f"Skipping unsupported property {label}", namespace=ctx.current_namespace
                )
            else:
                ctx.diagnostics.add_error(
                    f"Cannot create property type for {label}", namespace=ctx.current_namespace
                )
            continue
        members.append(
            PropertySignature(
                name=prop_name,
                type=result.node,  # type: ignore[arg-type]
                optional=traits.optional,
                doc=jsdoc_for(traits),
            )
        )
    return members


def _method_members(descriptor: ObjectDescriptor, ctx: GeneratorContext) -> list[Member]:
    members: list[Member] = []
    method_ctx = ctx.at(GenerationContext.INTERFACE, in_callback=False)
    for raw in descriptor.functions:
        result = create_single_typing(raw, method_ctx)
        label = _qualified(ctx, descriptor, _traits(raw).name or "")
        if result.skipped:
            ctx.diagnostics.add_warning(
                f"Skipping unsupported function {label}", namespace=ctx.current_namespace
            )
        elif isinstance(result.node, MethodSignature):
            members.append(result.node)
        elif result.node is not None:
            ctx.diagnostics.add_error(
                f"Not a function: {label}", namespace=ctx.current_namespace
            )
    return members


def _pattern_contributions(
    descriptor: ObjectDescriptor, ctx: GeneratorContext
) -> tuple[list[Member], list[TypeNode]]:
    """Split pattern properties into identifier-named members and index value types."""
    members: list[Member] = []
    index_types: list[TypeNode] = []
    for pattern, raw in descriptor.pattern_properties.items():
        value_type = create_inline_type(raw, ctx)
        if value_type is None:
            ctx.diagnostics.add_warning(
                f"Cannot resolve pattern property '{pattern}' of "
                f"{_qualified(ctx, descriptor, '')}",
                namespace=ctx.current_namespace,
            )
            continue
        if is_valid_identifier(pattern):
            members.append(
                PropertySignature(
                    name=pattern, type=value_type, optional=True, doc=jsdoc_for(_traits(raw))
                )
            )
        else:
            index_types.append(value_type)
    return members, index_types


def _additional_type(descriptor: ObjectDescriptor, ctx: GeneratorContext) -> TypeNode | None:
    additional = descriptor.additional_properties
    if additional is None:
        return None
    if additional is True or not additional:
        return ANY
    value_type = create_inline_type(additional, ctx)
    if value_type is None:
        logger.debug("additionalProperties of %s degraded to any", descriptor.traits.identifier)
        return ANY
    return value_type


def _index_signature(value_types: list[TypeNode]) -> IndexSignature | None:
    unique: list[TypeNode] = []
    for value_type in value_types:
        if value_type not in unique:
            unique.append(value_type)
    if not unique:
        return None
    if ANY in unique:
        return open_index_signature()
    if len(unique) == 1:
        return IndexSignature(value_type=unique[0])
    return IndexSignature(value_type=UnionType(tuple(unique)))


def object_shape(descriptor: ObjectDescriptor, ctx: GeneratorContext) -> ObjectShape:
    """Collect the members, dynamic part, and instance-of reference of an object."""
    pattern_members, index_types = _pattern_contributions(descriptor, ctx)
    members = [
        *_property_members(descriptor, ctx),
        *pattern_members,
        *_method_members(descriptor, ctx),
    ]
    additional = _additional_type(descriptor, ctx)
    if additional is not None:
        index_types.append(additional)
    instance_of = descriptor.instance_of
    return ObjectShape(
        members=tuple(members),
        index=_index_signature(index_types),
        instance_of=TypeReference(instance_of) if instance_of else None,
    )


def generate_object(descriptor: ObjectDescriptor, ctx: GeneratorContext) -> Node:
    match ctx.context:
        case GenerationContext.INLINE:
            return object_shape(descriptor, ctx).as_type()
        case GenerationContext.NAMESPACE | GenerationContext.INTERFACE:
            name = require_name(descriptor.traits.identifier, "object", ctx.context)
            shape = object_shape(descriptor, ctx)
            doc = jsdoc_for(descriptor.traits)
            if shape.is_plain:
                members = shape.members or ((shape.index,) if shape.index is not None else ())
                return InterfaceDeclaration(name=name, members=members, doc=doc)
            return TypeAliasDeclaration(name=name, type=shape.as_type(), doc=doc)
    raise InvalidContextError("object", ctx.context)

# topmark:header:start
#
#   project      : webext-typings
#   file         : descriptors.py
#   file_relpath : src/webext_typings/generator/descriptors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Classified schema descriptors.

A raw descriptor is a JSON mapping. `classify` turns it into exactly one
variant of the closed sum type `SchemaDescriptor`, following a fixed priority
list (`CLASSIFICATION_ORDER`): the predicates are not mutually exclusive, so
the first match wins.

Every variant carries the cross-cutting `Traits` and the raw mapping it came
from. Child descriptors (array items, object properties, function
parameters, union choices) stay raw: they are classified when the dispatcher
reaches them, so static overrides apply at every depth.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Final, Union

from webext_typings.generator import predicates as p
from webext_typings.generator.errors import GenerationError
from webext_typings.schema.catalog import Descriptor

if TYPE_CHECKING:
    from webext_typings.generator.context import GenerationContext


@dataclass(frozen=True)
class Traits:
    """Cross-cutting descriptor traits.

    Attributes:
        id: Type id (``types`` entries).
        name: Name (functions, events, parameters, properties).
        description: Raw description text.
        deprecated: Deprecation message; ``""`` for a bare ``deprecated: true``,
            None when not deprecated.
        unsupported: True only for an explicit ``unsupported: true``.
        optional: True for ``optional: true`` or ``"omit-key-if-missing"``.
    """

    id: str | None = None
    name: str | None = None
    description: str | None = None
    deprecated: str | None = None
    unsupported: bool = False
    optional: bool = False

    @classmethod
    def from_raw(cls, raw: Descriptor) -> Traits:
        """Extract the traits of a raw descriptor."""
        deprecation: str | None = None
        if p.is_with_deprecation(raw):
            deprecation = "" if raw["deprecated"] is True else raw["deprecated"]
        return cls(
            id=_optional_str(raw.get("id")),
            name=_optional_str(raw.get("name")),
            description=raw["description"] if p.is_with_description(raw) else None,
            deprecated=deprecation,
            unsupported=p.is_unsupported(raw),
            optional=p.is_optional(raw),
        )

    @property
    def identifier(self) -> str | None:
        """Name of a standalone declaration: the id, else the name."""
        return self.id or self.name

    @property
    def member_name(self) -> str | None:
        """Name of a member or constant: the name, else the id."""
        return self.name or self.id


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


# --- Variants ---


@dataclass(frozen=True)
class AnyDescriptor:
    traits: Traits
    raw: Descriptor


@dataclass(frozen=True)
class NullDescriptor:
    traits: Traits
    raw: Descriptor


@dataclass(frozen=True)
class BooleanDescriptor:
    traits: Traits
    raw: Descriptor


@dataclass(frozen=True)
class NumberDescriptor:
    """``integer`` or ``number`` (both map to the same primitive)."""

    traits: Traits
    raw: Descriptor
    integer: bool = False


@dataclass(frozen=True)
class StringDescriptor:
    """Plain string, or string enum when ``enum`` is not None."""

    traits: Traits
    raw: Descriptor
    enum: tuple[Any, ...] | None = None


@dataclass(frozen=True)
class ArrayDescriptor:
    traits: Traits
    raw: Descriptor
    items: Descriptor = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class ObjectDescriptor:
    """Object with declared, pattern and additional properties.

    ``additional_properties`` is ``True``, a descriptor, or None.
    """

    traits: Traits
    raw: Descriptor
    properties: Mapping[str, Descriptor] = field(default_factory=lambda: MappingProxyType({}))
    functions: tuple[Descriptor, ...] = ()
    pattern_properties: Mapping[str, Descriptor] = field(
        default_factory=lambda: MappingProxyType({})
    )
    additional_properties: bool | Descriptor | None = None
    instance_of: str | None = None


@dataclass(frozen=True)
class FunctionDescriptor:
    traits: Traits
    raw: Descriptor
    parameters: tuple[Descriptor, ...] = ()
    returns: Descriptor | None = None
    is_async: bool = False
    extra_parameters: tuple[Descriptor, ...] = ()


@dataclass(frozen=True)
class ReferenceDescriptor:
    traits: Traits
    raw: Descriptor
    ref: str = ""


@dataclass(frozen=True)
class UnionDescriptor:
    traits: Traits
    raw: Descriptor
    choices: tuple[Descriptor, ...] = ()


@dataclass(frozen=True)
class StaticValueDescriptor:
    traits: Traits
    raw: Descriptor
    value: Any = None


SchemaDescriptor = Union[
    AnyDescriptor,
    NullDescriptor,
    BooleanDescriptor,
    NumberDescriptor,
    StringDescriptor,
    ArrayDescriptor,
    ObjectDescriptor,
    FunctionDescriptor,
    ReferenceDescriptor,
    UnionDescriptor,
    StaticValueDescriptor,
]


# --- Builders ---


def _list(value: object) -> tuple[Any, ...]:
    return tuple(value) if isinstance(value, list) else ()


def _mapping(value: object) -> Mapping[str, Any]:
    return MappingProxyType(dict(value)) if isinstance(value, Mapping) else MappingProxyType({})


def _build_null(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return NullDescriptor(traits, raw)


def _build_any(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return AnyDescriptor(traits, raw)


def _build_function(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return FunctionDescriptor(
        traits,
        raw,
        parameters=_list(raw.get("parameters")),
        returns=raw["returns"] if p.has_return(raw) else None,
        is_async=p.is_async_function(raw),
        extra_parameters=_list(raw.get("extraParameters")),
    )


def _build_array(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return ArrayDescriptor(traits, raw, items=raw["items"])


def _build_union(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return UnionDescriptor(traits, raw, choices=_list(raw.get("choices")))


def _build_reference(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return ReferenceDescriptor(traits, raw, ref=str(raw["$ref"]))


def _build_string(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    enum = tuple(raw["enum"]) if p.is_enum_string_type(raw) else None
    return StringDescriptor(traits, raw, enum=enum)


def _build_boolean(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return BooleanDescriptor(traits, raw)


def _build_object(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return ObjectDescriptor(
        traits,
        raw,
        properties=_mapping(raw.get("properties")),
        functions=_list(raw.get("functions")),
        pattern_properties=(
            _mapping(raw["patternProperties"]) if p.has_pattern_properties(raw) else _mapping(None)
        ),
        additional_properties=(
            raw["additionalProperties"] if p.has_additional_properties(raw) else None
        ),
        instance_of=p.instance_of(raw),
    )


def _build_number(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return NumberDescriptor(traits, raw, integer=p.is_integer_type(raw))


def _build_static_value(raw: Descriptor, traits: Traits) -> SchemaDescriptor:
    return StaticValueDescriptor(traits, raw, value=raw["value"])


def _is_integer_or_number(raw: Descriptor) -> bool:
    return p.is_integer_type(raw) or p.is_number_type(raw)


Classifier = tuple[
    str,
    Callable[[Descriptor], bool],
    Callable[[Descriptor, Traits], SchemaDescriptor],
]

# Priority list: the first matching predicate wins.
CLASSIFICATION_ORDER: Final[tuple[Classifier, ...]] = (
    ("null", p.is_null_type, _build_null),
    ("any", p.is_any_type, _build_any),
    ("function", p.is_function_type, _build_function),
    ("array", p.is_array_type, _build_array),
    ("union", p.is_union_type, _build_union),
    ("reference", p.is_reference_type, _build_reference),
    ("string", p.is_string_type, _build_string),
    ("boolean", p.is_boolean_type, _build_boolean),
    ("object", p.is_object_type, _build_object),
    ("number", _is_integer_or_number, _build_number),
    ("static value", p.is_static_value_type, _build_static_value),
)


def classify(raw: Descriptor) -> SchemaDescriptor | None:
    """Return the variant of ``raw``, or None if no classifier matches."""
    traits = Traits.from_raw(raw)
    for _label, predicate, build in CLASSIFICATION_ORDER:
        if predicate(raw):
            return build(raw, traits)
    return None


_VARIANT_LABELS: Final[dict[type, str]] = {
    AnyDescriptor: "any",
    NullDescriptor: "null",
    BooleanDescriptor: "boolean",
    NumberDescriptor: "number",
    StringDescriptor: "string",
    ArrayDescriptor: "array",
    ObjectDescriptor: "object",
    FunctionDescriptor: "function",
    ReferenceDescriptor: "reference",
    UnionDescriptor: "union",
    StaticValueDescriptor: "static value",
}


def variant_label(descriptor: SchemaDescriptor) -> str:
    """Return a short human-readable label for a classified descriptor."""
    return _VARIANT_LABELS[type(descriptor)]


def require_name(name: str | None, variant: str, context: GenerationContext) -> str:
    """Return ``name``, or fail the declaration when it is missing.

    Raises:
        GenerationError: If ``name`` is None or empty.
    """
    if not name:
        raise GenerationError(f"{variant} needs an id or a name in {context.value} context")
    return name

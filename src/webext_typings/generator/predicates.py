# topmark:header:start
#
#   project      : webext-typings
#   file         : predicates.py
#   file_relpath : src/webext_typings/generator/predicates.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Structural tests over raw schema descriptors.

Predicates are pure and never raise on a well-formed mapping. Several may hold
for the same descriptor (an object type usually also has an id); the
classification order in `webext_typings.generator.descriptors` decides which
variant wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from webext_typings.schema.catalog import Descriptor

OMIT_KEY_IF_MISSING: Final[str] = "omit-key-if-missing"
ASYNC_CALLBACK: Final[str] = "callback"
INSTANCE_OF_KEYS: Final[tuple[str, ...]] = ("isInstanceOf", "instanceOf")


# --- Traits ---


def is_with_id(descriptor: Descriptor) -> bool:
    return descriptor.get("id") is not None


def is_with_name(descriptor: Descriptor) -> bool:
    return descriptor.get("name") is not None


def is_with_description(descriptor: Descriptor) -> bool:
    return isinstance(descriptor.get("description"), str)


def is_with_deprecation(descriptor: Descriptor) -> bool:
    """Return True for ``deprecated: true`` and for a deprecation message."""
    value = descriptor.get("deprecated")
    return value is True or isinstance(value, str)


def is_unsupported(descriptor: Descriptor) -> bool:
    """Return True only when ``unsupported`` is explicitly ``true``."""
    return descriptor.get("unsupported") is True


def is_optional(descriptor: Descriptor) -> bool:
    """Return True for ``optional: true`` and ``optional: "omit-key-if-missing"``.

    The two spellings only differ in how a serializer treats a missing key,
    not in the generated type.
    """
    value = descriptor.get("optional")
    return value is True or value == OMIT_KEY_IF_MISSING


# --- Variants ---


def _type_is(descriptor: Descriptor, name: str) -> bool:
    return descriptor.get("type") == name


def is_any_type(descriptor: Descriptor) -> bool:
    return _type_is(descriptor, "any")


def is_array_type(descriptor: Descriptor) -> bool:
    """Return True for ``type: "array"`` with an ``items`` descriptor."""
    return _type_is(descriptor, "array") and descriptor.get("items") is not None


def is_boolean_type(descriptor: Descriptor) -> bool:
    return _type_is(descriptor, "boolean")


def is_string_type(descriptor: Descriptor) -> bool:
    return _type_is(descriptor, "string")


def is_enum_string_type(descriptor: Descriptor) -> bool:
    return is_string_type(descriptor) and isinstance(descriptor.get("enum"), list)


def is_integer_type(descriptor: Descriptor) -> bool:
    return _type_is(descriptor, "integer")


def is_number_type(descriptor: Descriptor) -> bool:
    return _type_is(descriptor, "number")


def is_null_type(descriptor: Descriptor) -> bool:
    return _type_is(descriptor, "null")


def is_object_type(descriptor: Descriptor) -> bool:
    return _type_is(descriptor, "object")


def is_function_type(descriptor: Descriptor) -> bool:
    return _type_is(descriptor, "function")


def is_reference_type(descriptor: Descriptor) -> bool:
    return descriptor.get("$ref") is not None


def is_union_type(descriptor: Descriptor) -> bool:
    return isinstance(descriptor.get("choices"), list)


def is_static_value_type(descriptor: Descriptor) -> bool:
    return "value" in descriptor


# --- Function and object capabilities ---


def is_async_function(descriptor: Descriptor) -> bool:
    """Return True for ``async: true`` and ``async: "callback"``."""
    value = descriptor.get("async")
    return value is True or value == ASYNC_CALLBACK


def _non_empty_list(value: object) -> bool:
    return isinstance(value, list) and len(value) > 0


def has_parameters(descriptor: Descriptor) -> bool:
    return _non_empty_list(descriptor.get("parameters"))


def has_extra_parameters(descriptor: Descriptor) -> bool:
    return _non_empty_list(descriptor.get("extraParameters"))


def has_return(descriptor: Descriptor) -> bool:
    return isinstance(descriptor.get("returns"), Mapping)


def has_functions(descriptor: Descriptor) -> bool:
    return isinstance(descriptor.get("functions"), list)


def has_properties(descriptor: Descriptor) -> bool:
    return isinstance(descriptor.get("properties"), Mapping)


def has_pattern_properties(descriptor: Descriptor) -> bool:
    return isinstance(descriptor.get("patternProperties"), Mapping)


def has_additional_properties(descriptor: Descriptor) -> bool:
    """Return True for ``additionalProperties: true`` or a value descriptor."""
    value = descriptor.get("additionalProperties")
    return value is True or isinstance(value, Mapping)


def instance_of(descriptor: Descriptor) -> str | None:
    """Return the external type named by ``isInstanceOf`` (or its ``instanceOf`` alias)."""
    for key in INSTANCE_OF_KEYS:
        value = descriptor.get(key)
        if isinstance(value, str) and value:
            return value
    return None

# topmark:header:start
#
#   project      : webext-typings
#   file         : dispatch.py
#   file_relpath : src/webext_typings/generator/dispatch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single entry point from a raw descriptor to a declaration node.

`create_single_typing` applies the static overrides, classifies the
descriptor, and routes it to the matching per-variant generator. It is also
the failure boundary of the engine: a `GenerationError` (or any unexpected
exception) raised while generating one node is recorded as one error
diagnostic and turned into an empty `TypingResult`, so a bad node never
aborts its namespace. Only `ContextCorruptedError` propagates.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from webext_typings.config.logging import get_logger
from webext_typings.declarations.nodes import is_type_node
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import (
    AnyDescriptor,
    ArrayDescriptor,
    BooleanDescriptor,
    FunctionDescriptor,
    NullDescriptor,
    NumberDescriptor,
    ObjectDescriptor,
    ReferenceDescriptor,
    StaticValueDescriptor,
    StringDescriptor,
    UnionDescriptor,
    classify,
)
from webext_typings.generator.errors import ContextCorruptedError, GenerationError
from webext_typings.generator.overrides import OverrideAction, find_static_override

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.declarations.nodes import Node, TypeNode
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import SchemaDescriptor

logger: WebextLogger = get_logger(__name__)


@dataclass(frozen=True)
class TypingResult:
    """Outcome of one dispatch.

    Attributes:
        node: The produced node, or None.
        skipped: True when a static override deliberately produced nothing.
    """

    node: Node | None = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        """Return True if a node was produced."""
        return self.node is not None


def _describe(raw: Any) -> str:
    if isinstance(raw, Mapping):
        for key in ("id", "name", "$ref"):
            value = raw.get(key)
            if isinstance(value, str) and value:
                return value
    return "<unknown>"


def _generate(descriptor: SchemaDescriptor, ctx: GeneratorContext) -> Node:
    # Generators recurse through this module, so they are imported on first use.
    from webext_typings.generator import (
        arrays,
        functions,
        objects,
        primitives,
        references,
        static_values,
        strings,
        unions,
    )

    match descriptor:
        case NullDescriptor():
            return primitives.generate_null(descriptor, ctx)
        case AnyDescriptor():
            return primitives.generate_any(descriptor, ctx)
        case FunctionDescriptor():
            return functions.generate_function(descriptor, ctx)
        case ArrayDescriptor():
            return arrays.generate_array(descriptor, ctx)
        case UnionDescriptor():
            return unions.generate_union(descriptor, ctx)
        case ReferenceDescriptor():
            return references.generate_reference(descriptor, ctx)
        case StringDescriptor():
            return strings.generate_string(descriptor, ctx)
        case BooleanDescriptor():
            return primitives.generate_boolean(descriptor, ctx)
        case ObjectDescriptor():
            return objects.generate_object(descriptor, ctx)
        case NumberDescriptor():
            return primitives.generate_number(descriptor, ctx)
        case StaticValueDescriptor():
            return static_values.generate_static_value(descriptor, ctx)
    raise GenerationError(f"No generator for {type(descriptor).__name__}")


def create_single_typing(raw: Any, ctx: GeneratorContext) -> TypingResult:
    """Generate the declaration node for one raw descriptor.

    Args:
        raw: The raw schema descriptor.
        ctx: Generation context bundle; ``ctx.context`` selects the output shape.

    Returns:
        TypingResult: The produced node, or an empty result (skipped by an
            override, or failed with an error diagnostic).

    Raises:
        ContextCorruptedError: If ``ctx`` violates its invariants.
    """
    ctx.validate()
    try:
        if not isinstance(raw, Mapping):
            raise GenerationError(f"descriptor is not an object: {raw!r}")

        override = find_static_override(raw)
        if override is not None:
            if override.action is OverrideAction.SKIP:
                logger.debug(
                    "Skipping %s in %s (%s)", _describe(raw), ctx.current_namespace, override.reason
                )
                return TypingResult(skipped=True)
            raw = override.apply(raw)

        descriptor = classify(raw)
        if descriptor is None:
            raise GenerationError(f"unable to classify descriptor {_describe(raw)}")
        node = _generate(descriptor, ctx)
    except ContextCorruptedError:
        raise
    except GenerationError as exc:
        _record_failure(raw, ctx, str(exc))
        return TypingResult()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while generating %s", _describe(raw))
        _record_failure(raw, ctx, f"{type(exc).__name__}: {exc}")
        return TypingResult()
    return TypingResult(node=node)


def _record_failure(raw: Any, ctx: GeneratorContext, reason: str) -> None:
    message = (
        f"Failed to create typing (context {ctx.context.value}, id {_describe(raw)}): {reason}"
    )
    logger.warning("%s: %s", ctx.current_namespace, message)
    ctx.diagnostics.add_error(message, namespace=ctx.current_namespace)


def create_inline_type(
    raw: Any,
    ctx: GeneratorContext,
    *,
    in_callback: bool | None = None,
) -> TypeNode | None:
    """Generate ``raw`` at inline context and return its type node, if any."""
    result = create_single_typing(raw, ctx.at(GenerationContext.INLINE, in_callback=in_callback))
    if result.node is not None and is_type_node(result.node):
        return result.node  # type: ignore[return-value]
    return None

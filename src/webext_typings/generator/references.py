# topmark:header:start
#
#   project      : webext-typings
#   file         : references.py
#   file_relpath : src/webext_typings/generator/references.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reference (``$ref``) resolution.

The resolution policy is best effort: a missing type never aborts generation,
it is reported and the reference is emitted as written. Within one overload
or listener-variant expansion each message is reported once.

Single-segment references (``"Tab"``), in order:

1. a type with that id declared by the current namespace, or a declaration
   already emitted in it: kept as is;
2. a type with that id in the shared ``manifest`` namespace: rewritten to
   ``manifest.<ref>`` with a warning (the schema under-qualified it);
3. otherwise: a "dangling reference" warning, kept as is.

Qualified references (``"runtime.Port"``) are looked up in the catalog entry
of their namespace part; a missing namespace or type is a dangling reference.

The descriptor is never modified.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from webext_typings.config.logging import get_logger
from webext_typings.constants import MANIFEST_NAMESPACE
from webext_typings.declarations.nodes import PropertySignature, TypeReference, VariableStatement
from webext_typings.generator.context import GenerationContext
from webext_typings.generator.descriptors import require_name
from webext_typings.generator.docs import jsdoc_for
from webext_typings.generator.errors import GenerationError, InvalidContextError

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.declarations.nodes import Node
    from webext_typings.generator.context import GeneratorContext
    from webext_typings.generator.descriptors import ReferenceDescriptor

logger: WebextLogger = get_logger(__name__)


def _warn_once(message: str, ctx: GeneratorContext) -> None:
    # overloads and listener variants regenerate the same parameters
    if ctx.reported is not None:
        if message in ctx.reported:
            return
        ctx.reported.add(message)
    ctx.diagnostics.add_warning(message, namespace=ctx.current_namespace)


def _dangling(ref: str, ctx: GeneratorContext) -> str:
    _warn_once(f"Dangling reference '{ref}' in namespace {ctx.current_namespace}", ctx)
    return ref


def resolve_reference_name(ref: str, ctx: GeneratorContext) -> str:
    """Return the name to emit for ``ref``, recording any diagnostic.

    Raises:
        GenerationError: If ``ref`` is empty.
    """
    if not ref:
        raise GenerationError("empty $ref")
    logger.trace("Resolving reference %s in %s", ref, ctx.current_namespace)

    if "." in ref:
        namespace, _, type_id = ref.rpartition(".")
        if namespace == ctx.current_namespace and (
            ctx.find_local_type(type_id) is not None or ctx.is_defined(type_id)
        ):
            return ref
        if ctx.catalog.find_type(namespace, type_id) is None:
            return _dangling(ref, ctx)
        return ref

    if ctx.find_local_type(ref) is not None or ctx.is_defined(ref):
        return ref

    if ctx.current_namespace != MANIFEST_NAMESPACE and ctx.catalog.find_manifest_type(ref):
        qualified = f"{MANIFEST_NAMESPACE}.{ref}"
        _warn_once(
            f"Reference '{ref}' resolved in namespace {MANIFEST_NAMESPACE}, using '{qualified}'",
            ctx,
        )
        return qualified

    return _dangling(ref, ctx)


def generate_reference(descriptor: ReferenceDescriptor, ctx: GeneratorContext) -> Node:
    reference = TypeReference(resolve_reference_name(descriptor.ref, ctx))
    traits = descriptor.traits
    match ctx.context:
        case GenerationContext.INLINE:
            return reference
        case GenerationContext.NAMESPACE:
            return VariableStatement(
                name=require_name(traits.member_name, "reference", ctx.context),
                type=reference,
                doc=jsdoc_for(traits),
            )
        case GenerationContext.INTERFACE:
            return PropertySignature(
                name=require_name(traits.member_name, "reference", ctx.context),
                type=reference,
                optional=traits.optional,
                doc=jsdoc_for(traits),
            )
    raise InvalidContextError("reference", ctx.context)

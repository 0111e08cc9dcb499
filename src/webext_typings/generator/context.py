# topmark:header:start
#
#   project      : webext-typings
#   file         : context.py
#   file_relpath : src/webext_typings/generator/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generation context threaded through every generator call.

`GenerationContext` selects the output *shape* of a descriptor:

- ``INLINE``: a bare type usable inside another declaration;
- ``NAMESPACE``: a standalone exported declaration (type alias, interface,
  function, constant);
- ``INTERFACE``: a member signature for an interface or object body.

`GeneratorContext` bundles everything a generator may read: the current
namespace, its sibling type descriptors, the whole catalog, the
already-defined declarations of the namespace, and the run's diagnostics
collector. The bundle itself is immutable; `at()` derives a copy for a
recursive call. The already-defined list, the hoisted names, and the
diagnostics log are shared (by reference) between all copies made for one
namespace.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

from webext_typings.declarations.nodes import declared_type_name
from webext_typings.generator.errors import ContextCorruptedError
from webext_typings.schema.catalog import SchemaCatalog

if TYPE_CHECKING:
    from webext_typings.declarations.nodes import Statement
    from webext_typings.diagnostic.model import DiagnosticLog
    from webext_typings.schema.catalog import Descriptor


class GenerationContext(Enum):
    """Where the generated node is going to be used."""

    INLINE = "inline"
    NAMESPACE = "namespace"
    INTERFACE = "interface"


@dataclass(frozen=True)
class GeneratorContext:
    """Immutable bundle handed to every generator.

    Attributes:
        current_namespace: Name of the namespace being generated.
        known_types: Type descriptors declared by the current namespace.
        catalog: The merged, read-only schema catalog.
        diagnostics: Run diagnostics collector.
        already_defined: Declarations emitted so far in the current namespace,
            in declaration order.
        context: The active generation context.
        in_callback: True while generating the parameter list of a callback
            signature (parameters are kept verbatim, no callback consumption).
        hoisted_names: Interfaces hoisted from inline object parameters of the
            current namespace.
        reported: Warning messages already recorded by the current overload or
            listener-variant expansion; None outside such an expansion.
    """

    current_namespace: str
    known_types: tuple[Descriptor, ...]
    catalog: SchemaCatalog
    diagnostics: DiagnosticLog
    already_defined: list[Statement] = field(default_factory=lambda: [])
    context: GenerationContext = GenerationContext.NAMESPACE
    in_callback: bool = False
    hoisted_names: set[str] = field(default_factory=lambda: set())
    reported: set[str] | None = None

    def at(
        self,
        context: GenerationContext,
        *,
        in_callback: bool | None = None,
    ) -> GeneratorContext:
        """Return a copy of this bundle for ``context``.

        Args:
            context: Context of the recursive call.
            in_callback: New callback flag; None keeps the current one.

        Returns:
            GeneratorContext: The derived bundle (shared catalog, definitions,
                and diagnostics).
        """
        return replace(
            self,
            context=context,
            in_callback=self.in_callback if in_callback is None else in_callback,
        )

    def expansion_scope(self) -> GeneratorContext:
        """Return a copy that records each repeated warning of one expansion once."""
        return replace(self, reported=set())

    def validate(self) -> None:
        """Check the bundle invariants.

        Raises:
            ContextCorruptedError: If a field holds a value no generator can work with.
        """
        if not isinstance(self.current_namespace, str) or not self.current_namespace:
            raise ContextCorruptedError("Generation context has no current namespace")
        if not isinstance(self.context, GenerationContext):
            raise ContextCorruptedError(f"Unknown generation context: {self.context!r}")
        if not isinstance(self.catalog, SchemaCatalog):
            raise ContextCorruptedError("Generation context does not carry a schema catalog")

    def find_local_type(self, type_id: str) -> Descriptor | None:
        """Return the sibling type declared with ``id == type_id``, if any."""
        for descriptor in self.known_types:
            if descriptor.get("id") == type_id:
                return descriptor
        return None

    def is_defined(self, name: str) -> bool:
        """Return True if a type-space declaration named ``name`` was already emitted."""
        return any(declared_type_name(node) == name for node in self.already_defined)

    def define(self, node: Statement) -> None:
        """Record an emitted declaration of the current namespace."""
        self.already_defined.append(node)

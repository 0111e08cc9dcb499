# topmark:header:start
#
#   project      : webext-typings
#   file         : catalog.py
#   file_relpath : src/webext_typings/schema/catalog.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Namespace catalog built from schema fragments.

Every schema file holds a list of *fragments*, each declaring (part of) one
namespace. Fragments that share a ``namespace`` value, across files or within
one file, are merged into a single `NamespaceEntry`:

- ``types``, ``functions``, ``events`` and ``permissions`` are concatenated in
  load order (never replaced);
- ``properties`` maps are merged key by key into ``properties`` (a later key
  wins, with a warning);
- the first fragment's ``description`` and source file are kept, a later
  non-empty description only fills an empty one.

The catalog is built once per run and is read-only afterwards: entries are
frozen dataclasses holding tuples and read-only mappings.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from webext_typings.config.logging import get_logger
from webext_typings.constants import MANIFEST_NAMESPACE

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from webext_typings.config.logging import WebextLogger
    from webext_typings.diagnostic.model import DiagnosticLog

logger: WebextLogger = get_logger(__name__)

SchemaFragment = Mapping[str, Any]
Descriptor = Mapping[str, Any]

_LIST_FIELDS: Final[tuple[str, ...]] = ("types", "functions", "events", "permissions")


@dataclass(frozen=True)
class NamespaceEntry:
    """Merged view of one schema namespace."""

    name: str
    description: str = ""
    types: tuple[Descriptor, ...] = ()
    functions: tuple[Descriptor, ...] = ()
    events: tuple[Descriptor, ...] = ()
    properties: Mapping[str, Descriptor] = field(default_factory=lambda: MappingProxyType({}))
    permissions: tuple[str, ...] = ()
    source_file: str = ""

    def find_type(self, type_id: str) -> Descriptor | None:
        """Return the type descriptor declared with ``id == type_id``, if any."""
        for descriptor in self.types:
            if descriptor.get("id") == type_id:
                return descriptor
        return None


@dataclass
class _EntryBuilder:
    name: str
    description: str
    source_file: str
    types: list[Descriptor] = field(default_factory=lambda: [])
    functions: list[Descriptor] = field(default_factory=lambda: [])
    events: list[Descriptor] = field(default_factory=lambda: [])
    permissions: list[str] = field(default_factory=lambda: [])
    properties: dict[str, Descriptor] = field(default_factory=lambda: {})

    def build(self) -> NamespaceEntry:
        return NamespaceEntry(
            name=self.name,
            description=self.description,
            types=tuple(self.types),
            functions=tuple(self.functions),
            events=tuple(self.events),
            properties=MappingProxyType(dict(self.properties)),
            permissions=tuple(self.permissions),
            source_file=self.source_file,
        )


class SchemaCatalog(Mapping[str, NamespaceEntry]):
    """Read-only mapping from namespace name to its merged `NamespaceEntry`.

    Iteration order is the order in which namespaces were first seen.
    """

    def __init__(self, entries: Mapping[str, NamespaceEntry] | None = None) -> None:
        self._entries: dict[str, NamespaceEntry] = dict(entries or {})

    def __getitem__(self, namespace: str) -> NamespaceEntry:
        return self._entries[namespace]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SchemaCatalog({list(self._entries)!r})"

    def find_type(self, namespace: str, type_id: str) -> Descriptor | None:
        """Return the type ``type_id`` declared in ``namespace`` (None when either is unknown)."""
        entry = self._entries.get(namespace)
        return entry.find_type(type_id) if entry is not None else None

    def find_manifest_type(self, type_id: str) -> Descriptor | None:
        """Return the type ``type_id`` declared in the shared ``manifest`` namespace."""
        return self.find_type(MANIFEST_NAMESPACE, type_id)


def _validate_fragment(fragment: SchemaFragment) -> str | None:
    """Return a reason string when ``fragment`` cannot contribute to the catalog."""
    namespace = fragment.get("namespace")
    if not isinstance(namespace, str) or not namespace:
        return "does not have a namespace"
    for key in _LIST_FIELDS:
        if key in fragment and not isinstance(fragment[key], list):
            return f"field '{key}' of namespace '{namespace}' is not a list"
    if "properties" in fragment and not isinstance(fragment["properties"], Mapping):
        return f"field 'properties' of namespace '{namespace}' is not an object"
    description = fragment.get("description", "")
    if not isinstance(description, str):
        return f"field 'description' of namespace '{namespace}' is not a string"
    return None


def merge_fragments(
    fragments: Iterable[tuple[str, SchemaFragment]],
    diagnostics: DiagnosticLog,
) -> SchemaCatalog:
    """Merge ``(source_file, fragment)`` pairs into a `SchemaCatalog`.

    A malformed fragment (no namespace, or a field of the wrong shape) is
    reported as an error and excluded; the remaining fragments still merge.

    Args:
        fragments: Fragments in load order, each paired with the file it came from.
        diagnostics: Run diagnostics collector.

    Returns:
        SchemaCatalog: The merged, read-only catalog.
    """
    builders: dict[str, _EntryBuilder] = {}

    for source_file, fragment in fragments:
        reason = _validate_fragment(fragment)
        if reason is not None:
            diagnostics.add_error(f"Schema fragment in {source_file} {reason}")
            continue

        namespace: str = fragment["namespace"]
        description: str = fragment.get("description", "")
        builder = builders.get(namespace)
        if builder is None:
            logger.debug("Creating catalog entry for %s (from %s)", namespace, source_file)
            builder = _EntryBuilder(
                name=namespace, description=description, source_file=source_file
            )
            builders[namespace] = builder
        else:
            logger.debug("Merging schema for %s (from %s)", namespace, source_file)
            if not builder.description and description:
                builder.description = description

        builder.types.extend(fragment.get("types", []))
        builder.functions.extend(fragment.get("functions", []))
        builder.events.extend(fragment.get("events", []))
        builder.permissions.extend(fragment.get("permissions", []))
        for prop_name, prop in fragment.get("properties", {}).items():
            if prop_name in builder.properties:
                diagnostics.add_warning(
                    f"Property '{prop_name}' redefined in {source_file}; later definition wins",
                    namespace=namespace,
                )
            builder.properties[prop_name] = prop

    return SchemaCatalog({name: builder.build() for name, builder in builders.items()})

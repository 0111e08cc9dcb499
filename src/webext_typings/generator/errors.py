# topmark:header:start
#
#   project      : webext-typings
#   file         : errors.py
#   file_relpath : src/webext_typings/generator/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the per-variant generators.

`GenerationError` and its subclasses are fatal for one declaration only: the
dispatcher turns them into an error diagnostic and carries on with the next
sibling. `ContextCorruptedError` signals an internal defect and is the only
exception allowed to escape the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from webext_typings.generator.context import GenerationContext


class GenerationError(Exception):
    """A single declaration cannot be produced."""


class InvalidContextError(GenerationError):
    """A generator was asked for a context it has no output shape for."""

    def __init__(self, variant: str, context: GenerationContext) -> None:
        super().__init__(f"Invalid type generator context for {variant}: {context.value}")
        self.variant = variant
        self.context = context


class ContextCorruptedError(RuntimeError):
    """The generation context bundle violates its own invariants."""

# topmark:header:start
#
#   project      : webext-typings
#   file         : overrides.py
#   file_relpath : src/webext_typings/generator/overrides.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Static overrides applied before classification.

An override matches a raw descriptor when every key of its pattern is present
in the descriptor with an equal value (the descriptor may carry more keys).
Equality is type-strict, so ``unsupported: 1`` does not match
``unsupported: true``.

A matching override either skips the descriptor (nothing is emitted, no
diagnostic) or rewrites it into a new descriptor that re-enters normal
classification. The input mapping is never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Final

from webext_typings.config.logging import get_logger

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.schema.catalog import Descriptor

logger: WebextLogger = get_logger(__name__)

SEND_RESPONSE_PARAMETER: Final[str] = "sendResponse"


class OverrideAction(Enum):
    """What a matching override does."""

    SKIP = "skip"
    REWRITE = "rewrite"


@dataclass(frozen=True)
class StaticOverride:
    """One entry of the override table.

    Attributes:
        pattern: Keys and values the descriptor must carry.
        action: Skip or rewrite.
        reason: Short explanation, used in trace logs.
        rewrite: Descriptor transformer (``REWRITE`` only).
    """

    pattern: Mapping[str, Any]
    action: OverrideAction
    reason: str
    rewrite: Callable[[Descriptor], Descriptor] | None = None

    def matches(self, raw: Descriptor) -> bool:
        """Return True if every pattern key is present in ``raw`` with an equal value."""
        for key, expected in self.pattern.items():
            if key not in raw:
                return False
            actual = raw[key]
            if type(actual) is not type(expected) or actual != expected:
                return False
        return True

    def apply(self, raw: Descriptor) -> Descriptor:
        """Return the rewritten descriptor."""
        if self.rewrite is None:
            raise ValueError(f"Override '{self.reason}' has no rewrite")
        return self.rewrite(raw)


def rewrite_send_response(raw: Descriptor) -> Descriptor:
    """Give the ``sendResponse`` listener parameter a single optional ``response: any``.

    The schemas declare ``sendResponse`` as a bare function; listeners call it
    with the response value.
    """
    parameters = raw.get("parameters")
    if not isinstance(parameters, list):
        return dict(raw)
    rewritten: list[Any] = []
    for param in parameters:
        if isinstance(param, Mapping) and param.get("name") == SEND_RESPONSE_PARAMETER:
            param = {
                **param,
                "parameters": [{"name": "response", "type": "any", "optional": True}],
            }
        rewritten.append(param)
    return {**raw, "parameters": rewritten}


STATIC_OVERRIDES: Final[tuple[StaticOverride, ...]] = (
    StaticOverride(
        pattern={
            "id": "ImageData",
            "isInstanceOf": "ImageData",
            "postprocess": "convertImageDataToURL",
            "type": "object",
        },
        action=OverrideAction.SKIP,
        reason="ImageData needs run-time post-processing",
    ),
    StaticOverride(
        pattern={"unsupported": True},
        action=OverrideAction.SKIP,
        reason="marked unsupported",
    ),
    StaticOverride(
        pattern={"name": "onMessageExternal", "type": "function"},
        action=OverrideAction.REWRITE,
        reason="sendResponse takes the response",
        rewrite=rewrite_send_response,
    ),
    StaticOverride(
        pattern={"name": "onMessage", "type": "function"},
        action=OverrideAction.REWRITE,
        reason="sendResponse takes the response",
        rewrite=rewrite_send_response,
    ),
)


def find_static_override(
    raw: Descriptor,
    overrides: tuple[StaticOverride, ...] = STATIC_OVERRIDES,
) -> StaticOverride | None:
    """Return the first override matching ``raw``, if any."""
    for override in overrides:
        if override.matches(raw):
            logger.trace("Static override matched (%s): %r", override.reason, override.pattern)
            return override
    return None

# topmark:header:start
#
#   project      : webext-typings
#   file         : docs.py
#   file_relpath : src/webext_typings/generator/docs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSDoc text derived from schema descriptions.

Schema descriptions carry a small HTML subset plus ``$(ref:...)`` cross
references; they are rewritten to their JSDoc / Markdown spelling.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from webext_typings.declarations.nodes import JSDoc

if TYPE_CHECKING:
    from webext_typings.generator.descriptors import Traits

_DESCRIPTION_REWRITES: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"</?var>"), "`"),
    (re.compile(r"</?em>"), "_"),
    (re.compile(r"</?code>"), "`"),
    (re.compile(r"\$\(ref:([a-zA-Z.0-9]+)\)"), r"{@link \1}"),
    (
        re.compile(r"<a href=['\"]?(https://[a-zA-Z0-9./\-_#]+)['\"]?[^>]*>([^<]*)</a>"),
        r"{@link \1|\2}",
    ),
)


def sanitize_description(description: str) -> str:
    """Rewrite schema markup in ``description`` to JSDoc-friendly text.

    Example:
        ``"Use <code>tabs.query</code>, see $(ref:tabs.Tab)"`` becomes
        ``"Use `tabs.query`, see {@link tabs.Tab}"``.
    """
    for pattern, replacement in _DESCRIPTION_REWRITES:
        description = pattern.sub(replacement, description)
    return description.strip()


def jsdoc_for(traits: Traits) -> JSDoc | None:
    """Return the JSDoc for a descriptor's traits, or None when there is nothing to say."""
    description = sanitize_description(traits.description) if traits.description else None
    doc = JSDoc(description=description or None, deprecated=traits.deprecated)
    return None if doc.is_empty else doc


def jsdoc_text(description: object) -> JSDoc | None:
    """Return a description-only JSDoc (enum choices, namespaces)."""
    if not isinstance(description, str):
        return None
    text = sanitize_description(description)
    return JSDoc(description=text) if text else None

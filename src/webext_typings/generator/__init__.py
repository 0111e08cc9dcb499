# topmark:header:start
#
#   project      : webext-typings
#   file         : __init__.py
#   file_relpath : src/webext_typings/generator/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Schema-to-declaration mapping engine.

Leaves first: `predicates` (structural tests over raw descriptors),
`descriptors` (closed sum type and classification order), the per-variant
generators, `dispatch` (static overrides, routing, failure containment),
`overloads` (infix-optional parameter expansion), and `namespaces` (per
namespace assembly plus the bootstrap declarations).
"""

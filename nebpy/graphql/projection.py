"""
Field projection: from a result shape to a GraphQL selection set.

The declared paths of a shape are flattened into dotted strings, nested
shapes contributing their own paths under the parent key, and then folded
into GraphQL syntax:

    ["b.c", "a", "b.d"]  ->  ["b{c,d}", "a"]
"""

from __future__ import annotations

from functools import lru_cache

from nebpy.graphql.paths import MemberKind, field_paths, is_model, member_kind

MAX_DEPTH = 10


def query_paths(shape: type, depth: int = 0) -> list[str]:
    """Flatten the declared paths of ``shape`` (and nested shapes) to dotted strings."""
    if depth > MAX_DEPTH:
        raise ValueError(f"Shape '{shape.__name__}' nests deeper than {MAX_DEPTH} levels")

    paths: list[str] = []
    for declared in field_paths(shape):
        clean = declared.path.clean
        kind, inner = member_kind(declared.annotation)

        # arrays of objects are unfolded by the server, so they expand
        # exactly like a single nested object
        if kind is MemberKind.OBJECT or (kind is MemberKind.ARRAY and is_model(inner)):
            for child in query_paths(inner, depth + 1):
                paths.append(f"{clean}.{child}")
            continue

        paths.append(clean)
    return paths


def graphql_fields(paths: list[str] | tuple[str, ...]) -> list[str]:
    """Group dotted paths by their first segment and render GraphQL fields."""
    grouped: dict[str, list[str]] = {}

    for entry in paths:
        key, _, rest = entry.strip(".").partition(".")
        if not key:
            continue
        children = grouped.setdefault(key, [])
        if rest and rest not in children:
            children.append(rest)

    fields = []
    for key, children in grouped.items():
        if not children:
            fields.append(key)
            continue
        fields.append(f"{key}{{{','.join(graphql_fields(children))}}}")
    return fields


@lru_cache(maxsize=None)
def _projected(shape: type) -> tuple[str, ...]:
    return tuple(graphql_fields(query_paths(shape)))


def project_fields(shape: type) -> list[str]:
    """Return the GraphQL selection set for ``shape``; empty for scalar shapes."""
    return list(_projected(shape))

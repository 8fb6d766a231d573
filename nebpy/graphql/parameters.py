"""
GraphQL argument rendering.

Resource wrappers collect their arguments in a GraphQLParameters bag, which
renders them as GraphQL input literals:

    params = GraphQLParameters()
    params.add("uuid", volume_uuid)
    params.add("filter", volume_filter, optional=True)
    str(params)  # 'uuid:"9b6f...",filter:{name:{equals:"vol1"}}'

Values that render empty (None, input objects with no members set) are left
out of the argument list entirely.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import SecretStr

from nebpy.errors import NebError
from nebpy.graphql.paths import field_paths, is_model

MAX_RECURSION_DEPTH = 10


class GraphQLParameters(dict[str, Any]):
    """Named arguments of a GraphQL operation."""

    def add(self, key: str, value: Any, optional: bool = False) -> None:
        """Add an argument; optional arguments that are None are suppressed."""
        if optional and value is None:
            return
        self[key] = value

    def __str__(self) -> str:
        rendered = []
        for key, value in self.items():
            formatted = format_value(value)
            if not formatted:
                continue
            rendered.append(f"{key}:{formatted}")
        return ",".join(rendered)


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    text = value.astimezone(UTC).isoformat(timespec="milliseconds")
    return json.dumps(text.replace("+00:00", "Z"))


def format_value(value: Any, depth: int = 0) -> str:
    """
    Render a Python value as a GraphQL input literal.

    Returns an empty string for values that should be omitted.
    """
    if value is None or depth > MAX_RECURSION_DEPTH:
        return ""

    # enums are GraphQL enum literals, checked before str for str-enums
    if isinstance(value, Enum):
        return str(value.value)

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)

    if isinstance(value, SecretStr):
        return json.dumps(value.get_secret_value(), ensure_ascii=False)

    if isinstance(value, UUID):
        return f'"{value}"'

    if isinstance(value, datetime):
        return _format_datetime(value)

    if isinstance(value, date):
        return f'"{value.isoformat()}"'

    if isinstance(value, (int, float)):
        return str(value)

    if isinstance(value, (list, tuple, set, frozenset)):
        items = [format_value(item, depth + 1) for item in value]
        return f"[{','.join(item for item in items if item)}]"

    if isinstance(value, GraphQLParameters):
        return f"{{{value}}}"

    if isinstance(value, Mapping):
        return format_value(GraphQLParameters(value), depth)

    if is_model(type(value)):
        rendered = []
        for declared in field_paths(type(value)):
            formatted = format_value(getattr(value, declared.name), depth + 1)
            if not formatted:
                continue
            rendered.append(f"{declared.path.base_name}:{formatted}")

        # an input object with nothing set is treated as absent
        if not rendered:
            return ""
        return f"{{{','.join(rendered)}}}"

    raise NebError(f"unsupported object type supplied: {type(value).__name__}")

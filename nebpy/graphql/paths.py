"""
Field path declarations and resolution.

Every member of a result shape that should be requested from UCAPI carries
a FieldPath in its ``Annotated`` metadata:

    class Lun(UcapiModel):
        guid: Annotated[UUID | None, FieldPath("$.uuid", required=True)] = None
        host_guid: Annotated[UUID | None, FieldPath("$.host.uuid")] = None

The path syntax is a small JSONPath subset: ``$.`` followed by ``.``
separated keys, where each key may be followed by ``[*]`` (all elements)
or ``[n]`` (one element). Members without a FieldPath are local-only.
"""

from __future__ import annotations

import re
import types
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel

_UNSUPPORTED_CHARS = re.compile(r"[^a-zA-Z.0-9]+")
_SEGMENT = re.compile(r"^([^\[\]]+)((?:\[[^\]]*\])*)$")
_SELECTOR = re.compile(r"\[([^\]]*)\]")


@dataclass(frozen=True, slots=True)
class FieldPath:
    """Binds a model member to a location in the UCAPI response."""

    path: str
    required: bool = False

    def __post_init__(self):
        if not self.path.startswith("$."):
            raise ValueError(f"Invalid JSONPath '{self.path}': must start with '$.'")

    @property
    def base_name(self) -> str:
        """First key of the path, used as the GraphQL input field name."""
        return base_name(self.path)

    @property
    def clean(self) -> str:
        """The path with JSONPath syntax removed, e.g. ``hosts.uuid``."""
        return clean_path(self.path)

    @property
    def has_wildcard(self) -> bool:
        return "[*]" in self.path


@dataclass(frozen=True, slots=True)
class DeclaredField:
    """One row of a shape's declaration table."""

    name: str
    path: FieldPath
    annotation: Any


class MemberKind(str, Enum):
    SCALAR = "scalar"
    OBJECT = "object"
    ARRAY = "array"


# =============================================================================
# Declarations
# =============================================================================


@lru_cache(maxsize=None)
def field_paths(shape: type) -> tuple[DeclaredField, ...]:
    """
    Return the declaration table of a shape.

    Built once per class from the pydantic field metadata; shapes that are
    not models (str, bool, ...) have no declarations.
    """
    if not is_model(shape):
        return ()

    declared = []
    for name, info in shape.model_fields.items():
        for meta in info.metadata:
            if isinstance(meta, FieldPath):
                declared.append(DeclaredField(name, meta, info.annotation))
                break
    return tuple(declared)


def is_model(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def unwrap_optional(annotation: Any) -> Any:
    """Strip ``None`` from ``X | None`` and ``Optional[X]``."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def member_kind(annotation: Any) -> tuple[MemberKind, Any]:
    """
    Classify a member annotation.

    Returns the kind and the type that drives conversion: the model class for
    objects, the element type for arrays and the annotation for scalars.
    """
    inner = unwrap_optional(annotation)
    if get_origin(inner) in (list, tuple):
        args = get_args(inner)
        element = unwrap_optional(args[0]) if args else Any
        return MemberKind.ARRAY, element
    if is_model(inner):
        return MemberKind.OBJECT, inner
    return MemberKind.SCALAR, annotation


# =============================================================================
# Resolution
# =============================================================================


@lru_cache(maxsize=1024)
def segments(path: str) -> tuple[tuple[str, tuple[str, ...]], ...]:
    """Split a path into ``(key, selectors)`` pairs."""
    body = path[2:] if path.startswith("$.") else path.lstrip("$.")
    parsed = []
    for part in body.split("."):
        if not part:
            continue
        match = _SEGMENT.match(part)
        if not match:
            raise ValueError(f"Invalid JSONPath segment '{part}' in '{path}'")
        key, selectors = match.groups()
        parsed.append((key, tuple(_SELECTOR.findall(selectors))))
    if not parsed:
        raise ValueError(f"Empty JSONPath '{path}'")
    return tuple(parsed)


def resolve(node: Any, path: str) -> list[Any]:
    """
    Return every value the path matches in ``node``.

    A key that is present with a JSON ``null`` value is a match (``None``);
    a key that is absent, or a step through a non-object, is not.
    """
    matches = [node]
    for key, selectors in segments(path):
        matches = [item[key] for item in matches if isinstance(item, dict) and key in item]
        for selector in selectors:
            expanded = []
            for item in matches:
                if not isinstance(item, list):
                    continue
                if selector == "*":
                    expanded.extend(item)
                    continue
                index = int(selector)
                if -len(item) <= index < len(item):
                    expanded.append(item[index])
            matches = expanded
    return matches


def with_wildcard(path: FieldPath) -> str:
    """The path with ``[*]`` appended so that arrays are unfolded."""
    return path.path if path.has_wildcard else f"{path.path}[*]"


def clean_path(path: str) -> str:
    """Strip JSONPath syntax from ``path``, e.g. ``$.hosts[*].uuid`` -> ``hosts.uuid``."""
    return _UNSUPPORTED_CHARS.sub("", path).strip(".")


def base_name(path: str) -> str:
    """The first key of ``path``."""
    return segments(path)[0][0]

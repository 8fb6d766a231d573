"""
Result materialization: from JSON nodes to typed shapes.

The materializer walks the declaration table of a shape and reads every
declared path from the response node:

- scalars are converted with a pydantic TypeAdapter for the member type
  (ISO strings become datetimes, strings become UUIDs and enums)
- nested shapes are materialized recursively
- arrays are unfolded with ``[*]`` and converted element by element

Conversion problems are recovered locally: a field that cannot be
converted keeps its zero value and an array element that cannot be
converted becomes None, so list responses stay as complete as possible.
A missing required field is a schema mismatch and always raises.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter

from nebpy.errors import MissingFieldError
from nebpy.graphql.paths import (
    DeclaredField,
    MemberKind,
    field_paths,
    is_model,
    member_kind,
    resolve,
    with_wildcard,
)
from nebpy.log import get_logger

T = TypeVar("T")

# errors that mean "this value does not fit the declared type";
# pydantic's ValidationError is a ValueError
CONVERSION_ERRORS = (ValueError, TypeError, AttributeError)


@lru_cache(maxsize=None)
def _adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def type_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", None) or str(annotation)


class Materializer:
    """Converts UCAPI JSON nodes into result shapes."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = get_logger(logger)

    def convert(self, value: Any, annotation: Any) -> Any:
        """Convert a scalar JSON value to ``annotation``."""
        if value is None:
            return None
        return _adapter(annotation).validate_python(value)

    def materialize(self, node: Any, shape: type[T]) -> T | None:
        """Build one instance of ``shape`` from a JSON object."""
        if node is None:
            return None
        if not isinstance(node, dict):
            raise TypeError(
                f"Expected a JSON object for '{shape.__name__}', got {type(node).__name__}"
            )

        values: dict[str, Any] = {}
        for declared in field_paths(shape):
            try:
                found, value = self._read(node, declared, shape)
            except MissingFieldError:
                raise
            except CONVERSION_ERRORS as e:
                self._logger.warning(
                    f"[ucapi] Error converting property '{declared.name}' of type "
                    f"'{type_name(declared.annotation)}': {e}"
                )
                continue

            if found:
                values[declared.name] = value

        return shape.model_construct(**values)

    def materialize_many(self, node: Any, shape: type[T]) -> list[T | None]:
        """
        Build a list of ``shape`` from a JSON array.

        Elements that fail to convert are logged and kept as None so that the
        list keeps the length of the response.
        """
        if node is None:
            return []
        if not isinstance(node, list):
            node = [node]
        return self._collect(node, shape, shape.__name__)

    # =========================================================================
    # Internals
    # =========================================================================

    def _read(self, node: dict, declared: DeclaredField, shape: type) -> tuple[bool, Any]:
        """Return ``(found, value)`` for one declared field."""
        path = declared.path
        kind, inner = member_kind(declared.annotation)

        if kind is MemberKind.ARRAY:
            if path.base_name not in node:
                if path.required:
                    raise MissingFieldError(declared.name, shape.__name__, path.path)
                return False, None
            matches = resolve(node, with_wildcard(path))
            return True, self._collect(matches, inner, declared.name)

        matches = resolve(node, path.path)
        if not matches:
            if path.required:
                raise MissingFieldError(declared.name, shape.__name__, path.path)
            return False, None

        if kind is MemberKind.OBJECT:
            return True, self.materialize(matches[0], inner)
        return True, self.convert(matches[0], declared.annotation)

    def _collect(self, elements: list[Any], element_type: Any, label: str) -> list[Any]:
        result = []
        for index, element in enumerate(elements):
            try:
                if is_model(element_type):
                    result.append(self.materialize(element, element_type))
                else:
                    result.append(self.convert(element, element_type))
            except MissingFieldError:
                raise
            except CONVERSION_ERRORS as e:
                self._logger.warning(
                    f"[ucapi] Error converting element {index} of '{label}' to "
                    f"'{type_name(element_type)}': {e}"
                )
                result.append(None)
        return result

"""
Filter inputs shared by list queries.

Filters nest through ``and`` / ``or``:

    GuidFilter(equals=volume_uuid)
    StringFilter(begins_with="db-", or_=StringFilter(equals="log"))
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from pydantic import Field

from nebpy.types.base import FieldPath, UcapiModel


class GuidFilter(UcapiModel):
    equals: Annotated[UUID | None, FieldPath("$.equals")] = None
    not_equals: Annotated[UUID | None, FieldPath("$.notEquals")] = None
    in_: Annotated[list[UUID] | None, Field(alias="in"), FieldPath("$.in")] = None
    and_: Annotated[GuidFilter | None, Field(alias="and"), FieldPath("$.and")] = None
    or_: Annotated[GuidFilter | None, Field(alias="or"), FieldPath("$.or")] = None


class IntFilter(UcapiModel):
    equals: Annotated[int | None, FieldPath("$.equals")] = None
    not_equals: Annotated[int | None, FieldPath("$.notEquals")] = None
    greater_than: Annotated[int | None, FieldPath("$.greaterThan")] = None
    greater_than_equals: Annotated[int | None, FieldPath("$.greaterThanEquals")] = None
    less_than: Annotated[int | None, FieldPath("$.lessThan")] = None
    less_than_equals: Annotated[int | None, FieldPath("$.lessThanEquals")] = None
    in_: Annotated[list[int] | None, Field(alias="in"), FieldPath("$.in")] = None
    and_: Annotated[IntFilter | None, Field(alias="and"), FieldPath("$.and")] = None
    or_: Annotated[IntFilter | None, Field(alias="or"), FieldPath("$.or")] = None


class StringFilter(UcapiModel):
    equals: Annotated[str | None, FieldPath("$.equals")] = None
    not_equals: Annotated[str | None, FieldPath("$.notEquals")] = None
    begins_with: Annotated[str | None, FieldPath("$.beginsWith")] = None
    ends_with: Annotated[str | None, FieldPath("$.endsWith")] = None
    contains: Annotated[str | None, FieldPath("$.contains")] = None
    not_contains: Annotated[str | None, FieldPath("$.notContains")] = None
    regex: Annotated[str | None, FieldPath("$.regex")] = None
    in_: Annotated[list[str] | None, Field(alias="in"), FieldPath("$.in")] = None
    and_: Annotated[StringFilter | None, Field(alias="and"), FieldPath("$.and")] = None
    or_: Annotated[StringFilter | None, Field(alias="or"), FieldPath("$.or")] = None

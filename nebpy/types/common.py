"""
Shared UCAPI types: paging and sorting.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import Field

from nebpy.types.base import FieldPath, UcapiModel


class SortDirection(str, Enum):
    """Sort direction for list queries."""

    ASCENDING = "Ascending"
    DESCENDING = "Descending"


class PageInput(UcapiModel):
    """Paging for list queries. Pages start at 1."""

    page: Annotated[int, Field(ge=1), FieldPath("$.page", required=True)] = 1
    count: Annotated[int, Field(ge=1), FieldPath("$.count")] = 100

    @classmethod
    def first(cls) -> PageInput:
        """The first page with the default page size."""
        return cls()

"""
Base model for UCAPI result shapes and input objects.

Members are bound to the UCAPI schema with FieldPath metadata. Every member
of a result shape has a default so that it can be built in its zero state.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from nebpy.graphql.paths import FieldPath

__all__ = ["FieldPath", "UcapiModel"]


class UcapiModel(BaseModel):
    """Base class for all UCAPI shapes."""

    model_config = ConfigDict(populate_by_name=True)

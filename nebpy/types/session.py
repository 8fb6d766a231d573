"""
Login session types.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from nebpy.types.base import FieldPath, UcapiModel


class LoginResults(UcapiModel):
    success: Annotated[bool | None, FieldPath("$.success", required=True)] = None
    message: Annotated[str | None, FieldPath("$.message")] = None
    expiration: Annotated[str | None, FieldPath("$.expiration")] = None
    organization: Annotated[str | None, FieldPath("$.organizationName")] = None
    eula_accepted: Annotated[bool | None, FieldPath("$.eulaAccepted")] = None
    user_uuid: Annotated[UUID | None, FieldPath("$.userUID")] = None


class LoginState(UcapiModel):
    username: Annotated[str | None, FieldPath("$.username", required=True)] = None
    organization: Annotated[str | None, FieldPath("$.organization")] = None
    expiration: Annotated[str | None, FieldPath("$.expiration")] = None
    user_uuid: Annotated[UUID | None, FieldPath("$.userUID")] = None

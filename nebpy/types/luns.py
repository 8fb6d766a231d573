"""
LUN types.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from pydantic import Field

from nebpy.types.base import FieldPath, UcapiModel
from nebpy.types.common import SortDirection
from nebpy.types.filters import GuidFilter, IntFilter, StringFilter


class Lun(UcapiModel):
    guid: Annotated[UUID | None, FieldPath("$.uuid", required=True)] = None
    lun_id: Annotated[int | None, FieldPath("$.lunID", required=True)] = None
    host_guid: Annotated[UUID | None, FieldPath("$.host.uuid")] = None
    spu_serial: Annotated[str | None, FieldPath("$.spu.serial")] = None
    volume_guid: Annotated[UUID | None, FieldPath("$.volume.uuid")] = None


class LunList(UcapiModel):
    items: Annotated[list[Lun | None], FieldPath("$.items", required=True)] = []
    filtered_count: Annotated[int, FieldPath("$.filteredCount")] = 0
    total_count: Annotated[int, FieldPath("$.totalCount")] = 0
    more: Annotated[bool, FieldPath("$.more")] = False


class LunFilter(UcapiModel):
    lun_guid: Annotated[GuidFilter | None, FieldPath("$.uuid")] = None
    lun_id: Annotated[IntFilter | None, FieldPath("$.lunID")] = None
    host_guid: Annotated[GuidFilter | None, FieldPath("$.hostUUID")] = None
    npod_guid: Annotated[GuidFilter | None, FieldPath("$.nPodUUID")] = None
    volume_guid: Annotated[GuidFilter | None, FieldPath("$.volumeUUID")] = None
    spu_serial: Annotated[StringFilter | None, FieldPath("$.spuSerial")] = None
    and_: Annotated[LunFilter | None, Field(alias="and"), FieldPath("$.and")] = None
    or_: Annotated[LunFilter | None, Field(alias="or"), FieldPath("$.or")] = None


class LunSort(UcapiModel):
    lun_id: Annotated[SortDirection | None, FieldPath("$.lunID")] = None


class CreateLunInput(UcapiModel):
    volume_guid: Annotated[UUID, FieldPath("$.volumeUUID", required=True)]
    lun_id: Annotated[int | None, FieldPath("$.lunID")] = None
    host_guids: Annotated[list[UUID] | None, FieldPath("$.hostUUIDs")] = None
    spu_serials: Annotated[list[str] | None, FieldPath("$.spuSerials")] = None
    local: Annotated[bool | None, FieldPath("$.local")] = None

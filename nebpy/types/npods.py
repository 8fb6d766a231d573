"""
nPod types.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field

from nebpy.types.base import FieldPath, UcapiModel
from nebpy.types.common import SortDirection
from nebpy.types.filters import GuidFilter, StringFilter


class UpdateHistory(UcapiModel):
    package_name: Annotated[str | None, FieldPath("$.packageName", required=True)] = None
    update_uuid: Annotated[UUID | None, FieldPath("$.updateID")] = None
    start: Annotated[datetime | None, FieldPath("$.start")] = None
    finish: Annotated[datetime | None, FieldPath("$.finish")] = None
    success: Annotated[bool | None, FieldPath("$.success")] = None


class NPod(UcapiModel):
    """A cluster of hosts with their SPUs."""

    guid: Annotated[UUID | None, FieldPath("$.uuid", required=True)] = None
    name: Annotated[str | None, FieldPath("$.name", required=True)] = None
    note: Annotated[str | None, FieldPath("$.note")] = None
    npod_group_guid: Annotated[UUID | None, FieldPath("$.nPodGroup.uuid")] = None
    host_count: Annotated[int | None, FieldPath("$.hostCount")] = None
    host_guids: Annotated[list[UUID | None], FieldPath("$.hosts[*].uuid")] = []
    spu_count: Annotated[int | None, FieldPath("$.spuCount")] = None
    spu_serials: Annotated[list[str | None], FieldPath("$.spus[*].serial")] = []
    volume_count: Annotated[int | None, FieldPath("$.volumeCount")] = None
    volume_guids: Annotated[list[UUID | None], FieldPath("$.volumes[*].uuid")] = []
    snapshot_guids: Annotated[list[UUID | None], FieldPath("$.snapshots[*].uuid")] = []
    update_history: Annotated[list[UpdateHistory | None], FieldPath("$.updateHistory")] = []


class NPodList(UcapiModel):
    items: Annotated[list[NPod | None], FieldPath("$.items", required=True)] = []
    filtered_count: Annotated[int, FieldPath("$.filteredCount")] = 0
    total_count: Annotated[int, FieldPath("$.totalCount")] = 0
    more: Annotated[bool, FieldPath("$.more")] = False


class NPodFilter(UcapiModel):
    npod_guid: Annotated[GuidFilter | None, FieldPath("$.uuid")] = None
    name: Annotated[StringFilter | None, FieldPath("$.name")] = None
    and_: Annotated[NPodFilter | None, Field(alias="and"), FieldPath("$.and")] = None
    or_: Annotated[NPodFilter | None, Field(alias="or"), FieldPath("$.or")] = None


class NPodSort(UcapiModel):
    name: Annotated[SortDirection | None, FieldPath("$.name")] = None


class NPodSpuInput(UcapiModel):
    """An SPU to include in a new nPod."""

    serial: Annotated[str, FieldPath("$.SPUSerial", required=True)]
    name: Annotated[str, FieldPath("$.SPUName", required=True)]


class CreateNPodInput(UcapiModel):
    name: Annotated[str, FieldPath("$.nPodName", required=True)]
    npod_group_guid: Annotated[UUID, FieldPath("$.nPodGroupUUID", required=True)]
    npod_template_guid: Annotated[UUID, FieldPath("$.nPodTemplateUUID", required=True)]
    spus: Annotated[list[NPodSpuInput], FieldPath("$.spus", required=True)]
    note: Annotated[str | None, FieldPath("$.note")] = None
    timezone: Annotated[str | None, FieldPath("$.timeZone")] = None

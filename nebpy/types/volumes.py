"""
Volume types.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated
from uuid import UUID

from pydantic import Field

from nebpy.types.base import FieldPath, UcapiModel
from nebpy.types.common import SortDirection
from nebpy.types.filters import GuidFilter, IntFilter, StringFilter


class VolumeSyncState(str, Enum):
    NOT_MIRRORED = "NotMirrored"
    IN_SYNC = "InSync"
    SYNCING = "Syncing"
    UNSYNCED = "Unsynced"
    UNKNOWN = "Unknown"


class Volume(UcapiModel):
    guid: Annotated[UUID | None, FieldPath("$.uuid", required=True)] = None
    name: Annotated[str | None, FieldPath("$.name", required=True)] = None
    wwn: Annotated[str | None, FieldPath("$.wwn")] = None
    size_bytes: Annotated[int | None, FieldPath("$.sizeBytes", required=True)] = None
    boot: Annotated[bool | None, FieldPath("$.boot")] = None
    read_only_snapshot: Annotated[bool | None, FieldPath("$.readOnlySnapshot")] = None
    creation_time: Annotated[datetime | None, FieldPath("$.creationTime")] = None
    expiration_time: Annotated[datetime | None, FieldPath("$.expirationTime")] = None
    npod_guid: Annotated[UUID | None, FieldPath("$.nPod.uuid")] = None
    natural_owner_spu_serial: Annotated[str | None, FieldPath("$.naturalOwnerSPU.serial")] = None
    natural_backup_spu_serial: Annotated[str | None, FieldPath("$.naturalBackupSPU.serial")] = None
    current_owner_host_guid: Annotated[UUID | None, FieldPath("$.currentOwnerHost.uuid")] = None
    accessible_by_host_guids: Annotated[
        list[UUID | None], FieldPath("$.accessibleByHosts[*].uuid")
    ] = []
    lun_guids: Annotated[list[UUID | None], FieldPath("$.luns[*].uuid")] = []
    snapshot_guids: Annotated[list[UUID | None], FieldPath("$.snapshots[*].uuid")] = []
    snapshot_parent_guid: Annotated[UUID | None, FieldPath("$.snapshotParent.uuid")] = None
    sync_state: Annotated[VolumeSyncState | None, FieldPath("$.syncState")] = None


class VolumeList(UcapiModel):
    items: Annotated[list[Volume | None], FieldPath("$.items", required=True)] = []
    filtered_count: Annotated[int, FieldPath("$.filteredCount")] = 0
    total_count: Annotated[int, FieldPath("$.totalCount")] = 0
    more: Annotated[bool, FieldPath("$.more")] = False


class VolumeFilter(UcapiModel):
    guid: Annotated[GuidFilter | None, FieldPath("$.uuid")] = None
    name: Annotated[StringFilter | None, FieldPath("$.name")] = None
    wwn: Annotated[StringFilter | None, FieldPath("$.wwn")] = None
    npod_guid: Annotated[GuidFilter | None, FieldPath("$.nPodUUID")] = None
    parent_guid: Annotated[GuidFilter | None, FieldPath("$.parentUUID")] = None
    size_bytes: Annotated[IntFilter | None, FieldPath("$.sizeBytes")] = None
    base_only: Annotated[bool | None, FieldPath("$.baseOnly")] = None
    snapshots_only: Annotated[bool | None, FieldPath("$.snapshotsOnly")] = None
    and_: Annotated[VolumeFilter | None, Field(alias="and"), FieldPath("$.and")] = None
    or_: Annotated[VolumeFilter | None, Field(alias="or"), FieldPath("$.or")] = None


class VolumeSort(UcapiModel):
    name: Annotated[SortDirection | None, FieldPath("$.name")] = None
    size_bytes: Annotated[SortDirection | None, FieldPath("$.sizeBytes")] = None
    creation_time: Annotated[SortDirection | None, FieldPath("$.creationTime")] = None


class CreateVolumeInput(UcapiModel):
    name: Annotated[str, FieldPath("$.name", required=True)]
    size_bytes: Annotated[int, Field(gt=0), FieldPath("$.sizeBytes", required=True)]
    npod_guid: Annotated[UUID, FieldPath("$.nPodUUID", required=True)]
    mirrored: Annotated[bool | None, FieldPath("$.mirrored")] = None
    owner_spu_serial: Annotated[str | None, FieldPath("$.ownerSPUSerial")] = None
    backup_spu_serial: Annotated[str | None, FieldPath("$.backupSPUSerial")] = None
    force: Annotated[bool | None, FieldPath("$.force")] = None

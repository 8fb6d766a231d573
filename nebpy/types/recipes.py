"""
Recipes: asynchronous server-side jobs started by hardware mutations.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from nebpy.types.base import FieldPath, UcapiModel


class RecipeState(str, Enum):
    """Execution state of a recipe."""

    QUEUED = "Queued"
    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"
    TIMEOUT = "Timeout"
    CANCELLING = "Cancelling"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES

    @property
    def is_failure(self) -> bool:
        return self in FAILURE_STATES


FAILURE_STATES = frozenset({RecipeState.FAILED, RecipeState.TIMEOUT, RecipeState.CANCELLED})
TERMINAL_STATES = FAILURE_STATES | {RecipeState.COMPLETED}


class RecipeType(str, Enum):
    UNKNOWN = "Unknown"
    CLAIM = "Claim"
    CREATE_VOLUME = "CreateVolume"
    CREATE_POD = "CreatePod"
    VALIDATE_POD = "ValidatePod"
    CONFIRM_POD = "ConfirmPod"
    CREATE_SNAPSHOT = "CreateSnapshot"
    CREATE_SCHEDULED_SNAPSHOT = "CreateScheduledSnapshot"
    UPDATE = "Update"
    ABORT_UPDATE = "AbortUpdate"
    REMOVE_SNAPSHOT_SCHEDULE = "RemoveSnapshotSchedule"
    SEND_SPU_DEBUG_INFO = "SendSPUDebugInfo"
    RUN_TEST = "RunTest"
    WIPE_POD = "WipePod"
    DELETE_VOLUME = "DeleteVolume"
    SET_VSPHERE_CREDENTIALS = "SetVSphereCredentials"
    RESET_ORGANIZATION = "ResetOrganization"
    PING_SPU = "PingSPU"
    CREATE_LUN = "CreateLUN"
    DELETE_LUN = "DeleteLUN"
    SET_PROXY = "SetProxy"
    SET_NTP = "SetNTP"
    UPDATE_PHYSICAL_DRIVE = "UpdatePhysicalDrive"
    SET_TIMEZONE = "SetTimezone"
    CLONE_VOLUME = "CloneVolume"
    LOCATE_PHYSICAL_DRIVE = "LocatePhysicalDrive"
    REPLACE_SPU = "ReplaceSPU"
    SECURE_ERASE_SPU = "SecureEraseSPU"


class NPodRecipeFilter(UcapiModel):
    """Selects recipes of one nPod."""

    npod_uuid: Annotated[UUID | None, FieldPath("$.nPodUUID")] = None
    recipe_uuid: Annotated[UUID | None, FieldPath("$.recipeUUID")] = None
    completed: Annotated[bool | None, FieldPath("$.completed")] = None


class RecipeRecord(UcapiModel):
    """Status record of a recipe."""

    recipe_uuid: Annotated[UUID | None, FieldPath("$.recipeUUID", required=True)] = None
    npod_uuid: Annotated[UUID | None, FieldPath("$.nPodUUID", required=True)] = None
    cancel_uuid: Annotated[UUID | None, FieldPath("$.cancelRecipeUUID")] = None
    coordinator_spu_serial: Annotated[str | None, FieldPath("$.coordinatorSPUSerial")] = None
    state: Annotated[RecipeState | None, FieldPath("$.state", required=True)] = None
    status: Annotated[str | None, FieldPath("$.status")] = None
    type: Annotated[RecipeType | None, FieldPath("$.type")] = None
    start: Annotated[datetime | None, FieldPath("$.start")] = None
    last_update: Annotated[datetime | None, FieldPath("$.lastUpdate")] = None


class RecipeRecordList(UcapiModel):
    items: Annotated[list[RecipeRecord | None], FieldPath("$.items", required=True)] = []
    cursor: Annotated[str | None, FieldPath("$.cursor")] = None


class RecipeRecordIdentifier(BaseModel):
    """The (nPod, recipe) pair a v2 token delivery asks the caller to wait on."""

    model_config = ConfigDict(frozen=True)

    npod_uuid: UUID
    recipe_uuid: UUID

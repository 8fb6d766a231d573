"""
UCAPI shapes: result types, filters and mutation inputs.
"""

from nebpy.types.base import FieldPath, UcapiModel
from nebpy.types.common import PageInput, SortDirection
from nebpy.types.filters import GuidFilter, IntFilter, StringFilter
from nebpy.types.issues import IssueInstance, Issues
from nebpy.types.luns import CreateLunInput, Lun, LunFilter, LunList, LunSort
from nebpy.types.npods import (
    CreateNPodInput,
    NPod,
    NPodFilter,
    NPodList,
    NPodSort,
    NPodSpuInput,
    UpdateHistory,
)
from nebpy.types.recipes import (
    NPodRecipeFilter,
    RecipeRecord,
    RecipeRecordIdentifier,
    RecipeRecordList,
    RecipeState,
    RecipeType,
)
from nebpy.types.session import LoginResults, LoginState
from nebpy.types.tokens import MustSendTargetDns, TokenResponse
from nebpy.types.volumes import (
    CreateVolumeInput,
    Volume,
    VolumeFilter,
    VolumeList,
    VolumeSort,
    VolumeSyncState,
)

__all__ = [
    "CreateLunInput",
    "CreateNPodInput",
    "CreateVolumeInput",
    "FieldPath",
    "GuidFilter",
    "IntFilter",
    "IssueInstance",
    "Issues",
    "LoginResults",
    "LoginState",
    "Lun",
    "LunFilter",
    "LunList",
    "LunSort",
    "MustSendTargetDns",
    "NPod",
    "NPodFilter",
    "NPodList",
    "NPodRecipeFilter",
    "NPodSort",
    "NPodSpuInput",
    "PageInput",
    "RecipeRecord",
    "RecipeRecordIdentifier",
    "RecipeRecordList",
    "RecipeState",
    "RecipeType",
    "SortDirection",
    "StringFilter",
    "TokenResponse",
    "UcapiModel",
    "UpdateHistory",
    "Volume",
    "VolumeFilter",
    "VolumeList",
    "VolumeSort",
    "VolumeSyncState",
]

"""
High-level UCAPI connection.

NebConnection wraps the execution engine with one method per UCAPI
operation:

    async with NebConnection(ConnectionConfig.from_env()) as conn:
        await conn.login("admin@example.com", SecretStr("..."))
        volumes = await conn.get_volumes(filter=VolumeFilter(name=StringFilter(equals="db")))
        for volume in volumes.items:
            print(volume.name, volume.size_bytes)
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from uuid import UUID

from pydantic import SecretStr

from nebpy.client import UcapiClient
from nebpy.errors import NebError, UnexpectedResultCountError
from nebpy.graphql import GraphQLParameters
from nebpy.recipes import NPOD_CREATE_INTERVAL, NPOD_CREATE_TIMEOUT
from nebpy.types import (
    CreateLunInput,
    CreateNPodInput,
    CreateVolumeInput,
    GuidFilter,
    Issues,
    LoginResults,
    LoginState,
    Lun,
    LunFilter,
    LunList,
    LunSort,
    NPod,
    NPodFilter,
    NPodList,
    NPodRecipeFilter,
    NPodSort,
    NPodSpuInput,
    PageInput,
    RecipeRecordIdentifier,
    RecipeRecordList,
    TokenResponse,
    Volume,
    VolumeFilter,
    VolumeList,
    VolumeSort,
)

VOLUME_CREATE_TIMEOUT = 120.0
VOLUME_CREATE_INTERVAL = 1.0


class NebConnection(UcapiClient):
    """Typed access to the nebulon ON API."""

    # =========================================================================
    # Session
    # =========================================================================

    async def login(self, username: str, password: str | SecretStr) -> LoginResults:
        """
        Log in to nebulon ON.

        The session cookie is kept in the connection and sent with every
        following request.
        """
        if not isinstance(password, SecretStr):
            password = SecretStr(password)

        parameters = GraphQLParameters()
        parameters.add("username", username)
        parameters.add("password", password)

        results = await self.run_mutation(LoginResults, "login", parameters)
        if results is not None and results.success:
            self.logger.info(f"[ucapi] Logged in as {username}")
        return results

    async def logout(self) -> bool:
        return bool(await self.run_mutation(bool, "logout"))

    async def get_session_state(self) -> LoginState:
        """The user and organization of the current session."""
        return await self.run_query(LoginState, "loginStatus")

    # =========================================================================
    # Recipes
    # =========================================================================

    async def get_npod_recipes(self, filter: NPodRecipeFilter) -> RecipeRecordList:
        parameters = GraphQLParameters()
        parameters.add("filter", filter)
        return await self.run_query(RecipeRecordList, "getNPodRecipes", parameters)

    # =========================================================================
    # nPods
    # =========================================================================

    async def get_npods(
        self,
        page: PageInput | None = None,
        filter: NPodFilter | None = None,
        sort: NPodSort | None = None,
    ) -> NPodList:
        """List nPods; the server returns the first 100 when no page is given."""
        return await self.run_query(NPodList, "getNPods", _list_parameters(page, filter, sort))

    async def get_new_npod_issues(self, spus: list[NPodSpuInput]) -> Issues:
        """Ask nebulon ON which problems it predicts for a new nPod."""
        parameters = GraphQLParameters()
        parameters.add("spuSerials", [spu.serial for spu in spus])
        return await self.run_query(Issues, "newPodIssues", parameters)

    async def create_npod(
        self,
        name: str,
        npod_group_guid: UUID,
        spus: list[NPodSpuInput],
        npod_template_guid: UUID,
        *,
        note: str | None = None,
        timezone: str | None = None,
        ignore_warnings: bool = False,
    ) -> NPod:
        """
        Create a new nPod and wait until it is ready.

        Args:
            name: Name of the new nPod
            npod_group_guid: nPod group to create the nPod in
            spus: SPUs that form the nPod
            npod_template_guid: Template for volume and LUN layout
            note: Optional note
            timezone: Time zone of the nPod, e.g. ``America/Los_Angeles``
            ignore_warnings: Proceed when validation only reported warnings

        Raises:
            ValidationIssues: If validation reported blocking issues
            TokenDeliveryFailure: If the SPUs could not be reached
            RecipeFailure: If the creation failed
            RecipeTimeout: If the creation did not finish in time
        """
        issues = await self.get_new_npod_issues(spus)
        issues.assert_no_issues(ignore_warnings)

        create_input = CreateNPodInput(
            name=name,
            npod_group_guid=npod_group_guid,
            npod_template_guid=npod_template_guid,
            spus=spus,
            note=note,
            timezone=timezone,
        )
        parameters = GraphQLParameters()
        parameters.add("input", create_input)

        token = await self.run_mutation(TokenResponse, "createNPod", parameters)
        identifier = await self._recipe_identifier(token)

        async def fetch() -> NPod:
            return await self._get_one_npod(identifier.npod_uuid)

        return await self.await_recipe(
            identifier.npod_uuid,
            identifier.recipe_uuid,
            timeout=NPOD_CREATE_TIMEOUT,
            interval=NPOD_CREATE_INTERVAL,
            fetch=fetch,
            description="nPod creation",
        )

    async def delete_npod(self, npod_guid: UUID, secure_erase: bool = False) -> bool:
        """Delete an nPod, optionally erasing all data on its SPUs."""
        parameters = GraphQLParameters()
        parameters.add("uid", npod_guid)
        parameters.add("secureErase", secure_erase, optional=True)

        token = await self.run_mutation(TokenResponse, "delPod", parameters)
        return await self.deliver_token(token)

    # =========================================================================
    # Updates
    # =========================================================================

    async def run_update_pre_check(self, npod_guid: UUID, package_name: str) -> Issues:
        """Check that an nPod is healthy enough to install ``package_name``."""
        parameters = GraphQLParameters()
        parameters.add("podUID", npod_guid)
        parameters.add("packageName", package_name)
        return await self.run_query(Issues, "updatePrecheck", parameters)

    async def update_npod_firmware(
        self,
        npod_guid: UUID,
        package_name: str,
        schedule_at: datetime | None = None,
        ignore_warnings: bool = False,
    ) -> bool:
        """
        Install a nebOS package on all SPUs of an nPod.

        Args:
            npod_guid: nPod to update
            package_name: Name of the update package
            schedule_at: Install at this time instead of immediately
            ignore_warnings: Proceed when the pre-check only reported warnings

        Raises:
            ValidationIssues: If the pre-check reported blocking issues
            TokenDeliveryFailure: If the SPUs could not be reached
        """
        issues = await self.run_update_pre_check(npod_guid, package_name)
        issues.assert_no_issues(ignore_warnings)

        parameters = GraphQLParameters()
        parameters.add("podUID", npod_guid)
        parameters.add("packageName", package_name)
        parameters.add("scheduled", schedule_at, optional=True)

        token = await self.run_mutation(TokenResponse, "updatePodFirmware", parameters)
        return await self.deliver_token(token)

    # =========================================================================
    # Volumes
    # =========================================================================

    async def get_volumes(
        self,
        page: PageInput | None = None,
        filter: VolumeFilter | None = None,
        sort: VolumeSort | None = None,
    ) -> VolumeList:
        return await self.run_query(VolumeList, "getVolumes", _list_parameters(page, filter, sort))

    async def create_volume(self, create_input: CreateVolumeInput) -> Volume:
        """Create a volume and wait until it is provisioned."""
        parameters = GraphQLParameters()
        parameters.add("input", create_input)

        token = await self.run_mutation(TokenResponse, "createVolumeV3", parameters)
        identifier = await self._recipe_identifier(token)

        async def fetch() -> Volume:
            volumes = await self.get_volumes(filter=VolumeFilter(guid=GuidFilter(equals=token.wait_on)))
            return _first(volumes.items, "getVolumes")

        return await self.await_recipe(
            identifier.npod_uuid,
            identifier.recipe_uuid,
            timeout=VOLUME_CREATE_TIMEOUT,
            interval=VOLUME_CREATE_INTERVAL,
            fetch=fetch,
            description="volume creation",
        )

    async def delete_volume(self, volume_guid: UUID) -> bool:
        parameters = GraphQLParameters()
        parameters.add("uuid", volume_guid)

        token = await self.run_mutation(TokenResponse, "deleteVolume", parameters)
        return await self.deliver_token(token)

    # =========================================================================
    # LUNs
    # =========================================================================

    async def get_luns(
        self,
        page: PageInput | None = None,
        filter: LunFilter | None = None,
        sort: LunSort | None = None,
    ) -> LunList:
        return await self.run_query(LunList, "getLUNs", _list_parameters(page, filter, sort))

    async def create_lun(self, create_input: CreateLunInput) -> Lun:
        """
        Export a volume to hosts.

        LUN creation has no recipe; after the token was accepted the new LUN
        is looked up once the SPUs had time to report it.
        """
        parameters = GraphQLParameters()
        parameters.add("input", create_input)

        token = await self.run_mutation(TokenResponse, "createLUN", parameters)
        await self.deliver_token(token)

        await asyncio.sleep(self.config.token_timeout)

        luns = await self.get_luns(filter=LunFilter(lun_guid=GuidFilter(equals=token.wait_on)))
        if luns.filtered_count != 1:
            raise UnexpectedResultCountError("getLUNs", luns.filtered_count)
        return _first(luns.items, "getLUNs")

    async def delete_lun(self, lun_guid: UUID) -> bool:
        parameters = GraphQLParameters()
        parameters.add("uuid", lun_guid)

        token = await self.run_mutation(TokenResponse, "deleteLUN", parameters)
        return await self.deliver_token(token)

    # =========================================================================
    # Internals
    # =========================================================================

    async def _recipe_identifier(self, token: TokenResponse) -> RecipeRecordIdentifier:
        identifier = await self.deliver_token_v2(token)
        if identifier is None:
            raise NebError("Token delivery did not return a recipe to wait on")
        return identifier

    async def _get_one_npod(self, npod_guid: UUID) -> NPod:
        npods = await self.get_npods(
            page=PageInput.first(),
            filter=NPodFilter(npod_guid=GuidFilter(equals=npod_guid)),
        )
        return _first(npods.items, "getNPods")


def _list_parameters(page, filter, sort) -> GraphQLParameters:
    parameters = GraphQLParameters()
    parameters.add("page", page, optional=True)
    parameters.add("filter", filter, optional=True)
    parameters.add("sort", sort, optional=True)
    return parameters


def _first(items: list, operation: str):
    found = [item for item in items or [] if item is not None]
    if not found:
        raise UnexpectedResultCountError(operation, 0)
    return found[0]

"""
Tests for NebConnection resource operations.

Each test answers UCAPI and the SPU token endpoints from one handler, so the
full chain (mutation, token delivery, recipe polling, lookup) is exercised.
"""

import json
from datetime import UTC, datetime
from uuid import UUID

import httpx
import pytest

from nebpy import connection as connection_module
from nebpy.errors import (
    NebError,
    RecipeFailure,
    TokenDeliveryFailure,
    UnexpectedResultCountError,
    ValidationIssues,
)
from nebpy.types import (
    CreateLunInput,
    CreateVolumeInput,
    IssueInstance,
    Issues,
    NPodRecipeFilter,
    NPodSpuInput,
)

RECIPE_UUID = UUID("3f0b2f43-33a6-4f2c-a1e2-77d1d0c0b6a5")
NPOD_UUID = UUID("0d7a5b3c-0a4b-4b7a-8a3b-59d1f2a4e8c1")
LUN_UUID = UUID("3f0b2f43-33a6-4f2c-a1e2-77d1d0c0b6a5")
GROUP_UUID = UUID("5e6f7a8b-9c0d-4e1f-a2b3-c4d5e6f7a8b9")
TEMPLATE_UUID = UUID("7a8b9c0d-1e2f-4a3b-8c4d-5e6f7a8b9c0d")

V2_ANSWER = json.dumps(
    {"recipe_uuid_to_wait_on": str(RECIPE_UUID), "npod_uuid_to_wait_on": str(NPOD_UUID)}
)


@pytest.fixture
def ucapi(graphql_reply, ucapi_host):
    """
    Builder for a handler answering UCAPI and SPU requests.

    ``operations`` maps an operation name to the value of ``data.<name>``;
    every SPU endpoint answers ``spu_answer``.
    """

    def build(operations, spu_answer="OK"):
        def handler(request):
            if request.url.host != ucapi_host:
                return httpx.Response(200, text=spu_answer)

            query = json.loads(request.content)["query"]
            for name, value in operations.items():
                if f"{{{name}" in query:
                    return graphql_reply(name, value)
            return httpx.Response(200, json={"errors": [{"message": f"unexpected query {query}"}]})

        return handler

    return build


@pytest.fixture(autouse=True)
def fast_polling(monkeypatch):
    monkeypatch.setattr(connection_module, "VOLUME_CREATE_INTERVAL", 0)
    monkeypatch.setattr(connection_module, "NPOD_CREATE_INTERVAL", 0)


@pytest.fixture
def completed_recipe():
    return {
        "items": [
            {"recipeUUID": str(RECIPE_UUID), "nPodUUID": str(NPOD_UUID), "state": "Completed"}
        ]
    }


# =============================================================================
# Session
# =============================================================================


class TestSession:
    """Tests for login and logout."""

    @pytest.mark.asyncio
    async def test_login(self, make_connection, ucapi):
        conn = make_connection(
            ucapi({"login": {"success": True, "organizationName": "Acme", "eulaAccepted": True}})
        )

        results = await conn.login("admin@example.com", "s3cret")

        assert results.success is True
        assert results.organization == "Acme"
        query = conn.transport.queries()[0]
        assert query.startswith('mutation{login(username:"admin@example.com",password:"s3cret")')

    @pytest.mark.asyncio
    async def test_logout(self, make_connection, ucapi):
        conn = make_connection(ucapi({"logout": True}))

        assert await conn.logout() is True


# =============================================================================
# Recipes
# =============================================================================


class TestRecipes:
    """Tests for recipe queries."""

    @pytest.mark.asyncio
    async def test_get_npod_recipes(self, make_connection, ucapi, completed_recipe):
        conn = make_connection(ucapi({"getNPodRecipes": completed_recipe}))

        records = await conn.get_npod_recipes(NPodRecipeFilter(npod_uuid=NPOD_UUID, completed=True))

        assert records.items[0].recipe_uuid == RECIPE_UUID
        assert conn.transport.queries()[0].startswith(
            f'query{{getNPodRecipes(filter:{{nPodUUID:"{NPOD_UUID}",completed:true}})'
        )


# =============================================================================
# Volumes
# =============================================================================


class TestVolumes:
    """Tests for volume operations."""

    @pytest.mark.asyncio
    async def test_create_volume(self, make_connection, ucapi, token_json, volume_json, completed_recipe):
        """Test creation delivers the token, waits for the recipe and loads the volume."""
        conn = make_connection(
            ucapi(
                {
                    "createVolumeV3": token_json,
                    "getNPodRecipes": completed_recipe,
                    "getVolumes": {"items": [volume_json], "filteredCount": 1},
                },
                spu_answer=V2_ANSWER,
            )
        )

        volume = await conn.create_volume(
            CreateVolumeInput(name="db-data", size_bytes=1 << 40, npod_guid=NPOD_UUID)
        )

        assert volume.name == "db-data"
        queries = conn.transport.queries()
        assert queries[0].startswith(
            f'mutation{{createVolumeV3(input:{{name:"db-data",sizeBytes:{1 << 40},nPodUUID:"{NPOD_UUID}"}})'
        )
        assert queries[1].startswith("query{getNPodRecipes(")
        assert f'getVolumes(filter:{{uuid:{{equals:"{token_json["waitOn"]}"}}}})' in queries[2]

    @pytest.mark.asyncio
    async def test_create_volume_without_recipe(self, make_connection, ucapi, token_json):
        conn = make_connection(ucapi({"createVolumeV3": token_json}, spu_answer="OK"))

        with pytest.raises(NebError, match="recipe to wait on"):
            await conn.create_volume(
                CreateVolumeInput(name="db-data", size_bytes=1024, npod_guid=NPOD_UUID)
            )

    @pytest.mark.asyncio
    async def test_create_volume_failed(self, make_connection, ucapi, token_json):
        failed = {
            "items": [
                {
                    "recipeUUID": str(RECIPE_UUID),
                    "nPodUUID": str(NPOD_UUID),
                    "state": "Failed",
                    "status": "not enough capacity",
                }
            ]
        }
        conn = make_connection(
            ucapi({"createVolumeV3": token_json, "getNPodRecipes": failed}, spu_answer=V2_ANSWER)
        )

        with pytest.raises(RecipeFailure, match="not enough capacity"):
            await conn.create_volume(
                CreateVolumeInput(name="db-data", size_bytes=1024, npod_guid=NPOD_UUID)
            )

    @pytest.mark.asyncio
    async def test_delete_volume(self, make_connection, ucapi, token_json):
        conn = make_connection(ucapi({"deleteVolume": token_json}))

        assert await conn.delete_volume(NPOD_UUID) is True
        assert conn.transport.queries()[0].startswith(f'mutation{{deleteVolume(uuid:"{NPOD_UUID}")')

    @pytest.mark.asyncio
    async def test_delete_volume_unreachable(self, make_connection, graphql_reply, ucapi_host, token_json):
        """Test a token nobody accepts fails the deletion."""

        def handler(request):
            if request.url.host != ucapi_host:
                raise httpx.ConnectError("unreachable", request=request)
            return graphql_reply("deleteVolume", token_json)

        conn = make_connection(handler)

        with pytest.raises(TokenDeliveryFailure, match="mandatory SPUs"):
            await conn.delete_volume(NPOD_UUID)


# =============================================================================
# LUNs
# =============================================================================


class TestLuns:
    """Tests for LUN operations."""

    @pytest.mark.asyncio
    async def test_create_lun(self, make_connection, ucapi, token_json):
        lun = {"uuid": str(LUN_UUID), "lunID": 7, "host": {"uuid": str(GROUP_UUID)}}
        conn = make_connection(
            ucapi(
                {
                    "createLUN": token_json,
                    "getLUNs": {"items": [lun], "filteredCount": 1},
                }
            )
        )

        result = await conn.create_lun(CreateLunInput(volume_guid=NPOD_UUID, host_guids=[GROUP_UUID]))

        assert result.guid == LUN_UUID
        assert result.lun_id == 7
        assert result.host_guid == GROUP_UUID

    @pytest.mark.asyncio
    async def test_create_lun_not_found(self, make_connection, ucapi, token_json):
        conn = make_connection(
            ucapi({"createLUN": token_json, "getLUNs": {"items": [], "filteredCount": 0}})
        )

        with pytest.raises(UnexpectedResultCountError):
            await conn.create_lun(CreateLunInput(volume_guid=NPOD_UUID))

    @pytest.mark.asyncio
    async def test_delete_lun(self, make_connection, ucapi, token_json):
        conn = make_connection(ucapi({"deleteLUN": token_json}))

        assert await conn.delete_lun(LUN_UUID) is True


# =============================================================================
# nPods
# =============================================================================


class TestNPods:
    """Tests for nPod operations."""

    @pytest.fixture
    def spus(self):
        return [
            NPodSpuInput(serial="01234567890ABCDEF", name="spu-a"),
            NPodSpuInput(serial="FEDCBA09876543210", name="spu-b"),
        ]

    @pytest.mark.asyncio
    async def test_create_npod(self, make_connection, ucapi, token_json, completed_recipe, spus):
        npod = {"uuid": str(NPOD_UUID), "name": "prod", "spus": [{"serial": spu.serial} for spu in spus]}
        conn = make_connection(
            ucapi(
                {
                    "newPodIssues": {"errors": [], "warnings": []},
                    "createNPod": token_json,
                    "getNPodRecipes": completed_recipe,
                    "getNPods": {"items": [npod], "filteredCount": 1},
                },
                spu_answer=V2_ANSWER,
            )
        )

        result = await conn.create_npod("prod", GROUP_UUID, spus, TEMPLATE_UUID, timezone="UTC")

        assert result.guid == NPOD_UUID
        assert result.spu_serials == [spu.serial for spu in spus]

        queries = conn.transport.queries()
        assert queries[0].startswith(
            'query{newPodIssues(spuSerials:["01234567890ABCDEF","FEDCBA09876543210"])'
        )
        assert "SPUSerial" in queries[1]
        assert 'timeZone:"UTC"' in queries[1]
        assert f'getNPods(page:{{page:1,count:100}},filter:{{uuid:{{equals:"{NPOD_UUID}"}}}})' in queries[-1]

    @pytest.mark.asyncio
    async def test_create_npod_blocked_by_issues(self, make_connection, ucapi, spus):
        """Test validation errors stop the creation before any mutation."""
        issues = {"errors": [{"message": "SPU is not claimed", "spuSerials": [spus[0].serial]}], "warnings": []}
        conn = make_connection(ucapi({"newPodIssues": issues}))

        with pytest.raises(ValidationIssues, match="SPU is not claimed"):
            await conn.create_npod("prod", GROUP_UUID, spus, TEMPLATE_UUID)

        assert len(conn.transport.requests) == 1

    @pytest.mark.asyncio
    async def test_delete_npod(self, make_connection, ucapi, token_json):
        conn = make_connection(ucapi({"delPod": token_json}))

        assert await conn.delete_npod(NPOD_UUID, secure_erase=True) is True
        assert conn.transport.queries()[0].startswith(
            f'mutation{{delPod(uid:"{NPOD_UUID}",secureErase:true)'
        )


# =============================================================================
# Updates
# =============================================================================


class TestUpdates:
    """Tests for nPod firmware updates."""

    @pytest.fixture
    def outdated(self):
        return {"errors": [], "warnings": [{"message": "SPU runs an old nebOS"}]}

    @pytest.mark.asyncio
    async def test_update_npod_firmware(self, make_connection, ucapi, token_json, outdated):
        """Test an update checks first, then delivers the update token."""
        conn = make_connection(
            ucapi({"updatePrecheck": outdated, "updatePodFirmware": token_json})
        )

        scheduled = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert await conn.update_npod_firmware(
            NPOD_UUID, "2.1.4", schedule_at=scheduled, ignore_warnings=True
        ) is True

        queries = conn.transport.queries()
        assert queries[0].startswith(
            f'query{{updatePrecheck(podUID:"{NPOD_UUID}",packageName:"2.1.4")'
        )
        assert queries[1].startswith(
            f'mutation{{updatePodFirmware(podUID:"{NPOD_UUID}",packageName:"2.1.4",'
            f'scheduled:"2026-01-02T03:04:05.000Z")'
        )
        spu_hosts = [r.url.host for r in conn.transport.requests if r.url.path != "/query"]
        assert spu_hosts[0] == "spu1-ctrl.example.test"

    @pytest.mark.asyncio
    async def test_update_immediately(self, make_connection, ucapi, token_json):
        clean = {"errors": [], "warnings": []}
        conn = make_connection(ucapi({"updatePrecheck": clean, "updatePodFirmware": token_json}))

        assert await conn.update_npod_firmware(NPOD_UUID, "2.1.4") is True
        assert "scheduled" not in conn.transport.queries()[1]

    @pytest.mark.asyncio
    async def test_update_blocked_by_warnings(self, make_connection, ucapi, token_json, outdated):
        """Test pre-check warnings stop the update unless ignored."""
        conn = make_connection(
            ucapi({"updatePrecheck": outdated, "updatePodFirmware": token_json})
        )

        with pytest.raises(ValidationIssues, match="old nebOS"):
            await conn.update_npod_firmware(NPOD_UUID, "2.1.4")

        assert len(conn.transport.requests) == 1

    @pytest.mark.asyncio
    async def test_update_blocked_by_errors(self, make_connection, ucapi, token_json):
        issues = {"errors": [{"message": "nPod is degraded"}], "warnings": []}
        conn = make_connection(ucapi({"updatePrecheck": issues, "updatePodFirmware": token_json}))

        with pytest.raises(ValidationIssues, match="degraded"):
            await conn.update_npod_firmware(NPOD_UUID, "2.1.4", ignore_warnings=True)

        assert len(conn.transport.requests) == 1


# =============================================================================
# Validation Gate
# =============================================================================


class TestIssues:
    """Tests for Issues.assert_no_issues."""

    def test_no_issues(self):
        Issues(errors=[], warnings=[]).assert_no_issues()

    def test_errors_always_raise(self):
        issues = Issues(errors=[IssueInstance(message="bad")], warnings=[])
        with pytest.raises(ValidationIssues) as exc_info:
            issues.assert_no_issues(ignore_warnings=True)
        assert len(exc_info.value.errors) == 1

    def test_warnings_raise_unless_ignored(self):
        issues = Issues(
            errors=[],
            warnings=[IssueInstance(message="firmware outdated", spu_serials=["0123"])],
        )
        with pytest.raises(ValidationIssues, match=r"firmware outdated \(0123\)"):
            issues.assert_no_issues()

        issues.assert_no_issues(ignore_warnings=True)

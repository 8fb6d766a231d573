"""
Recipe polling.

Hardware mutations hand their work to a recipe that runs on the SPUs. The
poller re-reads the recipe record until it reaches a terminal state or the
deadline passes:

    identifier = await client.deliver_token_v2(token)
    volume = await client.await_recipe(
        identifier.npod_uuid,
        identifier.recipe_uuid,
        timeout=120,
        interval=1,
        fetch=lambda: load_volume(token.wait_on),
    )
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any
from uuid import UUID

from nebpy.errors import RecipeFailure, RecipeTimeout
from nebpy.graphql import GraphQLParameters
from nebpy.log import get_logger, verbose
from nebpy.types.recipes import NPodRecipeFilter, RecipeRecordList, RecipeState

if TYPE_CHECKING:
    from nebpy.client import UcapiClient

# Volumes and snapshots
DEFAULT_TIMEOUT = 120.0
DEFAULT_INTERVAL = 1.0

# nPod creation
NPOD_CREATE_TIMEOUT = 2700.0
NPOD_CREATE_INTERVAL = 5.0


class RecipePoller:
    """Waits for recipes to finish by polling ``getNPodRecipes``."""

    def __init__(self, client: UcapiClient, *, logger: logging.Logger | None = None):
        self._client = client
        self._logger = get_logger(logger)

    async def get_records(self, npod_uuid: UUID, recipe_uuid: UUID) -> RecipeRecordList:
        """Query the records of one recipe."""
        parameters = GraphQLParameters()
        parameters.add(
            "filter", NPodRecipeFilter(npod_uuid=npod_uuid, recipe_uuid=recipe_uuid)
        )
        return await self._client.run_query(RecipeRecordList, "getNPodRecipes", parameters)

    async def await_recipe(
        self,
        npod_uuid: UUID,
        recipe_uuid: UUID,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        interval: float = DEFAULT_INTERVAL,
        fetch: Callable[[], Awaitable[Any]] | None = None,
        description: str = "recipe",
    ) -> Any:
        """
        Poll a recipe until it completes.

        Args:
            npod_uuid: nPod the recipe runs on
            recipe_uuid: The recipe
            timeout: Seconds to wait in total
            interval: Seconds between two polls
            fetch: Loads the resource created by the recipe once it completed
            description: Name of the operation, used in messages

        Returns:
            The result of ``fetch``, or the completed record when no fetch
            was given

        Raises:
            RecipeFailure: If the recipe failed, timed out or was cancelled
            RecipeTimeout: If the recipe did not finish within ``timeout``
        """
        start = time.monotonic()
        polls = 0

        while True:
            await asyncio.sleep(interval)
            polls += 1

            records = await self.get_records(npod_uuid, recipe_uuid)
            items = [item for item in records.items or [] if item is not None]

            if not items:
                # the record may not be visible yet
                self._logger.debug(f"[recipe] No record yet for {description} {recipe_uuid}")
            else:
                record = items[0]
                state = record.state
                verbose(self._logger, f"[recipe] {description} {recipe_uuid} is {_state_name(state)}")

                if state is RecipeState.COMPLETED:
                    self._logger.debug(
                        f"[recipe] {description} {recipe_uuid} completed after {polls} polls"
                    )
                    if fetch is None:
                        return record
                    return await fetch()

                if state is not None and state.is_failure:
                    message = f"{description} failed ({state.value})"
                    if record.status:
                        message = f"{message}: {record.status}"
                    self._logger.error(f"[recipe] {message}")
                    raise RecipeFailure(
                        message,
                        state=state,
                        status=record.status,
                        recipe_uuid=recipe_uuid,
                        npod_uuid=npod_uuid,
                    )

            elapsed = time.monotonic() - start
            if elapsed >= timeout:
                self._logger.error(
                    f"[recipe] {description} {recipe_uuid} did not finish within {timeout}s"
                )
                raise RecipeTimeout(
                    f"{description} timed out after {elapsed:.1f}s",
                    elapsed=elapsed,
                    recipe_uuid=recipe_uuid,
                    npod_uuid=npod_uuid,
                )


def _state_name(state: RecipeState | None) -> str:
    return state.value if state is not None else "unknown"

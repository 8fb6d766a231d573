"""
UCAPI execution engine.

Turns an operation name, its arguments and a result shape into one GraphQL
round-trip and returns typed results:

    async with UcapiClient(config) as client:
        volumes = await client.run_query(VolumeList, "getVolumes", params)

Errors are never retried. Every failure is logged and re-raised unchanged.
"""

from __future__ import annotations

import json
import logging
import platform
import time
from typing import Any, TypeVar

import httpx

from nebpy import __version__
from nebpy.config import ConnectionConfig
from nebpy.errors import (
    ApiError,
    NebError,
    ResponseFormatError,
    UnexpectedResultCountError,
)
from nebpy.graphql import (
    GraphQLParameters,
    Materializer,
    Operation,
    OperationType,
    project_fields,
)
from nebpy.graphql.materializer import CONVERSION_ERRORS, type_name
from nebpy.graphql.paths import is_model
from nebpy.log import get_logger, verbose
from nebpy.recipes import RecipePoller
from nebpy.session import Session
from nebpy.tokens import TokenDelivery
from nebpy.types.recipes import RecipeRecordIdentifier
from nebpy.types.tokens import TokenResponse

T = TypeVar("T")


def client_headers() -> dict[str, str]:
    """Identification headers sent with every GraphQL request."""
    return {
        "Content-Type": "application/json",
        "Nebulon-Client-App": f"nebpy/{__version__}",
        "Nebulon-Client-Platform": f"{platform.system()}/{platform.release()}",
    }


class UcapiClient:
    """
    Runs GraphQL operations against UCAPI.

    One client is one logical session: the login cookie lives in the cookie
    jar of its Session, and calls are expected to be awaited one after the
    other.
    """

    def __init__(
        self,
        config: ConnectionConfig | None = None,
        *,
        session: Session | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Connection configuration (defaults to the nebulon ON cloud)
            session: Optional shared HTTP session
            transport: Optional httpx transport (used by tests)
            logger: Optional logger; the ``nebpy`` logger is used otherwise
        """
        self.config = config or ConnectionConfig()
        self.logger = get_logger(logger)
        self.session = session or Session(self.config, transport=transport, logger=self.logger)
        self.materializer = Materializer(self.logger)
        self.tokens = TokenDelivery(
            self.session, timeout=self.config.token_timeout, logger=self.logger
        )
        self.recipes = RecipePoller(self, logger=self.logger)

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(self, operation: Operation, shape: type[T]) -> list[T | None]:
        """
        Send ``operation`` and materialize ``data.<name>`` as ``shape``.

        Returns:
            The results; an empty list when the server returned no data

        Raises:
            TransportError: On network failure or timeout
            ApiError: On a non-2xx status or GraphQL errors
            ResponseFormatError: On a 2xx reply that is not JSON
            MissingFieldError: When a required field is absent
        """
        url = self.config.query_url
        body = json.dumps(operation.to_body())

        self.logger.debug(f"[ucapi] Sending '{operation.name}' to {url}")
        if self.config.log_requests:
            self.logger.debug(f"[ucapi] Request: {operation}")

        start = time.monotonic()
        response = await self.session.post(url, content=body, headers=client_headers())
        duration_ms = (time.monotonic() - start) * 1000

        verbose(
            self.logger,
            f"[ucapi] {operation.name} answered with HTTP {response.status_code} "
            f"in {duration_ms:.0f} ms",
        )
        if self.config.log_responses:
            self.logger.debug(f"[ucapi] Response: {response.text[:2000]}")

        envelope = self._read_envelope(response)
        return self._read_data(envelope, operation.name, shape)

    async def run_query(
        self,
        shape: type[T],
        name: str,
        parameters: GraphQLParameters | None = None,
    ) -> T:
        """Run a query that must return exactly one result."""
        return self._single(
            await self.run_query_many(shape, name, parameters), name
        )

    async def run_query_many(
        self,
        shape: type[T],
        name: str,
        parameters: GraphQLParameters | None = None,
    ) -> list[T | None]:
        return await self._run(OperationType.QUERY, shape, name, parameters)

    async def run_mutation(
        self,
        shape: type[T],
        name: str,
        parameters: GraphQLParameters | None = None,
    ) -> T:
        """Run a mutation that must return exactly one result."""
        return self._single(
            await self.run_mutation_many(shape, name, parameters), name
        )

    async def run_mutation_many(
        self,
        shape: type[T],
        name: str,
        parameters: GraphQLParameters | None = None,
    ) -> list[T | None]:
        return await self._run(OperationType.MUTATION, shape, name, parameters)

    # =========================================================================
    # Hardware operations
    # =========================================================================

    async def deliver_token(self, payload: TokenResponse) -> bool:
        """Deliver a security token; see TokenDelivery.deliver_token."""
        return await self.tokens.deliver_token(payload)

    async def deliver_token_v2(self, payload: TokenResponse) -> RecipeRecordIdentifier | None:
        """Deliver a security token; see TokenDelivery.deliver_token_v2."""
        return await self.tokens.deliver_token_v2(payload)

    async def await_recipe(self, npod_uuid, recipe_uuid, **kwargs) -> Any:
        """Poll a recipe to completion; see RecipePoller.await_recipe."""
        return await self.recipes.await_recipe(npod_uuid, recipe_uuid, **kwargs)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Close the HTTP session."""
        await self.session.close()

    async def __aenter__(self) -> UcapiClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Internals
    # =========================================================================

    async def _run(
        self,
        operation_type: OperationType,
        shape: type[T],
        name: str,
        parameters: GraphQLParameters | None,
    ) -> list[T | None]:
        operation = Operation(
            operation_type,
            name,
            parameters=parameters,
            fields=tuple(project_fields(shape)),
        )
        try:
            return await self.execute(operation, shape)
        except NebError as e:
            self.logger.error(f"[ucapi] {operation_type.value} '{name}' failed: {e}")
            raise

    def _single(self, results: list[T | None], name: str) -> T:
        if len(results) != 1:
            error = UnexpectedResultCountError(name, len(results))
            self.logger.error(f"[ucapi] {error}")
            raise error
        return results[0]

    def _read_envelope(self, response: httpx.Response) -> dict[str, Any]:
        """Parse the reply and raise for HTTP or GraphQL errors."""
        status = response.status_code
        ok = 200 <= status < 300

        try:
            envelope = response.json()
        except ValueError as e:
            if not ok:
                raise ApiError.from_response(status, []) from e
            raise ResponseFormatError(
                f"Response is not valid JSON: {response.text[:200]}", status_code=status
            ) from e

        if not isinstance(envelope, dict):
            if not ok:
                raise ApiError.from_response(status, [])
            raise ResponseFormatError(
                f"Response is not a GraphQL envelope: {response.text[:200]}",
                status_code=status,
            )

        if not ok or "errors" in envelope:
            raise ApiError.from_response(status, _error_messages(envelope.get("errors")))

        return envelope

    def _read_data(self, envelope: dict[str, Any], name: str, shape: type[T]) -> list[T | None]:
        data = envelope.get("data")
        if not isinstance(data, dict):
            return []

        node = data.get(name)
        if node is None:
            return []

        if isinstance(node, list):
            return self.materializer.materialize_many(node, shape)

        if isinstance(node, dict):
            if not is_model(shape):
                raise ResponseFormatError(
                    f"Cannot convert '{name}' result to {type_name(shape)}: got a JSON object"
                )
            return [self.materializer.materialize(node, shape)]

        try:
            return [self.materializer.convert(node, shape)]
        except CONVERSION_ERRORS as e:
            raise ResponseFormatError(
                f"Cannot convert '{name}' result to {type_name(shape)}: {e}"
            ) from e


def _error_messages(errors: Any) -> list[str]:
    if not isinstance(errors, list):
        return []
    messages = []
    for error in errors:
        if isinstance(error, dict) and error.get("message") is not None:
            messages.append(str(error["message"]))
    return messages

"""
Security token delivery.

Mutations that touch physical hardware return a one-time token that must be
handed to the SPUs (services processing units) before the server carries
out the change. Delivery is prioritised:

1. Every mandatory group, in order: its control endpoint, then its data
   endpoints as fallbacks. A group where no endpoint answers aborts the
   delivery; later targets are never tried.
2. The best-effort targets (``targetIPs`` then ``dataTargetIPs``), until the
   first one answers. That answer is the delivery result.

A single attempt never raises: any failure is logged and counts as an empty
answer.
"""

from __future__ import annotations

import json
import logging
from uuid import UUID

from nebpy.errors import TokenDeliveryFailure
from nebpy.log import get_logger, verbose
from nebpy.session import Session
from nebpy.types.recipes import RecipeRecordIdentifier
from nebpy.types.tokens import TokenResponse

_ACCEPTED_V1 = ("OK", '"OK"')


class TokenDelivery:
    """Delivers security tokens to SPUs over the shared session."""

    def __init__(
        self,
        session: Session,
        *,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ):
        self._session = session
        self._timeout = timeout if timeout is not None else session.config.token_timeout
        self._logger = get_logger(logger)

    async def deliver_token(self, payload: TokenResponse) -> bool:
        """
        Deliver a token and expect a plain ``OK`` answer.

        Raises:
            TokenDeliveryFailure: If no target answered or the answer is not OK
        """
        body = await self._deliver(payload)
        if not body:
            raise TokenDeliveryFailure("Unable to deliver token to any SPU")

        if body in _ACCEPTED_V1:
            return True

        raise TokenDeliveryFailure(
            f"Token delivery was not accepted: {body}", response_body=body
        )

    async def deliver_token_v2(self, payload: TokenResponse) -> RecipeRecordIdentifier | None:
        """
        Deliver a token and read the recipe the server started for it.

        Returns:
            The recipe to wait on, or None if the answer could not be parsed

        Raises:
            TokenDeliveryFailure: If no target answered
        """
        body = await self._deliver(payload)
        if not body:
            raise TokenDeliveryFailure("Unable to deliver token to any SPU")

        try:
            answer = json.loads(body)
            return RecipeRecordIdentifier(
                recipe_uuid=UUID(str(answer["recipe_uuid_to_wait_on"])),
                npod_uuid=UUID(str(answer["npod_uuid_to_wait_on"])),
            )
        except (ValueError, TypeError, KeyError) as e:
            self._logger.error(f"[token] Unable to read recipe from delivery answer '{body}': {e}")
            return None

    # =========================================================================
    # Internals
    # =========================================================================

    async def _deliver(self, payload: TokenResponse) -> str:
        """Run the prioritised delivery and return the answer of the last target."""
        token = payload.token or ""

        for group in payload.must_send_target_dns or []:
            if group is None:
                continue

            endpoints = [group.control_port_dns, *(group.data_port_dns or [])]
            delivered = False
            for endpoint in endpoints:
                if not endpoint:
                    continue
                if await self._deliver_one(token, endpoint):
                    delivered = True
                    break

            if not delivered:
                self._logger.error(
                    f"[token] Delivery to mandatory SPU failed (control endpoint "
                    f"{group.control_port_dns})"
                )
                raise TokenDeliveryFailure("Unable to deliver token to mandatory SPUs")

        targets = [*(payload.target_ips or []), *(payload.data_target_ips or [])]
        for target in targets:
            if not target:
                continue
            body = await self._deliver_one(token, target)
            if body:
                return body

        return ""

    async def _deliver_one(self, token: str, endpoint: str) -> str:
        """POST the token to one endpoint; returns the answer or an empty string."""
        url = f"https://{endpoint}"
        verbose(self._logger, f"[token] Delivering token to {url}")

        try:
            response = await self._session.post(
                url,
                content=token,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
                propagate_cookies=False,
            )
        except Exception as e:
            self._logger.warning(f"[token] Delivery to {url} failed: {e}")
            return ""

        if not response.is_success:
            self._logger.warning(
                f"[token] Delivery to {url} answered with HTTP {response.status_code}"
            )
            return ""

        return response.text

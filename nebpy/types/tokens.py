"""
Security token payloads returned by hardware-affecting mutations.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from nebpy.types.base import FieldPath, UcapiModel
from nebpy.types.issues import Issues


class MustSendTargetDns(UcapiModel):
    """A mandatory delivery target: one control endpoint plus data endpoint fallbacks."""

    control_port_dns: Annotated[str | None, FieldPath("$.controlPortDNS", required=True)] = None
    data_port_dns: Annotated[list[str | None], FieldPath("$.dataPortDNS", required=True)] = []


class TokenResponse(UcapiModel):
    """A one-time token and the SPUs it must be delivered to."""

    token: Annotated[str | None, FieldPath("$.token", required=True)] = None
    must_send_target_dns: Annotated[
        list[MustSendTargetDns | None], FieldPath("$.mustSendTargetDNS", required=True)
    ] = []
    target_ips: Annotated[list[str | None], FieldPath("$.targetIPs", required=True)] = []
    data_target_ips: Annotated[list[str | None], FieldPath("$.dataTargetIPs")] = []
    wait_on: Annotated[UUID | None, FieldPath("$.waitOn", required=True)] = None
    issues: Annotated[list[Issues | None], FieldPath("$.issues")] = []

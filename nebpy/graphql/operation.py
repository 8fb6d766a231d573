"""
GraphQL operation envelope.

Renders the four shapes UCAPI accepts:

    query{userCount}
    query{loginStatus{username,organization}}
    mutation{deleteVolume(uuid:"...")}
    query{getLUNs(filter:{...}){items{uuid,lunID}}}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from nebpy.graphql.parameters import GraphQLParameters


class OperationType(str, Enum):
    """GraphQL operation types."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


@dataclass(frozen=True, slots=True)
class Operation:
    """A single GraphQL operation sent to UCAPI."""

    operation_type: OperationType
    name: str
    parameters: GraphQLParameters | None = None
    fields: tuple[str, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise ValueError("Operation name is required")

    def __str__(self) -> str:
        call = self.name

        arguments = str(self.parameters) if self.parameters else ""
        if arguments:
            call = f"{call}({arguments})"

        if self.fields:
            call = f"{call}{{{','.join(self.fields)}}}"

        return f"{self.operation_type.value}{{{call}}}"

    def to_body(self) -> dict[str, str]:
        """The JSON request body."""
        return {"query": str(self)}

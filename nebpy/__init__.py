"""
nebpy: async Python client for the nebulon ON GraphQL API (UCAPI).

Usage:
    from nebpy import ConnectionConfig, NebConnection

    async with NebConnection(ConnectionConfig.from_env()) as conn:
        await conn.login("admin@example.com", password)
        npods = await conn.get_npods()
"""

__version__ = "0.1.0"

from nebpy.client import UcapiClient
from nebpy.config import ConnectionConfig
from nebpy.connection import NebConnection
from nebpy.errors import (
    ApiError,
    MissingFieldError,
    NebError,
    RecipeError,
    RecipeFailure,
    RecipeTimeout,
    ResponseFormatError,
    TokenDeliveryFailure,
    TransportError,
    TransportTimeout,
    UnexpectedResultCountError,
    ValidationIssues,
)
from nebpy.graphql import FieldPath, GraphQLParameters
from nebpy.log import VERBOSE
from nebpy.recipes import RecipePoller
from nebpy.session import Session
from nebpy.tokens import TokenDelivery

__all__ = [
    "ApiError",
    "ConnectionConfig",
    "FieldPath",
    "GraphQLParameters",
    "MissingFieldError",
    "NebConnection",
    "NebError",
    "RecipeError",
    "RecipeFailure",
    "RecipePoller",
    "RecipeTimeout",
    "ResponseFormatError",
    "Session",
    "TokenDelivery",
    "TokenDeliveryFailure",
    "TransportError",
    "TransportTimeout",
    "UcapiClient",
    "UnexpectedResultCountError",
    "VERBOSE",
    "ValidationIssues",
    "__version__",
]

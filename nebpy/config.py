"""
Connection configuration for nebpy.

Timeouts are configuration values rather than constants so that callers
(and tests) can shorten them.

Usage:
    config = ConnectionConfig(graphql_timeout=10.0)

    # or from NEBPY_* environment variables
    config = ConnectionConfig.from_env()
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_SERVER = "https://ucapi.nebcloud.nebuloninc.com"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    """Configuration for a UCAPI connection."""

    # Connection
    server: str = DEFAULT_SERVER
    verify_ssl: bool = True

    # Bounded waits, in seconds
    graphql_timeout: float = 6.0
    token_timeout: float = 3.0

    # Observability
    log_requests: bool = False
    log_responses: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if not self.server:
            raise ValueError("UCAPI server URL is required")
        if not self.server.startswith(("http://", "https://")):
            raise ValueError(f"UCAPI server URL must include a scheme: {self.server}")
        if self.graphql_timeout <= 0:
            raise ValueError("graphql_timeout must be positive")
        if self.token_timeout <= 0:
            raise ValueError("token_timeout must be positive")

    @property
    def query_url(self) -> str:
        """The single GraphQL endpoint."""
        return f"{self.server.rstrip('/')}/query"

    @classmethod
    def from_env(cls) -> ConnectionConfig:
        """Build a configuration from NEBPY_* environment variables."""
        return cls(
            server=os.getenv("NEBPY_SERVER", DEFAULT_SERVER),
            verify_ssl=_env_bool("NEBPY_VERIFY_SSL", True),
            graphql_timeout=float(os.getenv("NEBPY_GRAPHQL_TIMEOUT", "6.0")),
            token_timeout=float(os.getenv("NEBPY_TOKEN_TIMEOUT", "3.0")),
            log_requests=_env_bool("NEBPY_LOG_REQUESTS", False),
            log_responses=_env_bool("NEBPY_LOG_RESPONSES", False),
        )

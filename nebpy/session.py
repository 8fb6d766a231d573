"""
HTTP session shared by all calls of one logical UCAPI session.

The session owns the httpx client, and with it the connection pool and the
cookie jar that carries the login cookie. UCAPI issues path-scoped cookies,
so before a request to a new path the cookies of the base ``/query`` path
are copied onto it.

A Session is meant for sequential use by one logical session; sharing one
between concurrent logical sessions needs external synchronization.
"""

from __future__ import annotations

import asyncio
import copy
import logging

import httpx

from nebpy.config import ConnectionConfig
from nebpy.errors import TransportError, TransportTimeout
from nebpy.log import get_logger


def _domain_matches(host: str, domain: str) -> bool:
    domain = domain.lstrip(".")
    return host == domain or host.endswith(f".{domain}")


def _path_matches(path: str, cookie_path: str) -> bool:
    if cookie_path in ("", "/") or path == cookie_path:
        return True
    return path.startswith(f"{cookie_path.rstrip('/')}/")


class Session:
    """Owns the httpx client and its cookie jar."""

    def __init__(
        self,
        config: ConnectionConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the session.

        Args:
            config: Connection configuration
            transport: Optional httpx transport (used by tests)
            logger: Optional logger
        """
        self.config = config
        self._transport = transport
        self._logger = get_logger(logger)
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                verify=self.config.verify_ssl,
                transport=self._transport,
                timeout=self.config.graphql_timeout,
            )
        return self._client

    @property
    def cookies(self) -> httpx.Cookies:
        """The session cookie jar."""
        return self._get_client().cookies

    def update_cookie_for_path(self, url: str) -> None:
        """Copy the base path cookies onto the path of ``url`` if it has none."""
        target = httpx.URL(url)
        base = httpx.URL(self.config.query_url)
        jar = self.cookies.jar

        if any(
            _domain_matches(target.host, c.domain) and _path_matches(target.path, c.path)
            for c in jar
        ):
            return

        base_cookies = [
            c for c in jar
            if _domain_matches(base.host, c.domain) and _path_matches(base.path, c.path)
        ]
        for cookie in base_cookies:
            clone = copy.copy(cookie)
            clone.path = target.path
            clone.path_specified = True
            jar.set_cookie(clone)
            self._logger.debug(f"[ucapi] Copied cookie '{cookie.name}' to path {target.path}")

    async def post(
        self,
        url: str,
        *,
        content: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        propagate_cookies: bool = True,
    ) -> httpx.Response:
        """
        POST ``content`` to ``url`` within a bounded wait.

        The wait covers the whole exchange, not each httpx phase, so a
        server trickling its reply cannot keep the call alive.

        Raises:
            TransportTimeout: If the wait was exceeded
            TransportError: On any other network failure
        """
        client = self._get_client()
        wait = timeout if timeout is not None else self.config.graphql_timeout

        if propagate_cookies:
            self.update_cookie_for_path(url)

        try:
            return await asyncio.wait_for(
                client.post(
                    url,
                    content=content.encode("utf-8"),
                    headers=headers,
                    timeout=wait,
                ),
                timeout=wait,
            )
        except asyncio.TimeoutError as e:
            raise TransportTimeout(f"Request to {url} timed out after {wait}s", url=url) from e
        except httpx.TimeoutException as e:
            raise TransportTimeout(f"Request to {url} timed out", url=url) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

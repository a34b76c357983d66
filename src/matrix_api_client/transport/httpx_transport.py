# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Default HTTP transport built on httpx.AsyncClient.

The client is created lazily on first use and keeps a connection pool; plain
HTTP or TLS is chosen per request from the URL scheme. Every httpx-level
failure is raised as TransportError. Error statuses are returned as ordinary
responses so that endpoints can turn them into ProtocolError.
"""

import logging
from types import TracebackType

import httpx
from typing_extensions import Self

from ..config import TransportConfig
from ..exceptions import TransportError, UriParseError
from ..types.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Transport using a pooled ``httpx.AsyncClient``.

    Args:
        config: Pool, timeout and TLS options. Defaults to TransportConfig().
        client: Pre-built AsyncClient to use instead of creating one. A
            client passed in is not closed by aclose().

    Example:
        async with HttpxTransport(TransportConfig(verify_tls=False)) as transport:
            client = Client(transport, "https://localhost:8448", SessionStore())
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or TransportConfig()
        self._client = client
        self._owns_client = client is None

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._client is not None and not self._client.is_closed

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            config = self._config
            limits = httpx.Limits(
                max_connections=config.max_connections,
                max_keepalive_connections=(
                    config.max_keepalive_connections if config.keep_alive else 0
                ),
            )
            self._client = httpx.AsyncClient(
                limits=limits,
                timeout=httpx.Timeout(config.timeout, connect=config.connect_timeout),
                verify=config.verify_tls,
                headers={"User-Agent": config.user_agent},
            )
            logger.debug(
                f"Created httpx client (max_connections={config.max_connections}, "
                f"keep_alive={config.keep_alive}, verify_tls={config.verify_tls})"
            )
        return self._client

    async def call(self, request: HttpRequest) -> HttpResponse:
        """
        Send the request and return the raw response.

        Raises:
            TransportError: On connection, TLS, timeout or protocol failures
            UriParseError: If httpx rejects the request URL
        """
        client = self._ensure_client()

        try:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body or None,
            )
        except httpx.InvalidURL as e:
            raise UriParseError(f"Invalid request URL: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"{request.method} request failed: {type(e).__name__}: {e}"
            ) from e

        return HttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> Self:
        self._ensure_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()


__all__ = ["HttpxTransport"]

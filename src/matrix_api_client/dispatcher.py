# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request dispatch pipeline.

Every API call goes through RequestDispatcher.dispatch():

1. The endpoint builds its wire request (relative 'path?query' plus body)
2. The path and query are overlaid onto the homeserver base URL
3. For endpoints that require authentication, the session's access token is
   appended as the 'access_token' query parameter; without a session the
   dispatch fails before anything is sent
4. The merged URL is re-parsed and validated
5. The transport sends the request
6. The endpoint parses the wire response into its typed response

Every failure is raised as a MatrixClientError subclass. Nothing is retried,
cached, or written to the session store here.
"""

import asyncio
import dataclasses
import logging
import time
from typing import TypeVar
from urllib.parse import SplitResult, urlencode, urlsplit, urlunsplit

import httpx

from .exceptions import (
    AuthenticationRequiredError,
    MatrixClientError,
    SerializationError,
    TransportError,
    UriParseError,
)
from .observability.metrics import DispatchMetrics
from .protocols.endpoint import EndpointProtocol
from .protocols.transport import TransportProtocol
from .session import SessionStore
from .types.endpoint import EndpointMetadata
from .types.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT")

ACCESS_TOKEN_PARAM = "access_token"


class RequestDispatcher:
    """
    Sends typed requests to the homeserver through an injected transport.

    The dispatcher is stateless apart from its collaborators, so concurrent
    dispatches are independent. The session store is only read, and only for
    endpoints that require authentication.

    Usage:
        dispatcher = RequestDispatcher(
            homeserver_url="https://matrix.example.org",
            transport=HttpxTransport(),
            session_store=SessionStore(),
        )
        response = await dispatcher.dispatch(GetAliasRequest(room_alias="#a:b"))
    """

    __slots__ = ("_homeserver_url", "_metrics", "_session_store", "_transport")

    def __init__(
        self,
        homeserver_url: str,
        transport: TransportProtocol,
        session_store: SessionStore,
        metrics: DispatchMetrics | None = None,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            homeserver_url: Base URL of the homeserver; its path and query are
                replaced by each endpoint's own
            transport: Object satisfying TransportProtocol
            session_store: Store holding the current session
            metrics: Optional metrics recorder
        """
        self._homeserver_url = homeserver_url
        self._transport = transport
        self._session_store = session_store
        self._metrics = metrics

    @property
    def homeserver_url(self) -> str:
        return self._homeserver_url

    @property
    def transport(self) -> TransportProtocol:
        return self._transport

    @property
    def session_store(self) -> SessionStore:
        return self._session_store

    @property
    def metrics(self) -> DispatchMetrics | None:
        return self._metrics

    async def dispatch(self, request: EndpointProtocol[ResponseT]) -> ResponseT:
        """
        Send a request and return its typed response.

        Args:
            request: Typed endpoint request

        Returns:
            The endpoint's typed response

        Raises:
            SerializationError: The request could not be encoded
            AuthenticationRequiredError: The endpoint requires a session and
                none is set (nothing is sent)
            UriParseError: The merged URL is malformed
            TransportError: The transport failed to complete the exchange
            ProtocolError: The homeserver answered with an error status
            DeserializationError: The response body did not match the schema
        """
        metadata = request.metadata
        start = time.monotonic()

        try:
            response = await self._dispatch(request, metadata)
        except MatrixClientError as e:
            duration = time.monotonic() - start
            logger.warning(
                f"Dispatch of {metadata.name} failed after {duration:.3f}s: "
                f"{type(e).__name__}: {e}"
            )
            if self._metrics is not None:
                self._metrics.record_failure(metadata.name, type(e).__name__, duration)
            raise

        duration = time.monotonic() - start
        logger.debug(f"Dispatch of {metadata.name} completed in {duration:.3f}s")
        if self._metrics is not None:
            self._metrics.record_success(metadata.name, duration)
        return response

    async def _dispatch(
        self, request: EndpointProtocol[ResponseT], metadata: EndpointMetadata
    ) -> ResponseT:
        http_request = self._build_request(request, metadata)

        logger.debug(
            f"Sending {metadata.name}: {http_request.method} "
            f"{urlsplit(http_request.url).path}"
        )
        http_response = await self._send(http_request)
        logger.debug(f"Received {metadata.name}: HTTP {http_response.status_code}")

        return request.parse_response(http_response)

    def _build_request(
        self, request: EndpointProtocol[ResponseT], metadata: EndpointMetadata
    ) -> HttpRequest:
        """Build the wire request and point it at the homeserver."""
        try:
            http_request = request.to_http_request()
        except SerializationError:
            raise
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Failed to serialize {metadata.name} request: "
                f"{type(e).__name__}: {e}"
            ) from e

        return dataclasses.replace(
            http_request, url=self._resolve_url(http_request.url, metadata)
        )

    def _resolve_url(self, endpoint_url: str, metadata: EndpointMetadata) -> str:
        """
        Overlay the endpoint's path and query onto the homeserver URL.

        Scheme, host and port come from the homeserver URL; path and query
        come from the endpoint. The access token is appended last.
        """
        base = self._split(self._homeserver_url)
        endpoint = self._split(endpoint_url)

        query = endpoint.query
        if metadata.requires_authentication:
            session = self._session_store.get()
            if session is None:
                raise AuthenticationRequiredError(metadata.name)
            token = urlencode({ACCESS_TOKEN_PARAM: session.access_token})
            query = f"{query}&{token}" if query else token

        merged = urlunsplit((base.scheme, base.netloc, endpoint.path, query, ""))

        # Never put the merged URL into error messages: it carries the token.
        try:
            url = httpx.URL(merged)
        except httpx.InvalidURL as e:
            raise UriParseError(
                f"Could not parse request URL for {metadata.name}: {e}",
                url=self._homeserver_url,
            ) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise UriParseError(
                f"Homeserver URL must be an absolute http(s) URL: "
                f"{self._homeserver_url!r}",
                url=self._homeserver_url,
            )

        return str(url)

    @staticmethod
    def _split(url: str) -> SplitResult:
        try:
            return urlsplit(url)
        except ValueError as e:
            raise UriParseError(f"Could not parse URL {url!r}: {e}", url=url) from e

    async def _send(self, http_request: HttpRequest) -> HttpResponse:
        try:
            return await self._transport.call(http_request)
        except asyncio.CancelledError:
            raise
        except MatrixClientError:
            raise
        except Exception as e:
            raise TransportError(
                f"Transport failed: {type(e).__name__}: {e}"
            ) from e


__all__ = ["ACCESS_TOKEN_PARAM", "RequestDispatcher"]

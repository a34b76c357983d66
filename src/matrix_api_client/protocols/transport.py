# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for HTTP transports."""

from typing import Protocol, runtime_checkable

from ..types.http import HttpRequest, HttpResponse


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Minimal protocol for sending HTTP requests.

    Any object with a matching ``call`` coroutine can be handed to the client:
    the bundled httpx transport, a custom pooled transport, or a test double.
    No inheritance is required.

    Implementations should raise TransportError for connection-level
    failures and return non-2xx responses as ordinary HttpResponse values.
    """

    async def call(self, request: HttpRequest) -> HttpResponse:
        """Send a fully built request and return the raw response."""
        ...

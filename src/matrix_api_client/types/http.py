# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Wire-level HTTP request and response types.

These are the values exchanged with a transport. The dispatcher only rewrites
the URL of a request; bodies are opaque bytes to everything but the endpoint
that produced or consumes them.
"""

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class HttpRequest:
    """
    HTTP request as produced by an endpoint and sent by a transport.

    Attributes:
        method: HTTP method (e.g. 'GET', 'POST')
        url: Relative 'path?query' as built by the endpoint, or the absolute
            URL once the dispatcher has merged it with the homeserver URL
        headers: Request headers
        body: Raw request body (empty for requests without a body)
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class HttpResponse:
    """HTTP response as returned by a transport."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        """Whether the status code is in the 2xx range."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON.
        """
        return json.loads(self.body)


__all__ = ["HttpRequest", "HttpResponse"]

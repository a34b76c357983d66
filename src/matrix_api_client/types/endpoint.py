# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Static endpoint metadata."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EndpointMetadata:
    """
    Static description of one client-server API operation.

    Every endpoint class carries exactly one instance as a class constant, so
    the values are identical for every call to the operation.

    Attributes:
        name: Short endpoint identifier used in logs and metrics (e.g. 'sync')
        description: One-line description of the operation
        method: HTTP method
        path: Path template; placeholders use str.format syntax
            (e.g. '/_matrix/client/r0/directory/room/{room_alias}')
        requires_authentication: Whether an access token must be attached
        rate_limited: Whether the homeserver rate limits this endpoint
    """

    name: str
    description: str
    method: str
    path: str
    requires_authentication: bool
    rate_limited: bool = False


__all__ = ["EndpointMetadata"]

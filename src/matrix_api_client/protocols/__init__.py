# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable client components.

Available protocols:
- TransportProtocol: Interface for objects that send HTTP requests
- EndpointProtocol: Interface for typed API requests the dispatcher can send

Supporting types:
- EndpointMetadata: Static metadata every endpoint carries
"""

from ..types.endpoint import EndpointMetadata
from .endpoint import EndpointProtocol
from .transport import TransportProtocol

__all__ = [
    "EndpointMetadata",
    "EndpointProtocol",
    "TransportProtocol",
]

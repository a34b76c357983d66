# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions shared by endpoints, transports and the dispatcher."""

from .endpoint import EndpointMetadata
from .http import HttpRequest, HttpResponse

__all__ = [
    "EndpointMetadata",
    # Wire types
    "HttpRequest",
    "HttpResponse",
]

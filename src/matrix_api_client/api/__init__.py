# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Matrix client-server API endpoints.

Each module holds the request and response models of one endpoint. Pass a
request to Client.request() to dispatch it:

    >>> from matrix_api_client.api import GetAliasRequest
    >>> response = await client.request(
    ...     GetAliasRequest(room_alias="#example_room:example.com")
    ... )
    >>> response.room_id
    '!n8f893n9:example.com'
"""

from .alias import GetAliasRequest, GetAliasResponse
from .base import Endpoint, MatrixErrorBody, error_from_response
from .login import LoginRequest, LoginResponse, LoginType
from .register import RegisterRequest, RegisterResponse, RegistrationKind
from .sync_events import (
    FilterDefinition,
    SetPresence,
    SyncEventsRequest,
    SyncEventsResponse,
    SyncFilter,
)
from .whoami import WhoAmIRequest, WhoAmIResponse

__all__ = [
    # Base
    "Endpoint",
    "FilterDefinition",
    # Alias
    "GetAliasRequest",
    "GetAliasResponse",
    # Login
    "LoginRequest",
    "LoginResponse",
    "LoginType",
    "MatrixErrorBody",
    # Register
    "RegisterRequest",
    "RegisterResponse",
    "RegistrationKind",
    "SetPresence",
    # Sync
    "SyncEventsRequest",
    "SyncEventsResponse",
    "SyncFilter",
    # Whoami
    "WhoAmIRequest",
    "WhoAmIResponse",
    "error_from_response",
]

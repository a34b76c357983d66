# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Matrix API Client - Async client runtime for the Matrix client-server API.

This library turns typed endpoint requests into HTTP exchanges with a
homeserver, injects the session's access token where an endpoint requires
it, and exposes the sync endpoint as an async stream.

Key Features:
    - Typed request/response models for login, registration, whoami,
      room alias lookup and sync
    - Pluggable transports via TransportProtocol (httpx by default)
    - Thread-safe session store shared by cheap client clones
    - Sync stream that stops after the first error and can resume from the
      last next_batch token
    - Optional dispatch metrics with Prometheus export

Quick Start:
    >>> from matrix_api_client import create_client
    >>>
    >>> async with create_client("https://matrix.example.org") as client:
    ...     session = await client.log_in("@alice:example.org", "secret")
    ...     async for response in client.sync(set_presence=False):
    ...         print(response.next_batch)

Main Exports:
    - Client, create_client: Client handle and factory
    - Session, SessionStore: Authentication session and its holder
    - SyncStream, SyncCursor: Sync endpoint as an async iterator
    - RequestDispatcher: Low-level request pipeline
    - HttpxTransport, TransportProtocol: Transport layer
    - ClientConfig, TransportConfig: Configuration options

Version: 1.0.0
"""

__version__ = "1.0.0"

from .api import (
    Endpoint,
    FilterDefinition,
    GetAliasRequest,
    GetAliasResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    RegistrationKind,
    SetPresence,
    SyncEventsRequest,
    SyncEventsResponse,
    WhoAmIRequest,
    WhoAmIResponse,
)
from .client import Client, ClientState, create_client
from .config import ClientConfig, TransportConfig
from .dispatcher import RequestDispatcher
from .exceptions import (
    AuthenticationRequiredError,
    DeserializationError,
    MatrixClientError,
    ProtocolError,
    SerializationError,
    TransportError,
    UriParseError,
)
from .observability import DispatchMetrics, PrometheusDispatchMetrics
from .protocols import EndpointMetadata, EndpointProtocol, TransportProtocol
from .session import Session, SessionStore
from .sync import CursorKind, SyncCursor, SyncOutcome, SyncStream
from .transport import HttpxTransport
from .types import HttpRequest, HttpResponse

__all__ = [
    # Version
    "__version__",
    # Client
    "Client",
    "ClientState",
    "create_client",
    "RequestDispatcher",
    # Session
    "Session",
    "SessionStore",
    # Sync
    "CursorKind",
    "SyncCursor",
    "SyncOutcome",
    "SyncStream",
    # Config
    "ClientConfig",
    "TransportConfig",
    # Protocols and wire types
    "EndpointMetadata",
    "EndpointProtocol",
    "HttpRequest",
    "HttpResponse",
    "TransportProtocol",
    "HttpxTransport",
    # Endpoints
    "Endpoint",
    "FilterDefinition",
    "GetAliasRequest",
    "GetAliasResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "RegistrationKind",
    "SetPresence",
    "SyncEventsRequest",
    "SyncEventsResponse",
    "WhoAmIRequest",
    "WhoAmIResponse",
    # Metrics
    "DispatchMetrics",
    "PrometheusDispatchMetrics",
    # Exceptions
    "AuthenticationRequiredError",
    "DeserializationError",
    "MatrixClientError",
    "ProtocolError",
    "SerializationError",
    "TransportError",
    "UriParseError",
]

# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the Matrix API client

This module provides configuration classes for the client and its default
HTTP transport.
"""

from dataclasses import dataclass, field

from .session import Session

DEFAULT_USER_AGENT = "matrix-api-client/1.0.0"


@dataclass
class TransportConfig:
    """
    Construction options for the default httpx transport.

    Timeouts default to None because a sync request without a since token
    may legitimately take a long time to answer.
    """

    # === Timeouts ===

    timeout: float | None = None
    """Read/write/pool timeout in seconds; None disables it."""

    connect_timeout: float | None = 10.0
    """Timeout for establishing a connection in seconds; None disables it."""

    # === Connection Pooling ===

    keep_alive: bool = True
    """Reuse connections between requests."""

    max_connections: int = 100
    """Maximum number of concurrent connections."""

    max_keepalive_connections: int = 20
    """Maximum number of idle connections kept in the pool."""

    # === TLS ===

    verify_tls: bool = True
    """Verify the homeserver's TLS certificate for https URLs."""

    # === Identification ===

    user_agent: str = DEFAULT_USER_AGENT
    """User-Agent header sent with every request."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive or None")
        if self.connect_timeout is not None and self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive or None")
        if self.max_connections < 1:
            raise ValueError("max_connections must be at least 1")
        if not 0 <= self.max_keepalive_connections <= self.max_connections:
            raise ValueError(
                "max_keepalive_connections must be between 0 and max_connections"
            )


@dataclass
class ClientConfig:
    """
    Configuration for a Client built with Client.from_config().

    The homeserver URL is only checked for presence here; it is parsed on
    every dispatch, where a malformed URL surfaces as UriParseError.
    """

    homeserver_url: str
    """Base URL of the homeserver (e.g. 'https://matrix.example.org')."""

    session: Session | None = None
    """Previously persisted session to restore instead of logging in."""

    transport: TransportConfig = field(default_factory=TransportConfig)
    """Options for the default httpx transport."""

    metrics_enabled: bool = False
    """Record dispatch metrics (and Prometheus metrics)."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.homeserver_url or not self.homeserver_url.strip():
            raise ValueError("homeserver_url must not be empty")


__all__ = [
    "DEFAULT_USER_AGENT",
    "ClientConfig",
    "TransportConfig",
]

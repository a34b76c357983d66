# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
[GET /_matrix/client/r0/sync] Synchronize the client's state with the homeserver.

The response is kept loosely typed: only next_batch is required, and every
section of the sync payload is passed through as plain JSON so that event
schemas stay the caller's concern.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..types.endpoint import EndpointMetadata
from .base import Endpoint


class SetPresence(str, Enum):
    """Presence state to set while syncing."""

    OFFLINE = "offline"
    ONLINE = "online"
    UNAVAILABLE = "unavailable"


class FilterDefinition(BaseModel):
    """
    Inline filter definition, sent JSON-encoded in the query string.

    Unknown keys are kept so that newer filter options can be passed through.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    event_fields: list[str] | None = None
    event_format: str | None = None
    presence: dict[str, Any] | None = None
    account_data: dict[str, Any] | None = None
    room: dict[str, Any] | None = None


# Either the ID of a filter uploaded earlier or an inline definition
SyncFilter = str | FilterDefinition


class SyncEventsResponse(BaseModel):
    """One batch of state changes."""

    model_config = ConfigDict(extra="allow")

    next_batch: str
    rooms: dict[str, Any] = Field(default_factory=dict)
    presence: dict[str, Any] = Field(default_factory=dict)
    account_data: dict[str, Any] = Field(default_factory=dict)
    to_device: dict[str, Any] = Field(default_factory=dict)
    device_lists: dict[str, Any] = Field(default_factory=dict)
    device_one_time_keys_count: dict[str, int] = Field(default_factory=dict)


class SyncEventsRequest(Endpoint[SyncEventsResponse]):
    """
    Get state changes since a pagination token.

    Attributes:
        filter: Filter ID or inline filter definition
        since: next_batch token of a previous sync; omitted for an initial sync
        full_state: Return the full state of every room even with a since token
        set_presence: Presence to set for the user while syncing
        timeout: Server-side long-poll timeout in milliseconds
    """

    metadata = EndpointMetadata(
        name="sync",
        description="Get all new events from all rooms since the last sync or a given point of time.",
        method="GET",
        path="/_matrix/client/r0/sync",
        requires_authentication=True,
    )
    response_type = SyncEventsResponse

    filter: SyncFilter | None = None
    since: str | None = None
    full_state: bool | None = None
    set_presence: SetPresence | None = None
    timeout: int | None = None

    def query_params(self) -> dict[str, Any]:
        return {
            "filter": self.filter,
            "since": self.since,
            "full_state": self.full_state,
            "set_presence": self.set_presence,
            "timeout": self.timeout,
        }


__all__ = [
    "FilterDefinition",
    "SetPresence",
    "SyncEventsRequest",
    "SyncEventsResponse",
    "SyncFilter",
]

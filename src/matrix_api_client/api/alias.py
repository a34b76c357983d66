# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""[GET /_matrix/client/r0/directory/room/{roomAlias}] Resolve a room alias."""

from pydantic import BaseModel, ConfigDict, Field

from ..types.endpoint import EndpointMetadata
from .base import Endpoint


class GetAliasResponse(BaseModel):
    """Room an alias points to, plus servers that know about the room."""

    model_config = ConfigDict(extra="allow")

    room_id: str
    servers: list[str] = Field(default_factory=list)


class GetAliasRequest(Endpoint[GetAliasResponse]):
    """
    Resolve a room alias to a room ID.

    Attributes:
        room_alias: Alias to resolve (e.g. '#example_room:example.com');
            percent-encoded into the path
    """

    metadata = EndpointMetadata(
        name="get_alias",
        description="Resolve a room alias to a room ID.",
        method="GET",
        path="/_matrix/client/r0/directory/room/{room_alias}",
        requires_authentication=False,
    )
    response_type = GetAliasResponse

    room_alias: str

    def path_params(self) -> dict[str, str]:
        return {"room_alias": self.room_alias}


__all__ = ["GetAliasRequest", "GetAliasResponse"]

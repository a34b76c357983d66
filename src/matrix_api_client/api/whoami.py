# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""[GET /_matrix/client/r0/account/whoami] Identify the owner of an access token."""

from pydantic import BaseModel, ConfigDict

from ..types.endpoint import EndpointMetadata
from .base import Endpoint


class WhoAmIResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    user_id: str


class WhoAmIRequest(Endpoint[WhoAmIResponse]):
    metadata = EndpointMetadata(
        name="whoami",
        description="Get information about the owner of an access token.",
        method="GET",
        path="/_matrix/client/r0/account/whoami",
        requires_authentication=True,
    )
    response_type = WhoAmIResponse


__all__ = ["WhoAmIRequest", "WhoAmIResponse"]

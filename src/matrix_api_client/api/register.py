# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""[POST /_matrix/client/r0/register] Register an account on the homeserver."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..types.endpoint import EndpointMetadata
from .base import Endpoint


class RegistrationKind(str, Enum):
    """Kind of account to register."""

    GUEST = "guest"
    USER = "user"


class RegisterResponse(BaseModel):
    """Credentials issued for the newly registered account."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    user_id: str
    device_id: str
    home_server: str | None = None


class RegisterRequest(Endpoint[RegisterResponse]):
    """
    Register a guest or user account.

    Attributes:
        kind: Account kind, sent as the 'kind' query parameter
        username: Local part of the desired user ID; generated by the
            server when omitted
        password: Password for the account
        device_id: Device ID to use instead of a generated one
        initial_device_display_name: Display name for the new device
        auth: Additional authentication information for the
            user-interactive authentication API
        bind_email: Whether to bind the registered email to the account
    """

    metadata = EndpointMetadata(
        name="register",
        description="Register an account on this homeserver.",
        method="POST",
        path="/_matrix/client/r0/register",
        requires_authentication=False,
        rate_limited=True,
    )
    response_type = RegisterResponse

    kind: RegistrationKind | None = None
    username: str | None = None
    password: str | None = None
    device_id: str | None = None
    initial_device_display_name: str | None = None
    auth: dict[str, Any] | None = None
    bind_email: bool | None = None

    def query_params(self) -> dict[str, Any]:
        return {"kind": self.kind}

    def body(self) -> dict[str, Any]:
        fields = {
            "username": self.username,
            "password": self.password,
            "device_id": self.device_id,
            "initial_device_display_name": self.initial_device_display_name,
            "auth": self.auth,
            "bind_email": self.bind_email,
        }
        return {key: value for key, value in fields.items() if value is not None}


__all__ = ["RegisterRequest", "RegisterResponse", "RegistrationKind"]

# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""[POST /_matrix/client/r0/login] Log in to the homeserver."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..types.endpoint import EndpointMetadata
from .base import Endpoint


class LoginType(str, Enum):
    """Authentication mechanism used to log in."""

    PASSWORD = "m.login.password"
    TOKEN = "m.login.token"


class LoginResponse(BaseModel):
    """Credentials issued by a successful login."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    user_id: str
    device_id: str
    home_server: str | None = None
    well_known: dict[str, Any] | None = None


class LoginRequest(Endpoint[LoginResponse]):
    """
    Log in with a user identifier and password.

    Attributes:
        user: Fully qualified user ID or just the local part
        password: The user's password
        login_type: Login mechanism, password by default
        device_id: Reuse an existing device instead of creating a new one
        initial_device_display_name: Display name for a newly created device
        medium: Third-party identifier medium, when logging in with one
        address: Third-party identifier address, when logging in with one
    """

    metadata = EndpointMetadata(
        name="login",
        description="Login to the homeserver.",
        method="POST",
        path="/_matrix/client/r0/login",
        requires_authentication=False,
        rate_limited=True,
    )
    response_type = LoginResponse

    user: str
    password: str
    login_type: LoginType = LoginType.PASSWORD
    device_id: str | None = None
    initial_device_display_name: str | None = None
    medium: str | None = None
    address: str | None = None

    def body(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "type": self.login_type.value,
            "user": self.user,
            "password": self.password,
        }
        optional = {
            "device_id": self.device_id,
            "initial_device_display_name": self.initial_device_display_name,
            "medium": self.medium,
            "address": self.address,
        }
        body.update({key: value for key, value in optional.items() if value is not None})
        return body


__all__ = ["LoginRequest", "LoginResponse", "LoginType"]

# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base model for client-server API endpoints.

Each endpoint is a frozen pydantic model holding the request parameters. The
base class turns it into an HttpRequest (path template, query string, JSON
body) and parses the HttpResponse into the endpoint's response model. Endpoint
subclasses only declare their metadata, their fields, and which of those
fields go into the path, the query string, and the body.
"""

import json
import logging
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar, cast
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import DeserializationError, ProtocolError, SerializationError
from ..types.endpoint import EndpointMetadata
from ..types.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

JSON_CONTENT_TYPE = "application/json"


class MatrixErrorBody(BaseModel):
    """Standard Matrix error object returned with non-2xx statuses."""

    model_config = ConfigDict(extra="allow")

    errcode: str
    error: str | None = None


def error_from_response(response: HttpResponse) -> ProtocolError:
    """
    Build a ProtocolError from a non-2xx response.

    The errcode and error fields are filled in when the body is a standard
    Matrix error object. Anything else still yields a ProtocolError carrying
    the status code.
    """
    try:
        body = response.json()
    except ValueError:
        return ProtocolError(response.status_code)

    try:
        parsed = MatrixErrorBody.model_validate(body)
    except ValidationError:
        return ProtocolError(response.status_code, body=body)

    return ProtocolError(
        response.status_code,
        errcode=parsed.errcode,
        error=parsed.error,
        body=body,
    )


class Endpoint(BaseModel, Generic[ResponseT]):
    """
    Typed request for one API operation.

    Subclasses set ``metadata`` and ``response_type`` and override whichever
    of ``path_params``, ``query_params`` and ``body`` apply to them.

    Example:
        class WhoAmIRequest(Endpoint[WhoAmIResponse]):
            metadata = EndpointMetadata(
                name="whoami",
                description="Get information about the owner of an access token.",
                method="GET",
                path="/_matrix/client/r0/account/whoami",
                requires_authentication=True,
            )
            response_type = WhoAmIResponse
    """

    model_config = ConfigDict(frozen=True)

    metadata: ClassVar[EndpointMetadata]
    response_type: ClassVar[type[BaseModel]]

    def path_params(self) -> dict[str, str]:
        """Values substituted into the path template."""
        return {}

    def query_params(self) -> dict[str, Any]:
        """Query string parameters; None values are omitted."""
        return {}

    def body(self) -> dict[str, Any] | None:
        """JSON body, or None for requests without a body."""
        return None

    def to_http_request(self) -> HttpRequest:
        """
        Build the wire request for this endpoint.

        Returns:
            HttpRequest with a relative 'path?query' url

        Raises:
            SerializationError: If a path, query or body value cannot be encoded
        """
        try:
            path = self.metadata.path.format(
                **{
                    key: quote(str(value), safe="")
                    for key, value in self.path_params().items()
                }
            )
            query = urlencode(
                {
                    key: _encode_query_value(value)
                    for key, value in self.query_params().items()
                    if value is not None
                }
            )
            payload = self.body()
            body = (
                json.dumps(payload, separators=(",", ":")).encode("utf-8")
                if payload is not None
                else b""
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(
                f"Failed to serialize {self.metadata.name} request: "
                f"{type(e).__name__}: {e}"
            ) from e

        headers = {"Accept": JSON_CONTENT_TYPE}
        if payload is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE

        return HttpRequest(
            method=self.metadata.method,
            url=f"{path}?{query}" if query else path,
            headers=headers,
            body=body,
        )

    def parse_response(self, response: HttpResponse) -> ResponseT:
        """
        Parse the wire response into the endpoint's response model.

        Raises:
            ProtocolError: If the status code is not 2xx
            DeserializationError: If the body is not valid JSON or does not
                match the response model
        """
        if not response.is_success:
            raise error_from_response(response)

        try:
            return cast(
                ResponseT, self.response_type.model_validate_json(response.body)
            )
        except ValidationError as e:
            logger.debug(
                f"Invalid {self.metadata.name} response body: "
                f"{e.error_count()} validation error(s)"
            )
            raise DeserializationError(
                f"Failed to deserialize {self.metadata.name} response: {e}",
                status_code=response.status_code,
            ) from e


def _encode_query_value(value: Any) -> str:
    """Encode a single query parameter value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, BaseModel):
        return value.model_dump_json(exclude_none=True)
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"Unsupported query parameter type: {type(value).__name__}")


__all__ = [
    "JSON_CONTENT_TYPE",
    "Endpoint",
    "MatrixErrorBody",
    "error_from_response",
]

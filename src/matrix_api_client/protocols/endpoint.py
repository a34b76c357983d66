# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for API endpoint descriptors."""

from typing import Protocol, TypeVar, runtime_checkable

from ..types.endpoint import EndpointMetadata
from ..types.http import HttpRequest, HttpResponse

ResponseT_co = TypeVar("ResponseT_co", covariant=True)


@runtime_checkable
class EndpointProtocol(Protocol[ResponseT_co]):
    """
    Protocol for a typed API request.

    The dispatcher only needs the static metadata and the two conversions
    between the typed value and its wire form. The bundled endpoints in
    ``matrix_api_client.api`` implement this through the Endpoint base model.
    """

    @property
    def metadata(self) -> EndpointMetadata:
        """Static metadata of the operation."""
        ...

    def to_http_request(self) -> HttpRequest:
        """
        Build the wire request.

        Returns:
            HttpRequest whose url is the relative 'path?query' of the endpoint

        Raises:
            SerializationError: If the request cannot be encoded
        """
        ...

    def parse_response(self, response: HttpResponse) -> ResponseT_co:
        """
        Convert the wire response into the typed response.

        Raises:
            ProtocolError: If the homeserver reported an error status
            DeserializationError: If the body does not match the schema
        """
        ...

# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the Matrix API client.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from MatrixClientError, so every failure a dispatch
can produce is caught with a single except clause.
"""

from typing import Any


class MatrixClientError(Exception):
    """Base exception for all client errors.

    This is the root exception class for the library. Catch this exception
    to handle any error originating from a dispatch or a sync stream.

    Example:
        try:
            response = await client.request(whoami.Request())
        except MatrixClientError as e:
            logger.error(f"Request failed: {e}")
    """

    pass


class AuthenticationRequiredError(MatrixClientError):
    """Raised when an authenticated endpoint is called without a session.

    The check happens before anything is sent, so the homeserver is never
    contacted when this error is raised.

    Attributes:
        endpoint: Name of the endpoint that required authentication.
    """

    def __init__(self, endpoint: str | None = None):
        message = (
            "The queried endpoint requires authentication but was called "
            "with an anonymous client"
        )
        if endpoint:
            message = f"{message} (endpoint: {endpoint})"
        super().__init__(message)
        self.endpoint = endpoint


class UriParseError(MatrixClientError):
    """Raised when the merged request URL cannot be parsed.

    Usually caused by a malformed homeserver URL in the client configuration.

    Attributes:
        url: The string that failed to parse.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class TransportError(MatrixClientError):
    """Raised when the HTTP exchange itself fails.

    Covers refused or reset connections, TLS failures, timeouts and malformed
    HTTP responses. A well-formed response with an error status is not a
    transport error; see ProtocolError.

    Example:
        try:
            session = await client.log_in("@alice:example.org", "secret")
        except TransportError:
            logger.warning("Homeserver unreachable")
    """

    pass


class SerializationError(MatrixClientError):
    """Raised when a request cannot be converted into an HTTP request.

    Typical causes are query string or JSON body values that cannot be
    encoded.
    """

    pass


class DeserializationError(MatrixClientError):
    """Raised when a response body does not match the expected schema.

    Attributes:
        status_code: HTTP status of the response that failed to parse.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(MatrixClientError):
    """Raised when the homeserver answers with a non-success status.

    When the body is a standard Matrix error object, errcode and error are
    populated from it.

    Attributes:
        status_code: HTTP status code of the response.
        errcode: Matrix error code (e.g. 'M_FORBIDDEN'), if reported.
        error: Human readable error message from the server, if reported.
        body: Decoded JSON body, if the body was valid JSON.

    Example:
        try:
            await client.log_in("@alice:example.org", "wrong")
        except ProtocolError as e:
            if e.errcode == "M_FORBIDDEN":
                print("Bad credentials")
    """

    def __init__(
        self,
        status_code: int,
        errcode: str | None = None,
        error: str | None = None,
        body: Any | None = None,
    ):
        if errcode:
            message = f"Homeserver returned {status_code} {errcode}"
            if error:
                message = f"{message}: {error}"
        else:
            message = f"Homeserver returned HTTP {status_code}"
        super().__init__(message)
        self.status_code = status_code
        self.errcode = errcode
        self.error = error
        self.body = body


__all__ = [
    "AuthenticationRequiredError",
    "DeserializationError",
    "MatrixClientError",
    "ProtocolError",
    "SerializationError",
    "TransportError",
    "UriParseError",
]

"""
Shared fixtures for the unit test suite.

RecordingTransport is a TransportProtocol double that records every request,
replays queued responses (or raises queued exceptions), and tracks how many
calls are in flight at once.
"""

import asyncio
import json
from collections import deque
from typing import Any

import pytest

from matrix_api_client.dispatcher import RequestDispatcher
from matrix_api_client.session import Session, SessionStore
from matrix_api_client.types.http import HttpRequest, HttpResponse

HOMESERVER_URL = "https://matrix.example.org"
ACCESS_TOKEN = "syt_secret_token_123"


def json_response(status_code: int, payload: Any) -> HttpResponse:
    """Build an HttpResponse with a JSON body."""
    return HttpResponse(
        status_code=status_code,
        headers={"content-type": "application/json"},
        body=json.dumps(payload).encode("utf-8"),
    )


def sync_response(next_batch: str, **sections: Any) -> HttpResponse:
    """Build a successful sync response."""
    return json_response(200, {"next_batch": next_batch, **sections})


class RecordingTransport:
    """Transport double replaying queued responses in order."""

    def __init__(self, *responses: HttpResponse | BaseException) -> None:
        self.queue: deque[HttpResponse | BaseException] = deque(responses)
        self.requests: list[HttpRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0
        # When set, every call blocks until the event is set
        self.gate: asyncio.Event | None = None

    def push(self, *responses: HttpResponse | BaseException) -> None:
        self.queue.extend(responses)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def call(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            else:
                await asyncio.sleep(0)
            item = self.queue.popleft()
            if isinstance(item, BaseException):
                raise item
            return item
        finally:
            self.in_flight -= 1


@pytest.fixture
def transport():
    """Create an empty recording transport."""
    return RecordingTransport()


@pytest.fixture
def session():
    """Create a logged-in session."""
    return Session(
        access_token=ACCESS_TOKEN,
        device_id="DEVICEID",
        user_id="@alice:example.org",
    )


@pytest.fixture
def session_store():
    """Create an anonymous session store."""
    return SessionStore()


@pytest.fixture
def authed_store(session):
    """Create a session store holding a session."""
    return SessionStore(session)


@pytest.fixture
def dispatcher(transport, authed_store):
    """Create a dispatcher with a logged-in session."""
    return RequestDispatcher(
        homeserver_url=HOMESERVER_URL,
        transport=transport,
        session_store=authed_store,
    )


@pytest.fixture
def anonymous_dispatcher(transport, session_store):
    """Create a dispatcher without a session."""
    return RequestDispatcher(
        homeserver_url=HOMESERVER_URL,
        transport=transport,
        session_store=session_store,
    )

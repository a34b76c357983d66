"""
Unit tests for the Client handle.

Tests cover:
- Login and registration storing the returned session
- Failed logins leaving the session untouched
- Shared state between clones
- Sync presence mapping
- Construction from ClientConfig and the create_client factory
- Lifecycle (aclose, async context manager)
"""

import copy
import json
from unittest.mock import AsyncMock, Mock, patch
from urllib.parse import parse_qs, urlsplit

import pytest

from matrix_api_client.api import WhoAmIRequest
from matrix_api_client.client import Client, create_client
from matrix_api_client.config import ClientConfig, TransportConfig
from matrix_api_client.exceptions import ProtocolError, TransportError
from matrix_api_client.observability.metrics import DispatchMetrics
from matrix_api_client.session import Session, SessionStore
from matrix_api_client.sync import CursorKind, SyncStream
from matrix_api_client.transport import HttpxTransport

from .conftest import HOMESERVER_URL, RecordingTransport, json_response, sync_response

CREDENTIALS = {
    "access_token": "new_token",
    "user_id": "@alice:example.org",
    "device_id": "NEWDEVICE",
}


@pytest.fixture
def client(transport, session_store):
    """Create an anonymous client."""
    return Client(transport, HOMESERVER_URL, session_store)


class TestLogIn:
    """Tests for Client.log_in."""

    @pytest.mark.asyncio
    async def test_stores_and_returns_session(self, client, transport):
        transport.push(json_response(200, CREDENTIALS))

        session = await client.log_in("@alice:example.org", "secret")

        assert session == Session(**CREDENTIALS)
        assert client.session() == session
        body = json.loads(transport.requests[0].body)
        assert body == {
            "type": "m.login.password",
            "user": "@alice:example.org",
            "password": "secret",
        }

    @pytest.mark.asyncio
    async def test_sends_device_id(self, client, transport):
        transport.push(json_response(200, CREDENTIALS))

        await client.log_in("alice", "secret", device_id="OLDDEVICE")

        assert json.loads(transport.requests[0].body)["device_id"] == "OLDDEVICE"

    @pytest.mark.asyncio
    async def test_failed_login_keeps_previous_session(self, transport, session):
        client = Client(transport, HOMESERVER_URL, SessionStore(session))
        transport.push(json_response(403, {"errcode": "M_FORBIDDEN"}))

        with pytest.raises(ProtocolError):
            await client.log_in("alice", "wrong")

        assert client.session() is session

    @pytest.mark.asyncio
    async def test_transport_failure_keeps_store_empty(self, client, transport):
        transport.push(TransportError("down"))

        with pytest.raises(TransportError):
            await client.log_in("alice", "secret")

        assert client.session() is None

    @pytest.mark.asyncio
    async def test_later_requests_use_new_token(self, client, transport):
        transport.push(
            json_response(200, CREDENTIALS),
            json_response(200, {"user_id": "@alice:example.org"}),
        )

        await client.log_in("alice", "secret")
        await client.request(WhoAmIRequest())

        query = parse_qs(urlsplit(transport.requests[1].url).query)
        assert query["access_token"] == ["new_token"]


class TestRegistration:
    """Tests for guest and user registration."""

    @pytest.mark.asyncio
    async def test_register_guest(self, client, transport):
        transport.push(json_response(200, CREDENTIALS))

        session = await client.register_guest()

        sent = transport.requests[0]
        assert parse_qs(urlsplit(sent.url).query) == {"kind": ["guest"]}
        assert sent.body == b"{}"
        assert client.session() == session

    @pytest.mark.asyncio
    async def test_register_user(self, client, transport):
        transport.push(json_response(200, CREDENTIALS))

        session = await client.register_user("alice", "secret")

        sent = transport.requests[0]
        assert parse_qs(urlsplit(sent.url).query) == {"kind": ["user"]}
        assert json.loads(sent.body) == {"username": "alice", "password": "secret"}
        assert client.session() == session

    @pytest.mark.asyncio
    async def test_register_user_without_username(self, client, transport):
        transport.push(json_response(200, CREDENTIALS))

        await client.register_user(None, "secret")

        assert json.loads(transport.requests[0].body) == {"password": "secret"}

    @pytest.mark.asyncio
    async def test_failed_registration_leaves_store_empty(self, client, transport):
        transport.push(json_response(400, {"errcode": "M_USER_IN_USE"}))

        with pytest.raises(ProtocolError):
            await client.register_user("alice", "secret")

        assert client.session() is None


class TestSharedState:
    """Tests for clones sharing one state."""

    @pytest.mark.asyncio
    async def test_clone_observes_login(self, client, transport):
        clone = client.clone()
        transport.push(json_response(200, CREDENTIALS))

        await client.log_in("alice", "secret")

        assert clone.session() == Session(**CREDENTIALS)

    def test_copy_shares_state(self, client, session):
        copied = copy.copy(client)
        deep = copy.deepcopy(client)
        client.session_store.set(session)

        assert copied.session() is session
        assert deep.session() is session
        assert copied.transport is client.transport
        assert copied.dispatcher is client.dispatcher

    def test_independent_clients_do_not_share_sessions(self, transport, session):
        first = Client(transport, HOMESERVER_URL, SessionStore())
        second = Client(transport, HOMESERVER_URL, SessionStore())
        first.session_store.set(session)

        assert second.session() is None


class TestSync:
    """Tests for Client.sync."""

    def test_returns_lazy_stream(self, client, transport):
        stream = client.sync()
        assert isinstance(stream, SyncStream)
        assert stream.cursor.kind is CursorKind.INITIAL_SYNC
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_set_presence_false_sends_offline(self, transport, session):
        client = Client(transport, HOMESERVER_URL, SessionStore(session))
        transport.push(sync_response("s1"))

        await client.sync(set_presence=False).pull()

        query = parse_qs(urlsplit(transport.requests[0].url).query)
        assert query["set_presence"] == ["offline"]

    @pytest.mark.asyncio
    async def test_set_presence_true_omits_parameter(self, transport, session):
        client = Client(transport, HOMESERVER_URL, SessionStore(session))
        transport.push(sync_response("s1"))

        await client.sync(since="s0").pull()

        query = parse_qs(urlsplit(transport.requests[0].url).query)
        assert "set_presence" not in query
        assert query["since"] == ["s0"]


class TestConstruction:
    """Tests for from_config and create_client."""

    def test_from_config_uses_httpx_transport(self, session):
        config = ClientConfig(
            homeserver_url=HOMESERVER_URL,
            session=session,
            transport=TransportConfig(verify_tls=False),
        )

        client = Client.from_config(config)

        assert isinstance(client.transport, HttpxTransport)
        assert client.transport.config.verify_tls is False
        assert client.session() is session
        assert client.homeserver_url == HOMESERVER_URL
        assert client.metrics is None

    def test_from_config_with_metrics(self):
        prometheus = Mock()
        config = ClientConfig(homeserver_url=HOMESERVER_URL, metrics_enabled=True)

        with patch(
            "matrix_api_client.client.get_prometheus_dispatch_metrics",
            return_value=prometheus,
        ):
            client = Client.from_config(config)

        assert isinstance(client.metrics, DispatchMetrics)
        assert client.metrics.prometheus is prometheus

    def test_create_client_with_transport(self, transport, session):
        client = create_client(HOMESERVER_URL, session=session, transport=transport)

        assert client.transport is transport
        assert client.session() is session

    def test_create_client_overrides_config(self):
        config = ClientConfig(homeserver_url="https://old.example.org")

        client = create_client("https://new.example.org", config=config)

        assert client.homeserver_url == "https://new.example.org"
        assert config.homeserver_url == "https://old.example.org"

    def test_create_client_revalidates_config(self, transport):
        config = ClientConfig(homeserver_url="https://old.example.org")

        with pytest.raises(ValueError, match="homeserver_url must not be empty"):
            create_client("", config=config, transport=transport)

    def test_create_client_keeps_config_session(self, transport, session):
        config = ClientConfig(homeserver_url="https://old.example.org", session=session)

        client = create_client("https://new.example.org", config=config, transport=transport)

        assert client.session() is session


class TestLifecycle:
    """Tests for closing the client."""

    @pytest.mark.asyncio
    async def test_aclose_closes_transport(self):
        transport = Mock()
        transport.aclose = AsyncMock()
        client = Client(transport, HOMESERVER_URL, SessionStore())

        await client.aclose()

        transport.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self):
        transport = Mock()
        transport.aclose = AsyncMock()

        async with Client(transport, HOMESERVER_URL, SessionStore()) as client:
            assert client.transport is transport

        transport.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_transport_without_aclose_is_fine(self):
        client = Client(RecordingTransport(), HOMESERVER_URL, SessionStore())
        await client.aclose()

    def test_repr_hides_session(self, transport, session):
        client = Client(transport, HOMESERVER_URL, SessionStore(session))
        assert session.access_token not in repr(client)

# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client handle for the Matrix client-server API.

A Client is a thin facade over one shared ClientState (homeserver URL,
transport, session store and the dispatcher built from them). Cloning a
client is cheap and every clone observes the same session changes.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from typing_extensions import Self

from .api.login import LoginRequest
from .api.register import RegisterRequest, RegistrationKind
from .api.sync_events import SetPresence, SyncFilter
from .config import ClientConfig
from .dispatcher import RequestDispatcher
from .observability.metrics import DispatchMetrics, get_prometheus_dispatch_metrics
from .protocols.endpoint import EndpointProtocol
from .protocols.transport import TransportProtocol
from .session import Session, SessionStore
from .sync import SyncStream
from .transport.httpx_transport import HttpxTransport

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT")


@dataclass(frozen=True)
class ClientState:
    """State shared by every clone of a Client."""

    homeserver_url: str
    transport: TransportProtocol
    session_store: SessionStore
    dispatcher: RequestDispatcher


class Client:
    """
    A client for the Matrix client-server API.

    The session store is an explicit constructor argument, so independent
    clients (and test doubles) never share sessions by accident.

    Example:
        client = Client(HttpxTransport(), "https://matrix.example.org", SessionStore())
        session = await client.log_in("@alice:example.org", "secret")
        # Persist session.to_dict() to restore it later

        async for response in client.sync():
            handle(response)
    """

    __slots__ = ("_state",)

    def __init__(
        self,
        transport: TransportProtocol,
        homeserver_url: str,
        session_store: SessionStore,
        metrics: DispatchMetrics | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            transport: Object satisfying TransportProtocol
            homeserver_url: Base URL of the homeserver
            session_store: Store for the current session; seed it with a
                persisted session to skip logging in
            metrics: Optional metrics recorder for dispatches and syncs
        """
        self._state = ClientState(
            homeserver_url=homeserver_url,
            transport=transport,
            session_store=session_store,
            dispatcher=RequestDispatcher(
                homeserver_url=homeserver_url,
                transport=transport,
                session_store=session_store,
                metrics=metrics,
            ),
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> "Client":
        """
        Build a client with the default httpx transport.

        Args:
            config: Client configuration

        Returns:
            Client whose session store holds config.session, if any
        """
        metrics = None
        if config.metrics_enabled:
            metrics = DispatchMetrics(prometheus=get_prometheus_dispatch_metrics())

        return cls(
            transport=HttpxTransport(config.transport),
            homeserver_url=config.homeserver_url,
            session_store=SessionStore(config.session),
            metrics=metrics,
        )

    def clone(self) -> "Client":
        """Return a new handle sharing this client's state."""
        other = object.__new__(type(self))
        other._state = self._state
        return other

    def __copy__(self) -> "Client":
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> "Client":
        # The shared state is the point of a handle; never duplicate it.
        return self.clone()

    def __repr__(self) -> str:
        return f"Client(homeserver_url={self._state.homeserver_url!r})"

    @property
    def homeserver_url(self) -> str:
        return self._state.homeserver_url

    @property
    def transport(self) -> TransportProtocol:
        return self._state.transport

    @property
    def session_store(self) -> SessionStore:
        return self._state.session_store

    @property
    def dispatcher(self) -> RequestDispatcher:
        return self._state.dispatcher

    @property
    def metrics(self) -> DispatchMetrics | None:
        return self._state.dispatcher.metrics

    def session(self) -> Session | None:
        """
        Get the current session, if any.

        Useful for persisting the session to restore it later.
        """
        return self._state.session_store.get()

    async def request(self, request: EndpointProtocol[ResponseT]) -> ResponseT:
        """Send a request to any endpoint and return its typed response."""
        return await self._state.dispatcher.dispatch(request)

    async def log_in(
        self,
        user: str,
        password: str,
        device_id: str | None = None,
    ) -> Session:
        """
        Log in with a username and password.

        Unlike dispatching LoginRequest directly, this stores the returned
        session in the client.

        Args:
            user: Fully qualified user ID or its local part
            password: The user's password
            device_id: Existing device to log in to; a new device is created
                when omitted

        Returns:
            The new session
        """
        response = await self.request(
            LoginRequest(user=user, password=password, device_id=device_id)
        )
        return self._store_session(response.access_token, response.device_id, response.user_id)

    async def register_guest(self) -> Session:
        """
        Register as a guest and store the returned session in the client.

        Returns:
            The new session
        """
        response = await self.request(RegisterRequest(kind=RegistrationKind.GUEST))
        return self._store_session(response.access_token, response.device_id, response.user_id)

    async def register_user(
        self,
        username: str | None,
        password: str,
    ) -> Session:
        """
        Register a new user and store the returned session in the client.

        Args:
            username: Local part of the desired user ID; the server generates
                one when omitted
            password: Password for the new account

        Returns:
            The new session
        """
        response = await self.request(
            RegisterRequest(
                kind=RegistrationKind.USER,
                username=username,
                password=password,
            )
        )
        return self._store_session(response.access_token, response.device_id, response.user_id)

    def sync(
        self,
        filter: SyncFilter | None = None,
        since: str | None = None,
        set_presence: bool = True,
        full_state: bool | None = None,
        timeout: int | None = None,
    ) -> SyncStream:
        """
        Repeated calls to the sync endpoint as an async iterator.

        If since is None, the first response may take a long time to arrive
        and be parsed, because it contains all events visible to the account
        over its whole lifetime.

        Args:
            filter: Filter ID or inline filter definition
            since: next_batch token to continue from
            set_presence: Whether to appear online while syncing; False sends
                set_presence=offline
            full_state: Request the full state of every room on each sync
            timeout: Server-side long-poll timeout in milliseconds

        Returns:
            A SyncStream; nothing is sent until it is iterated
        """
        return SyncStream(
            self._state.dispatcher,
            filter=filter,
            since=since,
            set_presence=None if set_presence else SetPresence.OFFLINE,
            full_state=full_state,
            timeout=timeout,
        )

    def _store_session(self, access_token: str, device_id: str, user_id: str) -> Session:
        session = Session(
            access_token=access_token,
            device_id=device_id,
            user_id=user_id,
        )
        self._state.session_store.set(session)
        return session

    async def aclose(self) -> None:
        """Close the transport, if it supports closing."""
        transport = self._state.transport
        if hasattr(transport, "aclose"):
            await transport.aclose()
            logger.debug(f"Closed transport for {self._state.homeserver_url}")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.aclose()


def create_client(
    homeserver_url: str,
    session: Session | None = None,
    config: ClientConfig | None = None,
    transport: TransportProtocol | None = None,
) -> Client:
    """
    Factory function to create a Client.

    Args:
        homeserver_url: Base URL of the homeserver
        session: Persisted session to restore
        config: Optional config; homeserver_url and session override its values
        transport: Optional transport; defaults to HttpxTransport built from
            config.transport

    Returns:
        Configured Client instance
    """
    if config is None:
        config = ClientConfig(homeserver_url=homeserver_url, session=session)
    else:
        config = dataclasses.replace(
            config,
            homeserver_url=homeserver_url,
            session=session if session is not None else config.session,
        )

    if transport is None:
        return Client.from_config(config)

    metrics = None
    if config.metrics_enabled:
        metrics = DispatchMetrics(prometheus=get_prometheus_dispatch_metrics())

    return Client(
        transport=transport,
        homeserver_url=config.homeserver_url,
        session_store=SessionStore(config.session),
        metrics=metrics,
    )


__all__ = ["Client", "ClientState", "create_client"]

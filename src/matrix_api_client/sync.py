# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Sync stream: repeated calls to the sync endpoint as an async iterator.

The stream is a small state machine driven by a SyncCursor:

    INITIAL_SYNC --ok--> SINCE(next_batch) --ok--> SINCE(next_batch) ...
         |                      |
         +-------error----------+------> ERRORED (terminal)

Each pull sends exactly one sync request and waits for it to finish before
the next pull may start. The first failure is handed to the consumer once,
after which the stream is exhausted for good. To continue after a failure,
build a new stream from the last successful next_batch token, e.g. with
SyncStream.resume().

Key Design Decisions:
- No client-side timeout: an initial sync (no since token) may take a long
  time and return a full snapshot of the account's state
- Single consumer: a pull while another pull is in flight raises RuntimeError,
  mirroring async generators
- Cancellation: cancelling a pull abandons the in-flight request and leaves
  the cursor unchanged, so the next pull repeats it
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum

from .api.sync_events import (
    SetPresence,
    SyncEventsRequest,
    SyncEventsResponse,
    SyncFilter,
)
from .dispatcher import RequestDispatcher
from .exceptions import MatrixClientError

logger = logging.getLogger(__name__)


class CursorKind(Enum):
    """Position of a sync stream."""

    INITIAL_SYNC = "initial_sync"
    SINCE = "since"
    ERRORED = "errored"


@dataclass(frozen=True)
class SyncCursor:
    """
    Current position of a sync stream.

    Attributes:
        kind: Which state the stream is in
        token: The since token for SINCE, None otherwise
    """

    kind: CursorKind
    token: str | None = None

    @classmethod
    def initial(cls) -> SyncCursor:
        return cls(CursorKind.INITIAL_SYNC)

    @classmethod
    def since(cls, token: str) -> SyncCursor:
        return cls(CursorKind.SINCE, token)

    @classmethod
    def errored(cls) -> SyncCursor:
        return cls(CursorKind.ERRORED)

    @classmethod
    def from_token(cls, since: str | None) -> SyncCursor:
        """Start from a stored token, or from scratch when there is none."""
        return cls.initial() if since is None else cls.since(since)

    @property
    def is_terminal(self) -> bool:
        return self.kind is CursorKind.ERRORED


@dataclass(frozen=True)
class SyncOutcome:
    """
    Result of one pull: either a response or the error that ended the stream.
    """

    response: SyncEventsResponse | None = None
    error: MatrixClientError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> SyncEventsResponse:
        """Return the response, or raise the error."""
        if self.error is not None:
            raise self.error
        if self.response is None:
            raise RuntimeError("SyncOutcome holds neither a response nor an error")
        return self.response


class SyncStream(AsyncIterator[SyncEventsResponse]):
    """
    Async iterator over sync responses.

    Usage:
        stream = client.sync(since=stored_token)
        try:
            async for response in stream:
                handle(response)
                stored_token = response.next_batch
        except MatrixClientError:
            stream = stream.resume()  # continue from the last good token

    The explicit pull() interface returns the error as a value instead of
    raising it:

        while (outcome := await stream.pull()) is not None:
            if not outcome.ok:
                log(outcome.error)
    """

    __slots__ = (
        "_cursor",
        "_dispatcher",
        "_in_flight",
        "_next_batch",
        "_request",
    )

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        *,
        filter: SyncFilter | None = None,
        since: str | None = None,
        set_presence: SetPresence | None = None,
        full_state: bool | None = None,
        timeout: int | None = None,
    ) -> None:
        """
        Initialize the sync stream.

        Args:
            dispatcher: Dispatcher used for every sync request
            filter: Filter ID or inline filter definition
            since: Token to start from; None performs an initial sync
            set_presence: Presence to set while syncing (None keeps the
                server default, i.e. online)
            full_state: Request the full state of every room on each sync
            timeout: Server-side long-poll timeout in milliseconds
        """
        self._dispatcher = dispatcher
        self._request = SyncEventsRequest(
            filter=filter,
            full_state=full_state,
            set_presence=set_presence,
            timeout=timeout,
        )
        self._cursor = SyncCursor.from_token(since)
        self._next_batch = since
        self._in_flight = False

    @property
    def cursor(self) -> SyncCursor:
        return self._cursor

    @property
    def next_batch(self) -> str | None:
        """Token of the last successful response (or the starting token)."""
        return self._next_batch

    @property
    def is_exhausted(self) -> bool:
        return self._cursor.is_terminal

    async def pull(self) -> SyncOutcome | None:
        """
        Send the next sync request.

        Returns:
            SyncOutcome with the response, or with the error that terminated
            the stream. None once the stream is exhausted.

        Raises:
            RuntimeError: If another pull is still in flight
        """
        if self._in_flight:
            raise RuntimeError("SyncStream is already being polled")

        cursor = self._cursor
        if cursor.is_terminal:
            return None

        request = self._request.model_copy(update={"since": cursor.token})
        metrics = self._dispatcher.metrics

        self._in_flight = True
        try:
            response = await self._dispatcher.dispatch(request)
        except MatrixClientError as e:
            self._cursor = SyncCursor.errored()
            logger.warning(
                f"Sync stream stopped after error: {type(e).__name__}: {e}"
            )
            if metrics is not None:
                metrics.record_sync_failure()
            return SyncOutcome(error=e)
        finally:
            self._in_flight = False

        self._cursor = SyncCursor.since(response.next_batch)
        self._next_batch = response.next_batch
        logger.debug(
            f"Sync batch received ({'initial' if cursor.token is None else 'incremental'})"
        )
        if metrics is not None:
            metrics.record_sync_batch()
        return SyncOutcome(response=response)

    async def __anext__(self) -> SyncEventsResponse:
        outcome = await self.pull()
        if outcome is None:
            raise StopAsyncIteration
        return outcome.unwrap()

    def __aiter__(self) -> SyncStream:
        return self

    def resume(self) -> SyncStream:
        """
        Create a fresh stream with the same parameters, starting from the
        last successful next_batch token.
        """
        return SyncStream(
            self._dispatcher,
            filter=self._request.filter,
            since=self._next_batch,
            set_presence=self._request.set_presence,
            full_state=self._request.full_state,
            timeout=self._request.timeout,
        )


__all__ = [
    "CursorKind",
    "SyncCursor",
    "SyncOutcome",
    "SyncStream",
]

# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Authentication session and its thread-safe holder.

A Session is issued by login or registration and never mutated afterwards; a
new login replaces it wholesale. The SessionStore is the only mutable state a
client shares between concurrent dispatches.
"""

import logging
import threading
from typing import Any

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """
    A user session, containing an access token and information about the
    associated user account.

    The external shape used for persistence is exactly the three fields
    below, with no version field. Storage format is the caller's choice.

    Attributes:
        access_token: The access token used for this session
        device_id: ID of the device the session belongs to
        user_id: Fully qualified ID of the user the session belongs to
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    access_token: str
    device_id: str
    user_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dict for persistence by the caller."""
        return {
            "access_token": self.access_token,
            "device_id": self.device_id,
            "user_id": self.user_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        """Restore a session persisted with to_dict()."""
        return cls.model_validate(data)

    def __repr__(self) -> str:
        return f"Session(user_id={self.user_id!r}, device_id={self.device_id!r})"


class SessionStore:
    """
    Holder of at most one current session.

    Every read and write takes the same lock for the duration of a single
    attribute access, so concurrent dispatches never observe a torn value and
    the lock is never held across a network call. Sessions are immutable, so
    the instance handed out by get() is safe to share.

    Example:
        >>> store = SessionStore()
        >>> store.get() is None
        True
        >>> store.set(Session(access_token="abc", device_id="D1", user_id="@a:x"))
        >>> store.get().user_id
        '@a:x'
    """

    __slots__ = ("_lock", "_session")

    def __init__(self, session: Session | None = None) -> None:
        """
        Initialize the store.

        Args:
            session: Previously persisted session to restore, if any
        """
        self._lock = threading.Lock()
        self._session = session

    def get(self) -> Session | None:
        """Return the current session, or None when anonymous."""
        with self._lock:
            return self._session

    def set(self, session: Session) -> None:
        """Replace the current session."""
        with self._lock:
            self._session = session
        logger.info(
            f"Session set for {session.user_id} (device {session.device_id})"
        )

    def clear(self) -> None:
        """Forget the current session."""
        with self._lock:
            self._session = None
        logger.info("Session cleared")


__all__ = ["Session", "SessionStore"]

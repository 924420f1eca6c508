"""State of a connection, shared between threads."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any


class ConnectionState(Enum):
    """Where a connection is in its lifecycle."""

    INITIAL = "initial"
    SENT_PROTOCOL_HEADER = "sent_protocol_header"
    SENT_START_OK = "sent_start_ok"
    SENT_OPEN = "sent_open"
    CONNECTED = "connected"
    CLOSING = "closing"
    CLOSED = "closed"
    ERROR = "error"


class ConnectionStatus:
    """Thread-safe view of a connection's state, virtual host, user and blocking."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = ConnectionState.INITIAL
        self._context: Any = None
        self._vhost = "/"
        self._username = "guest"
        self._blocked = False

    @property
    def state(self) -> ConnectionState:
        with self._lock:
            return self._state

    @property
    def context(self) -> Any:
        """Data carried by the current state, such as a pending wait handle."""
        with self._lock:
            return self._context

    def set_state(self, state: ConnectionState, context: Any = None) -> None:
        with self._lock:
            self._state = state
            self._context = context

    @property
    def vhost(self) -> str:
        with self._lock:
            return self._vhost

    @vhost.setter
    def vhost(self, vhost: str) -> None:
        with self._lock:
            self._vhost = vhost

    @property
    def username(self) -> str:
        with self._lock:
            return self._username

    @username.setter
    def username(self, username: str) -> None:
        with self._lock:
            self._username = username

    @property
    def blocked(self) -> bool:
        with self._lock:
            return self._blocked

    def block(self) -> None:
        with self._lock:
            self._blocked = True

    def unblock(self) -> None:
        with self._lock:
            self._blocked = False

    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def closing(self) -> bool:
        return self.state is ConnectionState.CLOSING

    def closed(self) -> bool:
        return self.state is ConnectionState.CLOSED

    def errored(self) -> bool:
        return self.state is ConnectionState.ERROR
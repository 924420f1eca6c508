"""Messages the server sent back because they could not be routed."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any

from .message import BasicReturnMessage
from .wait import WaitHandle

logger = logging.getLogger(__name__)


class ReturnedMessages:
    """Assembles returned messages and wakes the publishers waiting for them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: BasicReturnMessage | None = None
        self._messages: list[BasicReturnMessage] = []
        self._waiters: deque[WaitHandle[Any]] = deque()

    def start_new_delivery(self, message: BasicReturnMessage) -> None:
        with self._lock:
            self._current = message

    def set_delivery_properties(self, properties: Any) -> None:
        with self._lock:
            if self._current is not None:
                self._current.delivery.properties = properties

    def new_delivery_complete(self) -> None:
        """Store the message in progress and finish the oldest waiter."""
        with self._lock:
            message, self._current = self._current, None
            if message is None:
                return
            logger.error("Server returned us a message: %r", message)
            self._messages.append(message)
            waiter = self._waiters.popleft() if self._waiters else None
        if waiter is not None:
            waiter.finish(None)

    def receive_delivery_content(self, data: bytes) -> None:
        with self._lock:
            if self._current is not None:
                self._current.delivery.receive_content(data)

    def drain(self) -> list[BasicReturnMessage]:
        """Return and forget every message returned so far."""
        with self._lock:
            messages, self._messages = self._messages, []
        return messages

    def register_waiter(self, waiter: WaitHandle[Any]) -> None:
        with self._lock:
            self._waiters.append(waiter)

    def __repr__(self) -> str:
        return "ReturnedMessages"
"""Holder of the callback run when a connection fails."""

from __future__ import annotations

import threading
from typing import Callable


class ErrorHandler:
    """Stores an optional callback and runs it on error."""

    def __init__(self) -> None:
        self._handler: Callable[[], None] | None = None
        self._lock = threading.Lock()

    def set_handler(self, handler: Callable[[], None]) -> None:
        with self._lock:
            self._handler = handler

    def on_error(self) -> None:
        """Run the registered callback, if any."""
        with self._lock:
            handler = self._handler
        if handler is not None:
            handler()

    def __repr__(self) -> str:
        return "ErrorHandler"
"""Thread-safe generator of increasing identifiers with optional wrap-around."""

from __future__ import annotations

import threading


class IdSequence:
    """Hands out identifiers in order, wrapping around below an optional maximum."""

    def __init__(self, allow_zero: bool = False) -> None:
        self._allow_zero = allow_zero
        self._max: int | None = None
        self._id = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        """Return the next identifier."""
        with self._lock:
            for _ in range(2):
                if not self._allow_zero and self._id == 0:
                    self._id += 1
                if self._max is None or self._id < self._max:
                    value = self._id
                    self._id += 1
                    return value
                self._id = 0
            raise ValueError(f"no identifier available below {self._max}")

    def set_max(self, maximum: int) -> None:
        """Limit identifiers to below ``maximum``; zero removes the limit."""
        with self._lock:
            self._max = None if maximum == 0 else maximum
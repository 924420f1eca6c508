"""One-shot result slots shared between a waiter and the code that completes it."""

from __future__ import annotations

import queue
import threading
from abc import ABC, abstractmethod
from typing import Any, Generic, Protocol, TypeVar

T = TypeVar("T")


class _Pending:
    def __repr__(self) -> str:
        return "PENDING"


PENDING: Any = _Pending()
"""Returned by ``try_wait`` when no result has arrived yet."""


class NotifyReady(Protocol):
    """Something to wake when a result becomes available."""

    def notify(self) -> None: ...


class Cancellable(ABC):
    """Something that can be finished early with an error."""

    @abstractmethod
    def cancel(self, error: BaseException) -> None:
        """Abort with ``error``."""


class _Slot:
    def __init__(self) -> None:
        self.results: queue.Queue[tuple[bool, Any]] = queue.Queue(maxsize=1)
        self.lock = threading.Lock()
        self.task: NotifyReady | None = None


def _unwrap(outcome: tuple[bool, Any]) -> Any:
    ok, payload = outcome
    if ok:
        return payload
    raise payload


class Wait(Generic[T]):
    """The receiving side of a one-shot result."""

    def __init__(self) -> None:
        self._slot = _Slot()

    @staticmethod
    def create() -> tuple[Wait[Any], WaitHandle[Any]]:
        """Return a new wait together with the handle that completes it."""
        wait: Wait[Any] = Wait()
        return wait, WaitHandle(wait._slot)

    def try_wait(self) -> Any:
        """Take the result if it is there, else return ``PENDING``; raise a stored error."""
        try:
            outcome = self._slot.results.get_nowait()
        except queue.Empty:
            return PENDING
        return _unwrap(outcome)

    def wait(self) -> T:
        """Block until the result arrives and return it, raising a stored error."""
        return _unwrap(self._slot.results.get())

    def subscribe(self, task: NotifyReady) -> None:
        """Register ``task`` to be notified once when the result arrives."""
        with self._slot.lock:
            self._slot.task = task

    def has_subscriber(self) -> bool:
        with self._slot.lock:
            return self._slot.task is not None

    def __repr__(self) -> str:
        return "Wait"


class WaitHandle(Cancellable, Generic[T]):
    """The completing side of a one-shot result.

    A result delivered while an earlier one is still unread is dropped.
    """

    def __init__(self, slot: _Slot) -> None:
        self._slot = slot

    def _deliver(self, outcome: tuple[bool, Any]) -> None:
        try:
            self._slot.results.put_nowait(outcome)
        except queue.Full:
            pass
        with self._slot.lock:
            task, self._slot.task = self._slot.task, None
        if task is not None:
            task.notify()

    def finish(self, value: T) -> None:
        """Complete with ``value``."""
        self._deliver((True, value))

    def error(self, error: BaseException) -> None:
        """Complete with ``error``."""
        self._deliver((False, error))

    def cancel(self, error: BaseException) -> None:
        self.error(error)

    def __repr__(self) -> str:
        return "WaitHandle"
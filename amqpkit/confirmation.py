"""Pending results of operations sent to the server."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from .wait import PENDING, NotifyReady, Wait

T = TypeVar("T")
M = TypeVar("M")


class Confirmation(Generic[T]):
    """The outcome of an operation, available once the server has answered."""

    def __init__(
        self,
        source: Wait[Any] | Confirmation[Any],
        transform: Callable[[Any], T] | None = None,
    ) -> None:
        self._source = source
        self._transform = transform

    @staticmethod
    def failed(error: BaseException) -> Confirmation[Any]:
        """Return a confirmation that is already completed with ``error``."""
        wait, handle = Wait.create()
        handle.error(error)
        return Confirmation(wait)

    def subscribe(self, task: NotifyReady) -> None:
        self._source.subscribe(task)

    def has_subscriber(self) -> bool:
        return self._source.has_subscriber()

    def try_wait(self) -> Any:
        """Return the result if ready, else ``PENDING``; raise a stored error."""
        result = self._source.try_wait()
        if result is PENDING or self._transform is None:
            return result
        return self._transform(result)

    def wait(self) -> T:
        """Block until the result is available and return it."""
        result = self._source.wait()
        if self._transform is None:
            return result
        return self._transform(result)

    def map(self, func: Callable[[T], M]) -> Confirmation[M]:
        """Return a confirmation whose result is ``func`` applied to this one's."""
        return Confirmation(self, func)

    def __repr__(self) -> str:
        return "Confirmation"
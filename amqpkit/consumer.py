"""Consumers and the delegates that receive their deliveries.

A delivery result is a :class:`Delivery`, ``None`` once the consumer has been
cancelled, or the :class:`AmqpError` that ended the consumer.
"""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, Union

from .errors import AmqpError
from .executor import Executor
from .message import Delivery
from .wait import PENDING, NotifyReady

logger = logging.getLogger(__name__)

DeliveryResult = Union[Delivery, None, AmqpError]


class ConsumerDelegate(ABC):
    """Receives the deliveries of a consumer."""

    @abstractmethod
    def on_new_delivery(self, delivery: DeliveryResult) -> None:
        """Handle a delivery, a cancellation (``None``) or an error."""

    def drop_prefetched_messages(self) -> None:
        """Forget messages received but not yet processed."""


class _CallableDelegate(ConsumerDelegate):
    def __init__(self, func: Callable[[DeliveryResult], None]) -> None:
        self._func = func

    def on_new_delivery(self, delivery: DeliveryResult) -> None:
        self._func(delivery)


class Consumer:
    """Collects deliveries for one consumer tag and hands them out."""

    def __init__(self, consumer_tag: str, executor: Executor) -> None:
        self.tag = consumer_tag
        self._executor = executor
        self._lock = threading.RLock()
        self._current: Delivery | None = None
        self._deliveries: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._task: NotifyReady | None = None
        self._delegate: ConsumerDelegate | None = None

    def set_delegate(
        self, delegate: ConsumerDelegate | Callable[[DeliveryResult], None]
    ) -> None:
        """Route deliveries to ``delegate``, first handing it the ones already queued."""
        if not isinstance(delegate, ConsumerDelegate):
            delegate = _CallableDelegate(delegate)
        with self._lock:
            while (delivery := self.next_delivery()) is not PENDING:
                delegate.on_new_delivery(delivery)
            self._delegate = delegate

    def start_new_delivery(self, delivery: Delivery) -> None:
        with self._lock:
            self._current = delivery

    def set_delivery_properties(self, properties: Any) -> None:
        with self._lock:
            if self._current is not None:
                self._current.properties = properties

    def receive_delivery_content(self, payload: bytes) -> None:
        with self._lock:
            if self._current is not None:
                self._current.receive_content(payload)

    def new_delivery_complete(self) -> None:
        """Hand the delivery in progress to the delegate or the queue."""
        with self._lock:
            delivery, self._current = self._current, None
            if delivery is not None:
                self._new_delivery(delivery)

    def _dispatch(self, result: DeliveryResult) -> None:
        delegate = self._delegate
        if delegate is not None:
            self._executor.execute(lambda: delegate.on_new_delivery(result))
        else:
            self._deliveries.put(result)

    def _new_delivery(self, delivery: Delivery) -> None:
        logger.debug("new_delivery; consumer_tag=%s", self.tag)
        self._dispatch(delivery)
        if self._task is not None:
            self._task.notify()

    def _drop_deliveries(self) -> None:
        while self.next_delivery() is not PENDING:
            pass

    def drop_prefetched_messages(self) -> None:
        with self._lock:
            logger.debug("drop_prefetched_messages; consumer_tag=%s", self.tag)
            delegate = self._delegate
            if delegate is not None:
                self._executor.execute(delegate.drop_prefetched_messages)
            self._drop_deliveries()

    def cancel(self) -> None:
        """Signal the end of the consumer and forget queued deliveries."""
        with self._lock:
            logger.debug("cancel; consumer_tag=%s", self.tag)
            self._dispatch(None)
            self._drop_deliveries()
            self._task = None

    def set_error(self, error: AmqpError) -> None:
        """Report ``error`` and then cancel the consumer."""
        with self._lock:
            logger.debug("set_error; consumer_tag=%s", self.tag)
            self._dispatch(error)
            self.cancel()

    def next_delivery(self) -> Any:
        """Take the next queued delivery result, or ``PENDING`` if there is none."""
        try:
            return self._deliveries.get_nowait()
        except queue.Empty:
            return PENDING

    def set_task(self, task: NotifyReady) -> None:
        with self._lock:
            self._task = task

    def has_task(self) -> bool:
        with self._lock:
            return self._task is not None

    def __iter__(self) -> Iterator[Delivery]:
        """Yield deliveries as they arrive, raising an error and stopping at cancellation."""
        while True:
            item = self._deliveries.get()
            if item is None:
                return
            if isinstance(item, BaseException):
                raise item
            yield item

    def __repr__(self) -> str:
        return f"Consumer({self.tag})"
"""Queues and the consumers and gets attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from .connection_status import ConnectionState
from .consumer import Consumer
from .errors import AmqpError, InvalidConnectionStateError
from .message import BasicGetMessage
from .wait import WaitHandle


def _call_all(actions: Iterable[Callable[[], None]]) -> None:
    """Run every action, then raise the first error any of them raised."""
    first: AmqpError | None = None
    for action in actions:
        try:
            action()
        except AmqpError as exc:
            if first is None:
                first = exc
    if first is not None:
        raise first


@dataclass
class Queue:
    """A declared queue as reported by the server."""

    name: str
    message_count: int = 0
    consumer_count: int = 0

    def __str__(self) -> str:
        return self.name


@dataclass
class QueueState:
    """Client-side bookkeeping of a queue: its consumers and a get in progress."""

    name: str
    consumers: dict[str, Consumer] = field(default_factory=dict)
    current_get_message: tuple[BasicGetMessage, WaitHandle[Any]] | None = None

    @staticmethod
    def from_queue(queue: Queue) -> QueueState:
        return QueueState(queue.name)

    def register_consumer(self, consumer_tag: str, consumer: Consumer) -> None:
        self.consumers[consumer_tag] = consumer

    def deregister_consumer(self, consumer_tag: str) -> None:
        """Remove and cancel the consumer with ``consumer_tag``, if there is one."""
        consumer = self.consumers.pop(consumer_tag, None)
        if consumer is not None:
            consumer.cancel()

    def get_consumer(self, consumer_tag: str) -> Consumer | None:
        return self.consumers.get(consumer_tag)

    def _drain(self) -> list[Consumer]:
        consumers = list(self.consumers.values())
        self.consumers.clear()
        return consumers

    def cancel_consumers(self) -> None:
        _call_all(consumer.cancel for consumer in self._drain())

    def error_consumers(self) -> None:
        _call_all(
            lambda consumer=consumer: consumer.set_error(
                InvalidConnectionStateError(ConnectionState.ERROR)
            )
            for consumer in self._drain()
        )

    def drop_prefetched_messages(self) -> None:
        _call_all(
            consumer.drop_prefetched_messages for consumer in self.consumers.values()
        )

    def start_new_delivery(
        self, message: BasicGetMessage, wait_handle: WaitHandle[Any]
    ) -> None:
        self.current_get_message = (message, wait_handle)

    def set_delivery_properties(self, properties: Any) -> None:
        if self.current_get_message is not None:
            self.current_get_message[0].delivery.properties = properties

    def receive_delivery_content(self, payload: bytes) -> None:
        if self.current_get_message is not None:
            self.current_get_message[0].delivery.receive_content(payload)

    def new_delivery_complete(self) -> None:
        """Complete the pending get with the message received."""
        if self.current_get_message is not None:
            message, wait_handle = self.current_get_message
            self.current_get_message = None
            wait_handle.finish(message)
"""Registry of the queues known to a channel."""

from __future__ import annotations

import threading
from typing import Any

from .consumer import Consumer
from .message import BasicGetMessage, Delivery
from .queue import QueueState, _call_all
from .wait import WaitHandle


class Queues:
    """Thread-safe mapping of queue names to their state."""

    def __init__(self) -> None:
        self._queues: dict[str, QueueState] = {}
        self._lock = threading.RLock()

    def register(self, queue: QueueState) -> None:
        with self._lock:
            self._queues[queue.name] = queue

    def deregister(self, name: str) -> None:
        with self._lock:
            self._queues.pop(name, None)

    def register_consumer(self, queue: str, consumer_tag: str, consumer: Consumer) -> None:
        with self._lock:
            state = self._queues.get(str(queue))
            if state is not None:
                state.register_consumer(consumer_tag, consumer)

    def deregister_consumer(self, consumer_tag: str) -> None:
        with self._lock:
            _call_all(
                lambda state=state: state.deregister_consumer(consumer_tag)
                for state in self._queues.values()
            )

    def drop_prefetched_messages(self) -> None:
        with self._lock:
            _call_all(state.drop_prefetched_messages for state in self._queues.values())

    def cancel_consumers(self) -> None:
        with self._lock:
            _call_all(state.cancel_consumers for state in self._queues.values())

    def error_consumers(self) -> None:
        with self._lock:
            _call_all(state.error_consumers for state in self._queues.values())

    def start_consumer_delivery(self, consumer_tag: str, message: Delivery) -> str | None:
        """Start ``message`` on the consumer with ``consumer_tag``; return its queue's name."""
        with self._lock:
            for state in self._queues.values():
                consumer = state.get_consumer(consumer_tag)
                if consumer is not None:
                    consumer.start_new_delivery(message)
                    return state.name
        return None

    def start_basic_get_delivery(
        self, queue: str, message: BasicGetMessage, wait_handle: WaitHandle[Any]
    ) -> None:
        with self._lock:
            state = self._queues.get(queue)
            if state is not None:
                state.start_new_delivery(message, wait_handle)

    def handle_content_header_frame(
        self, queue: str, consumer_tag: str | None, size: int, properties: Any
    ) -> None:
        """Apply a content header; an empty body completes the delivery at once."""
        with self._lock:
            state = self._queues.get(queue)
            if state is None:
                return
            if consumer_tag is not None:
                consumer = state.get_consumer(consumer_tag)
                if consumer is not None:
                    consumer.set_delivery_properties(properties)
                    if size == 0:
                        consumer.new_delivery_complete()
            else:
                state.set_delivery_properties(properties)
                if size == 0:
                    state.new_delivery_complete()

    def handle_body_frame(
        self,
        queue: str,
        consumer_tag: str | None,
        remaining_size: int,
        payload_size: int,
        payload: bytes,
    ) -> None:
        """Append a body chunk; the last chunk completes the delivery."""
        with self._lock:
            state = self._queues.get(queue)
            if state is None:
                return
            if consumer_tag is not None:
                consumer = state.get_consumer(consumer_tag)
                if consumer is not None:
                    consumer.receive_delivery_content(payload)
                    if remaining_size == payload_size:
                        consumer.new_delivery_complete()
            else:
                state.receive_delivery_content(payload)
                if remaining_size == payload_size:
                    state.new_delivery_complete()
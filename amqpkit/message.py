"""Messages received from the server."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Delivery:
    """A message delivered to a consumer or fetched with a get."""

    delivery_tag: int
    exchange: str
    routing_key: str
    redelivered: bool
    properties: Any = field(default_factory=dict)
    data: bytes = b""

    def receive_content(self, data: bytes) -> None:
        """Append a body chunk to the message data."""
        self.data += bytes(data)


@dataclass
class BasicGetMessage:
    """A message fetched with a get, with the count of messages left in the queue."""

    delivery: Delivery
    message_count: int


@dataclass
class BasicReturnMessage:
    """A published message that the server sent back as undeliverable."""

    delivery: Delivery
    reply_code: int
    reply_text: str
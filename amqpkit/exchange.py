"""Exchange types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class ExchangeKind:
    """The type of an exchange; ``DIRECT`` is the default."""

    value: str
    custom_kind: bool = False

    DIRECT: ClassVar[ExchangeKind]
    FANOUT: ClassVar[ExchangeKind]
    HEADERS: ClassVar[ExchangeKind]
    TOPIC: ClassVar[ExchangeKind]

    @staticmethod
    def custom(name: str) -> ExchangeKind:
        """Return a server-specific exchange type called ``name``."""
        return ExchangeKind(name, True)

    def kind(self) -> str:
        """Return the type name sent to the server."""
        return self.value


ExchangeKind.DIRECT = ExchangeKind("direct")
ExchangeKind.FANOUT = ExchangeKind("fanout")
ExchangeKind.HEADERS = ExchangeKind("headers")
ExchangeKind.TOPIC = ExchangeKind("topic")
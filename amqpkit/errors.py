"""Errors raised by the client."""

from __future__ import annotations

import errno
from enum import Enum
from typing import Any


def _describe(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name
    return repr(value)


class AmqpError(Exception):
    """Base class of every error the client raises."""

    def wouldblock(self) -> bool:
        """Return whether this error only means an I/O operation would block."""
        return False


class InvalidMethodError(AmqpError):
    """A protocol method arrived that the client does not accept."""

    def __init__(self, method: Any) -> None:
        self.method = method
        super().__init__(f"invalid protocol method: {method!r}")


class InvalidChannelError(AmqpError):
    """A channel identifier does not name a known channel."""

    def __init__(self, channel: int) -> None:
        self.channel = channel
        super().__init__(f"invalid channel: {channel}")


class ConnectionRefusedError(AmqpError):  # noqa: A001 - deliberate protocol-level name
    """The server refused the connection."""

    def __init__(self) -> None:
        super().__init__("connection refused")


class NotConnectedError(AmqpError):
    """The operation needs a connected channel or connection."""

    def __init__(self) -> None:
        super().__init__("not connected")


class UnexpectedReplyError(AmqpError):
    """The server sent a reply nobody was waiting for."""

    def __init__(self) -> None:
        super().__init__("unexpected reply")


class PreconditionFailedError(AmqpError):
    """A precondition of the operation did not hold."""

    def __init__(self) -> None:
        super().__init__("precondition failed")


class ChannelLimitReachedError(AmqpError):
    """No channel identifier is left on this connection."""

    def __init__(self) -> None:
        super().__init__(
            "The maximum number of channels for this connection has been reached"
        )


class InvalidChannelStateError(AmqpError):
    """The channel is in a state that does not allow the operation."""

    def __init__(self, state: Any) -> None:
        self.state = state
        super().__init__(f"invalid channel state: {_describe(state)}")


class InvalidConnectionStateError(AmqpError):
    """The connection is in a state that does not allow the operation."""

    def __init__(self, state: Any) -> None:
        self.state = state
        super().__init__(f"invalid connection state: {_describe(state)}")


class ParsingError(AmqpError):
    """Incoming bytes could not be parsed as a frame."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to parse: {detail}")


class SerialisationError(AmqpError):
    """A frame could not be serialised."""

    def __init__(self, detail: Any) -> None:
        self.detail = detail
        super().__init__(f"Failed to serialise: {detail!r}")
        if isinstance(detail, BaseException):
            self.__cause__ = detail


class AmqpIOError(AmqpError):
    """An operating-system level I/O error."""

    def __init__(self, error: OSError) -> None:
        self.error = error
        super().__init__(f"IO error: {error!r}")
        self.__cause__ = error

    def wouldblock(self) -> bool:
        if isinstance(self.error, BlockingIOError):
            return True
        return self.error.errno in (errno.EAGAIN, errno.EWOULDBLOCK)
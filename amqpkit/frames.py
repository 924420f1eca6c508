"""Outgoing frame queues and the replies expected for them."""

from __future__ import annotations

import logging
import threading
from collections import deque
from enum import Enum
from typing import Any, Callable

from .errors import InvalidChannelStateError
from .id_sequence import IdSequence
from .wait import Cancellable, Wait, WaitHandle

logger = logging.getLogger(__name__)

ExpectedReply = tuple[Any, Cancellable]


def _is_header_frame(frame: Any) -> bool:
    return bool(getattr(frame, "is_header", False))


class Priority(Enum):
    """How urgently a frame is sent; critical frames jump the queue."""

    NORMAL = "normal"
    CRITICAL = "critical"


class Frames:
    """Thread-safe queues of frames waiting to be written.

    Content header frames are always written right after the frame they
    belong to. ``is_header`` tells header frames apart; by default a frame
    is a header when it has a true ``is_header`` attribute.
    """

    def __init__(
        self,
        is_header: Callable[[Any], bool] = _is_header_frame,
        closed_state: Any = "closed",
    ) -> None:
        self._is_header = is_header
        self._closed_state = closed_state
        self._lock = threading.Lock()
        self._header_frames: deque[tuple[int, Any]] = deque()
        self._priority_frames: deque[tuple[int, Any]] = deque()
        self._frames: deque[tuple[int, Any]] = deque()
        self._low_prio_frames: deque[tuple[int, Any, Any]] = deque()
        self._expected_replies: dict[int, deque[ExpectedReply]] = {}
        self._outbox: dict[int, tuple[int, WaitHandle[Any]]] = {}
        self._send_id = IdSequence(allow_zero=False)

    def push(
        self,
        channel_id: int,
        priority: Priority,
        frame: Any,
        expected_reply: ExpectedReply | None = None,
    ) -> Wait[Any]:
        """Queue ``frame``; the returned wait completes once it has been sent."""
        with self._lock:
            if priority is Priority.CRITICAL:
                send_id = 0
                self._priority_frames.appendleft((send_id, frame))
            else:
                send_id = self._send_id.next()
                self._frames.append((send_id, frame))
            wait, handle = Wait.create()
            self._outbox[send_id] = (channel_id, handle)
            if expected_reply is not None:
                logger.debug(
                    "channel %s state is now waiting for %r", channel_id, expected_reply
                )
                self._expected_replies.setdefault(channel_id, deque()).append(
                    expected_reply
                )
            return wait

    def push_frames(self, channel_id: int, frames: list[tuple[Any, Any]]) -> Wait[Any]:
        """Queue low-priority frames, each with an optional header to follow it.

        The returned wait completes once the last frame has been sent.
        """
        with self._lock:
            send_id = self._send_id.next()
            wait, handle = Wait.create()
            *leading, last = frames if frames else [None]
            for frame, header in leading:
                self._low_prio_frames.append((0, frame, header))
            if last is not None:
                frame, header = last
                self._low_prio_frames.append((send_id, frame, header))
            else:
                handle.finish(None)
            self._outbox[send_id] = (channel_id, handle)
            return wait

    def retry(self, send_id: int, frame: Any) -> None:
        """Put back a frame that could not be written."""
        with self._lock:
            if self._is_header(frame):
                self._header_frames.appendleft((send_id, frame))
            else:
                self._priority_frames.append((send_id, frame))

    def pop(self, flow: bool) -> tuple[int, Any] | None:
        """Take the next ``(send_id, frame)`` to write, or ``None``.

        Low-priority frames are only taken when ``flow`` is true.
        """
        with self._lock:
            for pending in (self._header_frames, self._priority_frames, self._frames):
                if pending:
                    return pending.popleft()
            if flow and self._low_prio_frames:
                send_id, frame, header = self._low_prio_frames.popleft()
                if header is not None:
                    self._header_frames.append((send_id, header))
                    send_id = 0
                return send_id, frame
            return None

    def next_expected_reply(self, channel_id: int) -> Any:
        """Take the oldest reply expected on ``channel_id``, or ``None``."""
        with self._lock:
            replies = self._expected_replies.get(channel_id)
            if not replies:
                return None
            return replies.popleft()[0]

    def mark_sent(self, send_id: int) -> None:
        with self._lock:
            entry = self._outbox.pop(send_id, None)
        if entry is not None:
            entry[1].finish(None)

    def drop_pending(self) -> None:
        """Forget every queued frame, cancel expected replies and finish all waits."""
        with self._lock:
            self._header_frames.clear()
            self._priority_frames.clear()
            self._frames.clear()
            self._low_prio_frames.clear()
            replies = list(self._expected_replies.values())
            self._expected_replies.clear()
            handles = [handle for _, handle in self._outbox.values()]
            self._outbox.clear()
        for channel_replies in replies:
            self._cancel_expected_replies(channel_replies, self._closed_state)
        for handle in handles:
            handle.finish(None)

    def clear_expected_replies(self, channel_id: int, channel_state: Any) -> None:
        """Fail every wait and expected reply of ``channel_id`` with ``channel_state``."""
        with self._lock:
            failed = [
                handle
                for chan_id, handle in self._outbox.values()
                if chan_id == channel_id
            ]
            self._outbox = {
                send_id: entry
                for send_id, entry in self._outbox.items()
                if entry[0] != channel_id
            }
            replies = self._expected_replies.pop(channel_id, None)
        for handle in failed:
            handle.error(InvalidChannelStateError(channel_state))
        if replies is not None:
            self._cancel_expected_replies(replies, channel_state)

    @staticmethod
    def _cancel_expected_replies(replies: deque[ExpectedReply], channel_state: Any) -> None:
        for _, cancellable in replies:
            cancellable.cancel(InvalidChannelStateError(channel_state))

    def __repr__(self) -> str:
        return "Frames"
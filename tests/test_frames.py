from dataclasses import dataclass

import pytest

from amqpkit.errors import InvalidChannelStateError
from amqpkit.frames import Frames, Priority
from amqpkit.wait import PENDING, Wait


@dataclass(frozen=True)
class Frame:
    name: str
    is_header: bool = False


def test_normal_frame_completes_when_marked_sent():
    frames = Frames()
    wait = frames.push(1, Priority.NORMAL, Frame("a"))
    send_id, frame = frames.pop(False)
    assert frame == Frame("a")
    assert wait.try_wait() is PENDING
    frames.mark_sent(send_id)
    assert wait.try_wait() is None
    assert frames.pop(True) is None


def test_normal_send_ids_increase():
    frames = Frames()
    frames.push(1, Priority.NORMAL, Frame("a"))
    frames.push(1, Priority.NORMAL, Frame("b"))
    first, _ = frames.pop(False)
    second, _ = frames.pop(False)
    assert 0 < first < second


def test_critical_frames_go_first_newest_first():
    frames = Frames()
    frames.push(1, Priority.NORMAL, Frame("a"))
    frames.push(0, Priority.CRITICAL, Frame("b"))
    frames.push(0, Priority.CRITICAL, Frame("c"))
    popped = [frames.pop(False) for _ in range(3)]
    assert [f.name for _, f in popped] == ["c", "b", "a"]
    assert popped[0][0] == 0
    assert popped[1][0] == 0


def test_expected_replies_are_taken_in_order_per_channel():
    frames = Frames()
    _, first = Wait.create()
    _, second = Wait.create()
    frames.push(1, Priority.NORMAL, Frame("a"), ("reply-a", first))
    frames.push(1, Priority.NORMAL, Frame("b"), ("reply-b", second))
    assert frames.next_expected_reply(2) is None
    assert frames.next_expected_reply(1) == "reply-a"
    assert frames.next_expected_reply(1) == "reply-b"
    assert frames.next_expected_reply(1) is None


def test_push_frames_empty_is_finished_at_once():
    frames = Frames()
    wait = frames.push_frames(1, [])
    assert wait.try_wait() is None
    assert frames.pop(True) is None


def test_push_frames_needs_flow():
    frames = Frames()
    frames.push_frames(1, [(Frame("publish"), Frame("header", True))])
    assert frames.pop(False) is None
    assert frames.pop(True)[1] == Frame("publish")


def test_push_frames_headers_follow_their_frames():
    frames = Frames()
    wait = frames.push_frames(
        1,
        [
            (Frame("pub1"), Frame("hdr1", True)),
            (Frame("pub2"), Frame("hdr2", True)),
        ],
    )
    frames.push(1, Priority.NORMAL, Frame("normal"))
    order = []
    last_id = None
    while (item := frames.pop(True)) is not None:
        send_id, frame = item
        order.append(frame.name)
        if frame.name == "hdr2":
            last_id = send_id
        else:
            frames.mark_sent(send_id) if send_id and frame.name == "normal" else None
    assert order == ["normal", "pub1", "hdr1", "pub2", "hdr2"]
    assert wait.try_wait() is PENDING
    frames.mark_sent(last_id)
    assert wait.try_wait() is None


def test_retry_header_goes_first_and_others_to_priority_back():
    frames = Frames()
    frames.push(1, Priority.NORMAL, Frame("normal"))
    frames.push(0, Priority.CRITICAL, Frame("critical"))
    frames.retry(5, Frame("retried"))
    frames.retry(6, Frame("header", True))
    popped = [frames.pop(False) for _ in range(4)]
    assert popped[0] == (6, Frame("header", True))
    assert [f.name for _, f in popped[1:]] == ["critical", "retried", "normal"]


def test_drop_pending_finishes_and_cancels_everything():
    frames = Frames()
    sent = frames.push(1, Priority.NORMAL, Frame("a"))
    reply_wait, reply_handle = Wait.create()
    frames.push(2, Priority.NORMAL, Frame("b"), ("reply", reply_handle))
    frames.push_frames(1, [(Frame("c"), None)])
    frames.drop_pending()
    assert frames.pop(True) is None
    assert sent.try_wait() is None
    assert frames.next_expected_reply(2) is None
    with pytest.raises(InvalidChannelStateError) as info:
        reply_wait.wait()
    assert info.value.state == "closed"


def test_clear_expected_replies_only_touches_one_channel():
    frames = Frames()
    failed = frames.push(1, Priority.NORMAL, Frame("a"))
    kept = frames.push(2, Priority.NORMAL, Frame("b"))
    reply_wait, reply_handle = Wait.create()
    other_reply_wait, other_reply_handle = Wait.create()
    frames.push(1, Priority.NORMAL, Frame("c"), ("r1", reply_handle))
    frames.push(2, Priority.NORMAL, Frame("d"), ("r2", other_reply_handle))
    frames.clear_expected_replies(1, "error")
    with pytest.raises(InvalidChannelStateError):
        failed.wait()
    with pytest.raises(InvalidChannelStateError) as info:
        reply_wait.wait()
    assert info.value.state == "error"
    assert kept.try_wait() is PENDING
    assert other_reply_wait.try_wait() is PENDING
    assert frames.next_expected_reply(1) is None
    assert frames.next_expected_reply(2) == "r2"


def test_custom_header_predicate():
    frames = Frames(is_header=lambda frame: frame == "H")
    frames.push(1, Priority.NORMAL, "N")
    frames.retry(3, "H")
    assert frames.pop(False) == (3, "H")
    assert frames.pop(False)[1] == "N"
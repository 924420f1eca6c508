from amqpkit.message import BasicReturnMessage, Delivery
from amqpkit.returned_messages import ReturnedMessages
from amqpkit.wait import PENDING, Wait


def _message(routing_key="rk"):
    return BasicReturnMessage(
        delivery=Delivery(0, "ex", routing_key, False),
        reply_code=312,
        reply_text="NO_ROUTE",
    )


def test_full_delivery_is_stored_and_drained():
    returned = ReturnedMessages()
    returned.start_new_delivery(_message())
    returned.set_delivery_properties({"content_type": "text/plain"})
    returned.receive_delivery_content(b"Hello ")
    returned.receive_delivery_content(b"world!")
    returned.new_delivery_complete()
    messages = returned.drain()
    assert len(messages) == 1
    assert messages[0].delivery.data == b"Hello world!"
    assert messages[0].delivery.properties == {"content_type": "text/plain"}
    assert messages[0].reply_code == 312
    assert returned.drain() == []


def test_complete_without_message_does_nothing():
    returned = ReturnedMessages()
    wait, handle = Wait.create()
    returned.register_waiter(handle)
    returned.new_delivery_complete()
    assert returned.drain() == []
    assert wait.try_wait() is PENDING


def test_content_without_message_is_ignored():
    returned = ReturnedMessages()
    returned.receive_delivery_content(b"lost")
    returned.set_delivery_properties({"a": 1})
    returned.start_new_delivery(_message())
    returned.new_delivery_complete()
    [message] = returned.drain()
    assert message.delivery.data == b""
    assert message.delivery.properties == {}


def test_waiters_are_finished_in_order():
    returned = ReturnedMessages()
    first_wait, first = Wait.create()
    second_wait, second = Wait.create()
    returned.register_waiter(first)
    returned.register_waiter(second)
    returned.start_new_delivery(_message("a"))
    returned.new_delivery_complete()
    assert first_wait.try_wait() is None
    assert second_wait.try_wait() is PENDING
    returned.start_new_delivery(_message("b"))
    returned.new_delivery_complete()
    assert second_wait.try_wait() is None
    assert [m.delivery.routing_key for m in returned.drain()] == ["a", "b"]


def test_message_is_completed_only_once():
    returned = ReturnedMessages()
    returned.start_new_delivery(_message())
    returned.new_delivery_complete()
    returned.new_delivery_complete()
    assert len(returned.drain()) == 1
import pytest

from amqpkit.connection_status import ConnectionState, ConnectionStatus
from amqpkit.wait import Wait


def test_defaults():
    status = ConnectionStatus()
    assert status.state is ConnectionState.INITIAL
    assert status.vhost == "/"
    assert status.username == "guest"
    assert status.blocked is False


@pytest.mark.parametrize(
    ("state", "check"),
    [
        (ConnectionState.CONNECTED, "connected"),
        (ConnectionState.CLOSING, "closing"),
        (ConnectionState.CLOSED, "closed"),
        (ConnectionState.ERROR, "errored"),
    ],
)
def test_state_predicates(state, check):
    status = ConnectionStatus()
    status.set_state(state)
    results = {
        "connected": status.connected(),
        "closing": status.closing(),
        "closed": status.closed(),
        "errored": status.errored(),
    }
    assert [name for name, value in results.items() if value] == [check]


def test_initial_matches_no_predicate():
    status = ConnectionStatus()
    results = [
        status.connected(),
        status.closing(),
        status.closed(),
        status.errored(),
    ]
    assert results == [False, False, False, False]


def test_state_with_context():
    _, handle = Wait.create()
    status = ConnectionStatus()
    status.set_state(ConnectionState.SENT_OPEN, handle)
    assert status.state == ConnectionState.SENT_OPEN
    assert status.context is handle
    status.set_state(ConnectionState.CONNECTED)
    assert status.context is None


def test_block_unblock():
    status = ConnectionStatus()
    status.block()
    assert status.blocked is True
    status.unblock()
    assert status.blocked is False


def test_vhost_and_username_set():
    status = ConnectionStatus()
    status.vhost = "orders"
    status.username = "worker"
    assert status.vhost == "orders"
    assert status.username == "worker"
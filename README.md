# amqpkit

Client-side state for AMQP 0.9.1, aimed at RabbitMQ. The package holds what
a client keeps between the wire and the application. This covers pending
results, consumers and their deliveries, per-queue bookkeeping, returned
messages, and the queue of frames waiting to be written.

## Modules

- `amqpkit.wait`: `Wait` and `WaitHandle` make up a one-shot result slot.
  `Wait.create()` returns both of them. A handle completes the slot with
  `finish(value)` or `error(exc)`. `Wait.try_wait()` returns the sentinel
  `PENDING` while nothing has arrived. `Wait.wait()` blocks until a result
  comes. A stored error is raised by either call. `subscribe(task)` registers
  an object with a `notify()` method, and that object is woken once. A second
  result sent before the first has been read is dropped.
- `amqpkit.confirmation`: `Confirmation` wraps a `Wait` and offers
  `try_wait`, `wait`, `subscribe`, `has_subscriber` and `map(func)`.
  `Confirmation.failed(error)` returns a confirmation that has already failed.
- `amqpkit.consumer`: `Consumer` and `ConsumerDelegate`. A finished delivery
  goes one of two ways:
  - If a delegate is set, it goes to the delegate through an executor. A plain
    callable is also accepted as a delegate.
  - Otherwise it goes into an internal queue. You read that queue with
    `next_delivery()` (it returns `PENDING` when the queue is empty) or by
    iterating over the consumer. Iteration blocks, stops when the consumer is
    cancelled, and raises an error that was reported to the consumer.
- `amqpkit.message`: the dataclasses `Delivery`, `BasicGetMessage` and
  `BasicReturnMessage`.
- `amqpkit.queue`:
  - `Queue` is a declared queue: its name, message count and consumer count.
  - `QueueState` holds a queue's consumers and a get that is in progress.
- `amqpkit.queues`: `Queues` is a thread-safe registry of `QueueState`s.
  - It routes content header and body frames to the right consumer or pending
    get.
  - It completes a delivery when the body is empty or when the last chunk
    arrives.
- `amqpkit.returned_messages`: `ReturnedMessages` assembles messages that the
  server sent back. It finishes the oldest registered waiter for each one.
  `drain()` hands the collected messages out.
- `amqpkit.frames`: `Frames` and `Priority` schedule outgoing frames.
  - Critical frames jump the queue.
  - Content headers are written directly after the frame they follow.
  - Low-priority frames are held back unless `flow` is true.
  - `Frames` tracks the replies expected per channel and finishes a `Wait`
    once a frame is marked sent.
  - Frames are opaque objects. A frame counts as a header when it has a true
    `is_header` attribute, unless you pass your own `is_header` predicate.
- `amqpkit.connection_status`: `ConnectionState` (an enum) and the
  thread-safe `ConnectionStatus`. The status holds the state, context data
  attached to that state, the virtual host (default `/`), the user name
  (default `guest`) and a blocked flag.
- `amqpkit.connection_properties`: `ConnectionProperties` holds the
  mechanism (`PLAIN`), the locale (`en_US`), client properties, and an
  optional executor. Its `make_executor()` returns the configured executor or
  a new `DefaultExecutor`.
- `amqpkit.executor`: `Executor` and `DefaultExecutor`. `DefaultExecutor`
  keeps a pool of up to `max_threads` daemon threads that share one job
  queue.
- `amqpkit.exchange`: `ExchangeKind`, with `DIRECT`, `FANOUT`, `HEADERS`,
  `TOPIC` and `ExchangeKind.custom(name)`.
- `amqpkit.id_sequence`: `IdSequence`, a thread-safe counter. It skips zero
  unless `allow_zero` is true. It wraps around below a maximum that you set
  with `set_max`, and zero removes the limit.
- `amqpkit.error_handler`: `ErrorHandler`, which runs an optional callback
  when a connection fails.
- `amqpkit.errors`: exceptions rooted at `AmqpError`. Examples are
  `NotConnectedError`, `InvalidChannelStateError` and `AmqpIOError`.
  `AmqpIOError.wouldblock()` reports whether an I/O error only means that an
  operation would block.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from amqpkit.confirmation import Confirmation
from amqpkit.wait import PENDING, Wait

wait, handle = Wait.create()
confirmation = Confirmation(wait).map(lambda n: n * 2)

assert confirmation.try_wait() is PENDING   # nothing yet
handle.finish(21)
assert confirmation.wait() == 42
```

Errors travel the same way. After `handle.error(exc)`, `wait()` raises `exc`.

Collecting a delivery:

```python
from amqpkit.consumer import Consumer
from amqpkit.executor import DefaultExecutor
from amqpkit.message import Delivery

consumer = Consumer("consumer-tag", DefaultExecutor())
consumer.start_new_delivery(Delivery(1, "", "hello", False))
consumer.receive_delivery_content(b"Hello world!")
consumer.new_delivery_complete()

delivery = consumer.next_delivery()
assert delivery.data == b"Hello world!"
```

## What this package does not do

The package does not do any networking.

- It has no connection or channel object.
- It opens no sockets and runs no I/O loop.
- It sends no heartbeats.
- It does not encode or parse AMQP frames.
- It does not implement the protocol's methods.
- It offers no command-line program.

You supply the transport and the frame codec, and then drive these classes
from that code.
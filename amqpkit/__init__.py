"""Client-side AMQP 0.9.1 state: pending results, consumers, queues and frame scheduling."""

__version__ = "0.1.0"
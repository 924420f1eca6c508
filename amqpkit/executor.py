"""Executors that run consumer callbacks off the I/O thread."""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from typing import Callable

from .errors import AmqpIOError

logger = logging.getLogger(__name__)


class Executor(ABC):
    """Runs callables somewhere else."""

    @abstractmethod
    def execute(self, func: Callable[[], None]) -> None:
        """Schedule ``func`` to run."""


class DefaultExecutor(Executor):
    """A pool of up to ``max_threads`` worker threads fed from one job queue."""

    def __init__(self, max_threads: int = 1) -> None:
        self.max_threads = max_threads
        self._jobs: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()

    def _maybe_spawn_thread(self) -> None:
        with self._lock:
            ident = len(self._threads) + 1
            if ident > self.max_threads:
                return
            thread = threading.Thread(
                target=self._work, name=f"executor {ident}", daemon=True
            )
            try:
                thread.start()
            except RuntimeError as exc:
                raise AmqpIOError(OSError(str(exc))) from exc
            self._threads.append(thread)

    def _work(self) -> None:
        while True:
            job = self._jobs.get()
            try:
                job()
            except Exception:
                logger.exception("executor job failed")

    def execute(self, func: Callable[[], None]) -> None:
        self._maybe_spawn_thread()
        self._jobs.put(func)

    def __repr__(self) -> str:
        return f"DefaultExecutor(max_threads={self.max_threads})"
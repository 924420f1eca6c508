"""Options for opening a connection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .executor import DefaultExecutor, Executor


@dataclass
class ConnectionProperties:
    """Authentication, locale, client properties and callback execution settings."""

    mechanism: str = "PLAIN"
    locale: str = "en_US"
    client_properties: dict[str, Any] = field(default_factory=dict)
    executor: Executor | None = None
    max_executor_threads: int = 1

    def make_executor(self) -> Executor:
        """Return the configured executor, or a new default one."""
        if self.executor is not None:
            return self.executor
        return DefaultExecutor(self.max_executor_threads)
"""Port describing the bounded queue between producers and the renderer."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_console.domain.events import LogEntry


@runtime_checkable
class QueuePort(Protocol):
    """Bridge between producer threads and the single consumer worker."""

    def start(self) -> None:
        """Start the queue worker."""

    def stop(self, *, drain: bool = True) -> None:
        """Stop the queue worker, optionally draining queued entries."""

    def put(self, entry: LogEntry, *, wait: bool = False) -> bool:
        """Enqueue ``entry``; with ``wait`` block until the worker finished it."""


__all__ = ["QueuePort"]

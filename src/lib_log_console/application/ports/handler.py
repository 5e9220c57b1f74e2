"""Handler port describing how entries leave the facade.

Purpose
-------
Define the narrow contract the registry and the dispatch use case rely on, so
the console renderer (or a test double) can plug in without leaking
implementation details upstream.

Contents
--------
* :class:`HandlerPort` - runtime-checkable protocol with lifecycle methods and
  a single ``handle`` entry point.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_console.domain.events import LogEntry


@runtime_checkable
class HandlerPort(Protocol):
    """Consume log entries on behalf of the facade."""

    @property
    def running(self) -> bool:
        """Return ``True`` while the handler accepts entries."""

    def start(self) -> None:
        """Begin accepting entries."""

    def stop(self, *, drain: bool = True) -> None:
        """Stop accepting entries, optionally finishing queued work first."""

    def handle(self, entry: LogEntry, *, wait: bool = False) -> None:
        """Accept ``entry``; with ``wait`` return only once it is written."""


__all__ = ["HandlerPort"]

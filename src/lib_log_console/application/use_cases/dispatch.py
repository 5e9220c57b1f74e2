"""Use case delivering one entry to every handler registered for its level.

Purpose
-------
Keep the fan-out rule in one place: entries go to each handler of their level
in registration order, and halting levels (PANIC, FATAL) wait until every
handler has written the line before control returns to the caller.
"""

from __future__ import annotations

from typing import Callable

from lib_log_console.application.registry import HandlerRegistry
from lib_log_console.domain.events import LogEntry


DispatchCallable = Callable[[LogEntry], int]


def create_dispatch(registry: HandlerRegistry) -> DispatchCallable:
    """Return a callable routing entries through ``registry``.

    The callable returns the number of handlers that received the entry.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_console.domain.levels import LogLevel
    >>> dispatch = create_dispatch(HandlerRegistry())
    >>> dispatch(LogEntry(LogLevel.INFO, "nobody listens", datetime.now(timezone.utc)))
    0
    """

    def dispatch(entry: LogEntry) -> int:
        handlers = registry.handlers_for(entry.level)
        wait = entry.level.halts
        for handler in handlers:
            handler.handle(entry, wait=wait)
        return len(handlers)

    return dispatch


__all__ = ["DispatchCallable", "create_dispatch"]

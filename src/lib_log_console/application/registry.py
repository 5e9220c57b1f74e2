"""Explicit handler registry routing entries per level.

Purpose
-------
Replace process-global handler registration with an object the caller owns
and injects into :class:`~lib_log_console.application.logger.Logger`.

Contents
--------
* :class:`HandlerRegistry` - fixed table of handler lists indexed by
  :attr:`LogLevel.ordinal`.
"""

from __future__ import annotations

import logging
from threading import RLock

from lib_log_console.application.ports.handler import HandlerPort
from lib_log_console.domain.levels import ALL_LEVELS, LogLevel, coerce_level


logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Map each level to the handlers that receive its entries.

    Examples
    --------
    >>> registry = HandlerRegistry()
    >>> registry.handlers_for(LogLevel.INFO)
    ()
    """

    def __init__(self) -> None:
        self._table: list[tuple[HandlerPort, ...]] = [() for _ in ALL_LEVELS]
        self._lock = RLock()

    def register(self, handler: HandlerPort, *levels: LogLevel | str) -> None:
        """Attach ``handler`` to ``levels`` (all levels when none are given).

        Starts the handler when it is not running yet. Unknown levels raise
        before anything is registered.
        """

        resolved = tuple(coerce_level(level) for level in levels) or ALL_LEVELS
        with self._lock:
            if not handler.running:
                handler.start()
            for level in resolved:
                current = self._table[level.ordinal]
                if handler not in current:
                    self._table[level.ordinal] = current + (handler,)
        logger.debug("Registered %s for %s", type(handler).__name__, ", ".join(level.name for level in resolved))

    def handlers_for(self, level: LogLevel) -> tuple[HandlerPort, ...]:
        return self._table[level.ordinal]

    def handlers(self) -> tuple[HandlerPort, ...]:
        """Return every registered handler once, in registration order."""

        seen: list[HandlerPort] = []
        for row in self._table:
            for handler in row:
                if handler not in seen:
                    seen.append(handler)
        return tuple(seen)

    def clear(self) -> None:
        with self._lock:
            self._table = [() for _ in ALL_LEVELS]


__all__ = ["HandlerRegistry"]

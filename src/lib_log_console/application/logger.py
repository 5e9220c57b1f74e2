"""Minimal logging facade feeding the handler registry.

Purpose
-------
Turn level-method calls into :class:`LogEntry` values and hand them to the
dispatch use case. Field accumulation, trace spans and the panic/fatal
control-flow rules live here; rendering never does.

Contents
--------
* :class:`LogPanic` - raised by :meth:`Logger.panic` after the line is written.
* :class:`TraceSpan` - scoped timer emitting one TRACE entry on :meth:`end`.
* :class:`Logger` - immutable facade bound to a registry and a field set.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from types import TracebackType
from typing import Any, Iterable

from lib_log_console.adapters.clock import SystemClock
from lib_log_console.application.ports.clock import ClockPort
from lib_log_console.application.registry import HandlerRegistry
from lib_log_console.application.use_cases.dispatch import create_dispatch
from lib_log_console.domain.events import Field, LogEntry
from lib_log_console.domain.levels import LogLevel, coerce_level


class LogPanic(Exception):
    """Signal raised after a PANIC entry has been written by every handler."""

    def __init__(self, entry: LogEntry) -> None:
        super().__init__(entry.text())
        self.entry = entry


class TraceSpan:
    """Timed span closed by :meth:`end` or by leaving a ``with`` block.

    Examples
    --------
    >>> span = Logger(HandlerRegistry()).trace("load")
    >>> span.end().level.name
    'TRACE'
    >>> span.end() is None
    True
    """

    __slots__ = ("_logger", "_message", "_started", "_closed")

    def __init__(self, logger: "Logger", message: str, started: datetime) -> None:
        self._logger = logger
        self._message = message
        self._started = started
        self._closed = False

    @property
    def message(self) -> str:
        return self._message

    @property
    def started(self) -> datetime:
        return self._started

    def end(self) -> LogEntry | None:
        """Emit the TRACE entry once; later calls return ``None``."""

        if self._closed:
            return None
        self._closed = True
        finished = self._logger.clock.now()
        elapsed = max(finished - self._started, timedelta(0))
        entry = replace(self._logger._build(LogLevel.TRACE, self._message, timestamp=finished), duration=elapsed)
        self._logger.emit(entry)
        return entry

    def __enter__(self) -> "TraceSpan":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.end()


class Logger:
    """Build entries and route them through a :class:`HandlerRegistry`.

    ``*args`` passed to level methods are applied to the message with ``%``
    here, before the entry exists; handlers treat messages as opaque text.
    There is one method per level: ``info`` covers plain printing and
    ``panic`` covers every panic flavour, so no ``print``/``println`` style
    aliases exist, and arguments are never concatenated onto the message.
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        *,
        clock: ClockPort | None = None,
        fields: Iterable[Field] = (),
    ) -> None:
        self._registry = registry
        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._fields: tuple[Field, ...] = tuple(fields)
        self._dispatch = create_dispatch(registry)

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    @property
    def clock(self) -> ClockPort:
        return self._clock

    @property
    def fields(self) -> tuple[Field, ...]:
        return self._fields

    def with_fields(self, *fields: Field, **pairs: Any) -> "Logger":
        """Return a logger carrying ``fields`` and ``pairs`` after the current ones."""

        extra = tuple(fields) + tuple(Field(key, value) for key, value in pairs.items())
        return Logger(self._registry, clock=self._clock, fields=self._fields + extra)

    def emit(self, entry: LogEntry) -> LogEntry:
        self._dispatch(entry)
        return entry

    def log(self, level: LogLevel | str, message: str, *args: Any) -> LogEntry:
        """Emit ``message`` at ``level``; halting levels are not special here."""

        return self.emit(self._build(coerce_level(level), message, *args))

    def debug(self, message: str, *args: Any) -> LogEntry:
        return self.log(LogLevel.DEBUG, message, *args)

    def info(self, message: str, *args: Any) -> LogEntry:
        return self.log(LogLevel.INFO, message, *args)

    def notice(self, message: str, *args: Any) -> LogEntry:
        return self.log(LogLevel.NOTICE, message, *args)

    def warn(self, message: str, *args: Any) -> LogEntry:
        return self.log(LogLevel.WARN, message, *args)

    warning = warn

    def error(self, message: str, *args: Any) -> LogEntry:
        return self.log(LogLevel.ERROR, message, *args)

    def alert(self, message: str, *args: Any) -> LogEntry:
        return self.log(LogLevel.ALERT, message, *args)

    def panic(self, message: str, *args: Any) -> None:
        """Write a PANIC entry, then raise :class:`LogPanic` with its text."""

        entry = self.log(LogLevel.PANIC, message, *args)
        raise LogPanic(entry)

    def fatal(self, message: str, *args: Any) -> None:
        """Write a FATAL entry, then terminate via ``SystemExit(1)``."""

        self.log(LogLevel.FATAL, message, *args)
        raise SystemExit(1)

    def trace(self, message: str, *args: Any) -> TraceSpan:
        """Start a span; its TRACE entry is emitted when the span ends."""

        return TraceSpan(self, _render_message(message, args), self._clock.now())

    def _build(self, level: LogLevel, message: str, *args: Any, timestamp: datetime | None = None) -> LogEntry:
        return LogEntry(
            level=level,
            message=_render_message(message, args),
            timestamp=timestamp if timestamp is not None else self._clock.now(),
            fields=self._fields,
        )


def _render_message(message: str, args: tuple[Any, ...]) -> str:
    if not args:
        return str(message)
    return str(message) % args


__all__ = ["LogPanic", "Logger", "TraceSpan"]

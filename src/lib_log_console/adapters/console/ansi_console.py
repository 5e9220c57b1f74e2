"""Queue-backed console handler rendering entries as aligned ANSI lines.

Purpose
-------
Own the render configuration, the bounded entry queue and the single worker
that formats and writes every entry to the output stream.

Contents
--------
* :func:`detect_color_support` - Rich-based terminal capability probe.
* :class:`ConsoleHandler` - adapter implementing :class:`HandlerPort`.

System Role
-----------
Primary human-facing sink. Producers on any thread call :meth:`handle`; only
the queue worker touches the stream, so writes never interleave.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Callable, TextIO, TYPE_CHECKING

from rich.console import Console

from lib_log_console.adapters._formatting import RenderOptions, format_entry
from lib_log_console.adapters.clock import SystemClock
from lib_log_console.adapters.queue import QueueAdapter
from lib_log_console.application.ports.clock import ClockPort
from lib_log_console.application.ports.handler import HandlerPort
from lib_log_console.domain.colors import LevelColors
from lib_log_console.domain.events import LogEntry
from lib_log_console.domain.levels import LogLevel

if TYPE_CHECKING:
    from lib_log_console.config import ConsoleSettings


logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 3


def detect_color_support(stream: TextIO) -> bool:
    """Return ``True`` when ``stream`` is a colour-capable terminal.

    Honours ``NO_COLOR`` / ``FORCE_COLOR`` the same way Rich does.
    """

    console = Console(file=stream)
    return console.is_terminal and console.color_system is not None and not console.no_color


class ConsoleHandler(HandlerPort):
    """Render log entries to a text stream on a dedicated worker thread.

    Examples
    --------
    >>> from io import StringIO
    >>> clock = SystemClock()
    >>> buffer = StringIO()
    >>> handler = ConsoleHandler(buffer, color=False, clock=clock)
    >>> handler.use_mini_timestamp(True)
    >>> handler.start()
    >>> handler.handle(LogEntry(LogLevel.INFO, "ready", clock.now()), wait=True)
    >>> handler.stop()
    >>> buffer.getvalue()
    '  INFO[0000] ready\\n'
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        color: bool | None = None,
        clock: ClockPort | None = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        """Configure the handler; the mini-timestamp origin is taken now.

        Parameters
        ----------
        stream:
            Output stream, ``sys.stderr`` when omitted.
        color:
            Colour flag; ``None`` probes the stream with :func:`detect_color_support`.
        clock:
            Time source for the mini-timestamp origin.
        buffer_size:
            Capacity of the entry queue.
        diagnostic:
            Optional ``(name, payload)`` hook forwarded to the queue.
        """
        self._stream: TextIO = stream if stream is not None else sys.stderr
        resolved_color = detect_color_support(self._stream) if color is None else bool(color)
        self._options = RenderOptions(color=resolved_color)
        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._start: datetime = self._clock.now().astimezone(timezone.utc)
        self._diagnostic = diagnostic
        self._queue = self._build_queue(buffer_size)

    @classmethod
    def from_settings(
        cls,
        settings: "ConsoleSettings",
        *,
        stream: TextIO | None = None,
        clock: ClockPort | None = None,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> "ConsoleHandler":
        """Build a handler from resolved :class:`~lib_log_console.config.ConsoleSettings`."""

        handler = cls(
            stream,
            color=settings.color,
            clock=clock,
            buffer_size=settings.buffer_size,
            diagnostic=diagnostic,
        )
        handler.use_mini_timestamp(settings.mini_timestamp)
        handler.set_timestamp_format(settings.timestamp_format)
        handler.set_ansi_reset(settings.ansi_reset)
        for level, code in settings.level_colors.items():
            handler.set_level_color(level, code)
        return handler

    # configuration -----------------------------------------------------

    def set_writer(self, stream: TextIO) -> None:
        """Direct output to ``stream``."""
        self._stream = stream

    def display_color(self, enabled: bool) -> None:
        self._options.color = bool(enabled)

    def set_level_color(self, level: LogLevel | str, code: str) -> None:
        """Override the colour for ``level``; unknown levels raise immediately."""
        self._options.level_colors.set(level, code)

    def set_timestamp_format(self, fmt: str) -> None:
        if not fmt:
            raise ValueError("timestamp format must not be empty")
        self._options.timestamp_format = fmt

    def use_mini_timestamp(self, enabled: bool) -> None:
        self._options.mini_timestamp = bool(enabled)

    def set_ansi_reset(self, code: str) -> None:
        self._options.reset = code

    def set_buffer_size(self, size: int) -> None:
        """Resize the entry queue; only legal before :meth:`start`."""
        if self.running:
            raise RuntimeError("buffer size must be configured before the handler starts")
        self._queue = self._build_queue(size)

    @property
    def options(self) -> RenderOptions:
        return self._options

    @property
    def level_colors(self) -> LevelColors:
        return self._options.level_colors

    @property
    def buffer_size(self) -> int:
        return self._queue.maxsize

    @property
    def start_time(self) -> datetime:
        return self._start

    # lifecycle ---------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._queue.running

    def start(self) -> None:
        self._queue.start()
        logger.debug("Console renderer started (buffer=%d, color=%s)", self._queue.maxsize, self._options.color)

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        self._queue.stop(drain=drain, timeout=timeout)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every queued entry has been written."""
        return self._queue.wait_until_idle(timeout)

    def handle(self, entry: LogEntry, *, wait: bool = False) -> None:
        """Queue ``entry`` for rendering; ``wait`` returns after the write."""
        if not self.running:
            raise RuntimeError("ConsoleHandler is not running; register it or call start() first")
        self._queue.put(entry, wait=wait)

    def render(self, entry: LogEntry) -> str:
        """Return the line :meth:`handle` would write for ``entry``."""
        return format_entry(entry, self._options, self._start)

    def _write(self, entry: LogEntry) -> None:
        line = format_entry(entry, self._options, self._start)
        stream = self._stream
        stream.write(line)
        flush = getattr(stream, "flush", None)
        if flush is not None:
            flush()

    def _build_queue(self, size: int) -> QueueAdapter:
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ValueError("buffer size must be a positive integer")
        return QueueAdapter(worker=self._write, maxsize=size, diagnostic=self._diagnostic)


__all__ = ["ConsoleHandler", "DEFAULT_BUFFER_SIZE", "detect_color_support"]

"""Pure text layout for console log lines.

Why
---
The console renderer and the CLI preview must produce byte-identical lines for
the same entry and options. Keeping the layout in side-effect-free functions
makes that property easy to test and keeps the worker thread free of state.

Contents
--------
* :class:`RenderOptions` - mutable presentation settings owned by a handler.
* :func:`format_entry` - render one entry as a newline-terminated line.
* :func:`format_timestamp`, :func:`mini_timestamp`, :func:`format_duration`.

Layout
------
``<label>[<timestamp>] <message>`` and, when the entry carries fields or a
duration, the message left-justified to :data:`MESSAGE_WIDTH` columns followed
by one space and the ``key=value`` pairs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from lib_log_console.domain.colors import RESET, LevelColors
from lib_log_console.domain.events import Field, LogEntry


RFC3339 = "rfc3339"
#: Sentinel timestamp format rendering ISO-8601 with seconds and UTC offset.

MESSAGE_WIDTH = 25
#: Column width the message is padded to before fields start.

DURATION_KEY = "duration"


@dataclass(slots=True)
class RenderOptions:
    """Presentation settings read by :func:`format_entry`."""

    color: bool = False
    level_colors: LevelColors = field(default_factory=LevelColors)
    reset: str = RESET
    timestamp_format: str = RFC3339
    mini_timestamp: bool = False


def mini_timestamp(timestamp: datetime, start: datetime) -> str:
    """Return milliseconds elapsed since ``start`` as a zero-padded counter.

    Examples
    --------
    >>> from datetime import timezone
    >>> origin = datetime(2025, 1, 1, tzinfo=timezone.utc)
    >>> mini_timestamp(origin + timedelta(milliseconds=42), origin)
    '0042'
    >>> mini_timestamp(origin - timedelta(seconds=1), origin)
    '0000'
    """

    elapsed = timestamp - start
    millis = max(0, elapsed // timedelta(milliseconds=1))
    return f"{millis:04d}"


def format_timestamp(timestamp: datetime, fmt: str) -> str:
    """Render ``timestamp`` in local time using ``fmt`` (strftime or :data:`RFC3339`).

    The :data:`RFC3339` sentinel matches case-insensitively, so ``"RFC3339"``
    from configuration selects ISO-8601 as well.
    """

    local = timestamp.astimezone()
    if fmt.strip().lower() == RFC3339:
        return local.isoformat(timespec="seconds")
    return local.strftime(fmt)


def format_duration(duration: timedelta) -> str:
    """Render ``duration`` compactly (``0s``, ``750µs``, ``1.5ms``, ``2.25s``, ``1m30s``).

    Examples
    --------
    >>> format_duration(timedelta(milliseconds=1, microseconds=500))
    '1.5ms'
    >>> format_duration(timedelta(seconds=90))
    '1m30s'
    >>> format_duration(timedelta(seconds=119, microseconds=999_900))
    '2m0s'
    """

    micros = duration // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    if micros < 1_000:
        return f"{micros}µs"
    if micros < 1_000_000:
        return f"{_trim(micros, 1_000)}ms"
    # round once to whole milliseconds so the seconds part never reaches 60
    millis = (micros + 500) // 1_000
    if millis < 60_000:
        return f"{_trim(millis, 1_000)}s"
    minutes, millis = divmod(millis, 60_000)
    hours, minutes = divmod(minutes, 60)
    prefix = f"{hours}h" if hours else ""
    return f"{prefix}{minutes}m{_trim(millis, 1_000)}s"


def _trim(amount: int, unit: int) -> str:
    """Render ``amount / unit`` with at most three decimals, trailing zeros removed."""

    whole, fraction = divmod(amount, unit)
    if not fraction:
        return str(whole)
    return f"{whole}.{fraction:03d}".rstrip("0")


def _colorize(text: str, code: str, options: RenderOptions) -> str:
    return f"{code}{text}{options.reset}"


def _render_pairs(entry: LogEntry, options: RenderOptions) -> list[str]:
    pairs: list[Field] = []
    if entry.duration is not None:
        pairs.append(Field(DURATION_KEY, format_duration(entry.duration)))
    pairs.extend(entry.fields)
    if not options.color:
        return [f"{pair.key}={pair.value}" for pair in pairs]
    code = options.level_colors[entry.level]
    return [f"{_colorize(pair.key, code, options)}={pair.value}" for pair in pairs]


def format_entry(entry: LogEntry, options: RenderOptions, start: datetime) -> str:
    """Return the newline-terminated console line for ``entry``.

    Examples
    --------
    >>> from datetime import timezone
    >>> from lib_log_console.domain.events import F
    >>> from lib_log_console.domain.levels import LogLevel
    >>> origin = datetime(2025, 1, 1, tzinfo=timezone.utc)
    >>> opts = RenderOptions(mini_timestamp=True)
    >>> format_entry(LogEntry(LogLevel.DEBUG, "debug", origin), opts, origin)
    ' DEBUG[0000] debug\\n'
    >>> format_entry(LogEntry(LogLevel.INFO, "info", origin, (F("key", "value"),)), opts, origin)
    '  INFO[0000] info                      key=value\\n'
    """

    label = entry.level.label
    if options.color:
        label = _colorize(label, options.level_colors[entry.level], options)

    if options.mini_timestamp:
        stamp = mini_timestamp(entry.timestamp, start)
    else:
        stamp = format_timestamp(entry.timestamp, options.timestamp_format)

    pairs = _render_pairs(entry, options)
    if not pairs:
        return f"{label}[{stamp}] {entry.message}\n"
    return f"{label}[{stamp}] {entry.message:<{MESSAGE_WIDTH}} {' '.join(pairs)}\n"


__all__ = [
    "DURATION_KEY",
    "MESSAGE_WIDTH",
    "RFC3339",
    "RenderOptions",
    "format_duration",
    "format_entry",
    "format_timestamp",
    "mini_timestamp",
]

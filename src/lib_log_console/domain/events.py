"""Domain entry describing a structured log line.

Purpose
-------
Provide an immutable representation of a log entry travelling from the
facade through the queue into the console renderer.

Contents
--------
* :class:`Field` key/value pair and the :func:`F` shorthand.
* :class:`LogEntry` frozen dataclass with helper methods.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer so the facade, the queue and the formatter exchange
pure data objects only.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class Field:
    """Key/value pair attached to a log entry."""

    key: str
    value: Any

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise ValueError("field key must be a non-empty string")

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


def F(key: str, value: Any) -> Field:
    """Shorthand constructor for :class:`Field`.

    Examples
    --------
    >>> str(F("key", "value"))
    'key=value'
    """

    return Field(key, value)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry consumed by the console renderer.

    Attributes
    ----------
    level:
        :class:`LogLevel` severity associated with the entry.
    message:
        Final message text; placeholder substitution already happened.
    timestamp:
        Instant of the entry in timezone-aware UTC.
    fields:
        Ordered key/value pairs, insertion order preserved.
    duration:
        Elapsed time of a closed trace span, ``None`` otherwise.
    """

    level: LogLevel
    message: str
    timestamp: datetime
    fields: tuple[Field, ...] = field(default_factory=tuple)
    duration: timedelta | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.level, LogLevel):
            raise TypeError("level must be a LogLevel")
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "fields", tuple(self.fields))
        if self.duration is not None and self.duration < timedelta(0):
            raise ValueError("duration must not be negative")

    def with_fields(self, fields: Iterable[Field]) -> "LogEntry":
        """Return a copy with ``fields`` appended after the existing ones."""

        return replace(self, fields=self.fields + tuple(fields))

    def text(self) -> str:
        """Return the message followed by ``key=value`` pairs.

        Examples
        --------
        >>> entry = LogEntry(LogLevel.PANIC, "panic", datetime(2025, 1, 1, tzinfo=timezone.utc), (F("key", "value"),))
        >>> entry.text()
        'panic key=value'
        """

        if not self.fields:
            return self.message
        return " ".join([self.message, *(str(item) for item in self.fields)])


__all__ = ["F", "Field", "LogEntry"]

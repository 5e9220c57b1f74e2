"""Log level abstraction with fixed-width console labels.

Purpose
-------
Offer the closed, ordered set of severities understood by the console
renderer together with the presentation metadata the formatter needs.

Contents
--------
* :class:`LogLevel` enum with ordinals, labels and lookup helpers.
* :data:`ALL_LEVELS` tuple listing every member in declaration order.
* :data:`LABEL_WIDTH` constant for the right-aligned label column.

System Role
-----------
Shared by the domain tables (colours indexed by ordinal), the registry that
routes entries per level, and the formatter that renders the label column.
"""

from __future__ import annotations

from enum import Enum


LABEL_WIDTH = 6
#: Width of the level column; every label is right-aligned inside it.


class LogLevel(Enum):
    """Enumerated severities in their stable order."""

    DEBUG = 0
    INFO = 1
    NOTICE = 2
    WARN = 3
    ERROR = 4
    ALERT = 5
    PANIC = 6
    TRACE = 7
    FATAL = 8

    @property
    def ordinal(self) -> int:
        """Return the zero-based position used to index fixed-size tables."""

        return self.value

    @property
    def label(self) -> str:
        """Return the canonical name right-aligned to :data:`LABEL_WIDTH` columns.

        Examples
        --------
        >>> LogLevel.DEBUG.label
        ' DEBUG'
        >>> LogLevel.NOTICE.label
        'NOTICE'
        """

        return _LABEL_TABLE[self.value]

    @property
    def halts(self) -> bool:
        """Return ``True`` when emitting this level stops normal control flow."""

        return self in _HALTING

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve ``name`` case-insensitively, accepting ``warning`` for WARN."""

        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc


def coerce_level(level: "str | LogLevel") -> LogLevel:
    """Normalise level inputs (string or enum) into :class:`LogLevel`.

    Raises
    ------
    TypeError
        When ``level`` is neither a :class:`LogLevel` nor a string.
    ValueError
        When the string does not name a known level.

    Examples
    --------
    >>> coerce_level("warning") is LogLevel.WARN
    True
    >>> coerce_level(LogLevel.ERROR) is LogLevel.ERROR
    True
    """

    if isinstance(level, LogLevel):
        return level
    if isinstance(level, str):
        return LogLevel.from_name(level)
    raise TypeError(f"Expected LogLevel or level name, got {type(level).__name__}")


ALL_LEVELS: tuple[LogLevel, ...] = tuple(LogLevel)

_LABEL_TABLE: tuple[str, ...] = tuple(level.name.rjust(LABEL_WIDTH) for level in ALL_LEVELS)
_HALTING = frozenset({LogLevel.PANIC, LogLevel.FATAL})
_ALIASES = {"WARNING": "WARN", "CRITICAL": "ALERT"}


__all__ = ["ALL_LEVELS", "LABEL_WIDTH", "LogLevel", "coerce_level"]

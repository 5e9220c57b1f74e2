"""ANSI colour codes and the per-level colour table.

Purpose
-------
Provide the escape sequences used by the console renderer and a fixed-size
table mapping each :class:`LogLevel` to its colour.

Contents
--------
* Basic and bold (``LIGHT_*``) foreground codes plus text attributes.
* :data:`NAMED_COLORS` lookup used by configuration parsing.
* :func:`resolve_color` converting names or SGR parameters into sequences.
* :class:`LevelColors` table indexed by :attr:`LogLevel.ordinal`.

System Role
-----------
Lives in the domain layer so configuration (``config.py``) and the formatter
share one definition of the defaults.
"""

from __future__ import annotations

import re
from typing import Iterator, Mapping

from .levels import ALL_LEVELS, LogLevel, coerce_level


BLACK = "\x1b[30m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
MAGENTA = "\x1b[35m"
CYAN = "\x1b[36m"
WHITE = "\x1b[37m"

GRAY = "\x1b[30;1m"
LIGHT_RED = "\x1b[31;1m"
LIGHT_GREEN = "\x1b[32;1m"
LIGHT_YELLOW = "\x1b[33;1m"
LIGHT_BLUE = "\x1b[34;1m"
LIGHT_MAGENTA = "\x1b[35;1m"
LIGHT_CYAN = "\x1b[36;1m"
LIGHT_WHITE = "\x1b[37;1m"

UNDERSCORE = "\x1b[4m"
BLINK = "\x1b[5m"
INVERSE = "\x1b[7m"

RESET = "\x1b[0m"

NAMED_COLORS: Mapping[str, str] = {
    "black": BLACK,
    "red": RED,
    "green": GREEN,
    "yellow": YELLOW,
    "blue": BLUE,
    "magenta": MAGENTA,
    "cyan": CYAN,
    "white": WHITE,
    "gray": GRAY,
    "light_red": LIGHT_RED,
    "light_green": LIGHT_GREEN,
    "light_yellow": LIGHT_YELLOW,
    "light_blue": LIGHT_BLUE,
    "light_magenta": LIGHT_MAGENTA,
    "light_cyan": LIGHT_CYAN,
    "light_white": LIGHT_WHITE,
    "underscore": UNDERSCORE,
    "blink": BLINK,
    "inverse": INVERSE,
    "red_underline": RED + UNDERSCORE,
    "reset": RESET,
}

_DEFAULT_TABLE: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: GREEN,
    LogLevel.INFO: BLUE,
    LogLevel.NOTICE: LIGHT_CYAN,
    LogLevel.WARN: LIGHT_YELLOW,
    LogLevel.ERROR: LIGHT_RED,
    LogLevel.ALERT: RED + UNDERSCORE,
    LogLevel.PANIC: RED,
    LogLevel.TRACE: WHITE,
    LogLevel.FATAL: RED + UNDERSCORE,
}

_SGR_PARAMS = re.compile(r"^\d+(;\d+)*$")


def resolve_color(spec: str) -> str:
    """Translate a colour name, raw SGR parameters, or an escape sequence.

    Examples
    --------
    >>> resolve_color("light_green") == LIGHT_GREEN
    True
    >>> resolve_color("32;1") == LIGHT_GREEN
    True
    >>> resolve_color("\\x1b[35m") == MAGENTA
    True
    """

    candidate = spec.strip()
    if candidate.startswith("\x1b["):
        return candidate
    named = NAMED_COLORS.get(candidate.lower().replace("-", "_").replace(" ", "_"))
    if named is not None:
        return named
    if _SGR_PARAMS.match(candidate):
        return f"\x1b[{candidate}m"
    raise ValueError(f"Unknown colour: {spec!r}")


class LevelColors:
    """Fixed-size colour table indexed by level ordinal.

    Unknown keys are rejected when the table is configured, never looked up
    lazily while rendering.
    """

    __slots__ = ("_codes",)

    def __init__(self, overrides: Mapping[LogLevel | str, str] | None = None) -> None:
        self._codes: list[str] = [_DEFAULT_TABLE[level] for level in ALL_LEVELS]
        if overrides:
            for key, code in overrides.items():
                self.set(key, code)

    def __getitem__(self, level: LogLevel) -> str:
        return self._codes[level.ordinal]

    def __iter__(self) -> Iterator[tuple[LogLevel, str]]:
        return iter(zip(ALL_LEVELS, self._codes))

    def __len__(self) -> int:
        return len(self._codes)

    def set(self, level: LogLevel | str, code: str) -> None:
        """Install ``code`` for ``level``; fails fast on unknown levels."""

        resolved = coerce_level(level)
        if not isinstance(code, str):
            raise TypeError("colour code must be a string")
        self._codes[resolved.ordinal] = code


__all__ = [
    "BLACK",
    "BLINK",
    "BLUE",
    "CYAN",
    "GRAY",
    "GREEN",
    "INVERSE",
    "LIGHT_BLUE",
    "LIGHT_CYAN",
    "LIGHT_GREEN",
    "LIGHT_MAGENTA",
    "LIGHT_RED",
    "LIGHT_WHITE",
    "LIGHT_YELLOW",
    "LevelColors",
    "MAGENTA",
    "NAMED_COLORS",
    "RED",
    "RESET",
    "UNDERSCORE",
    "WHITE",
    "YELLOW",
    "resolve_color",
]

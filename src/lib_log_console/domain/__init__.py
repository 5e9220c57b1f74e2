"""Domain entities and value objects used by the console renderer."""

from __future__ import annotations

from .colors import RESET, LevelColors, resolve_color
from .events import F, Field, LogEntry
from .levels import ALL_LEVELS, LABEL_WIDTH, LogLevel, coerce_level

__all__ = [
    "ALL_LEVELS",
    "F",
    "Field",
    "LABEL_WIDTH",
    "LevelColors",
    "LogEntry",
    "LogLevel",
    "RESET",
    "coerce_level",
    "resolve_color",
]

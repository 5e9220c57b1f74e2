"""Public package surface of the console log renderer.

``ConsoleHandler`` renders entries; ``HandlerRegistry`` routes them per level;
``Logger`` is the thin facade producing them. Typical wiring::

    registry = HandlerRegistry()
    registry.register(ConsoleHandler(color=False))
    log = Logger(registry)
    log.with_fields(F("key", "value")).info("ready")
"""

from __future__ import annotations

from .adapters import ConsoleHandler, QueueAdapter, RenderOptions, format_entry
from .adapters._formatting import RFC3339
from .application.logger import Logger, LogPanic, TraceSpan
from .application.registry import HandlerRegistry
from .application.use_cases.shutdown import create_shutdown
from .config import ConsoleSettings, load_console_settings
from .domain import ALL_LEVELS, F, Field, LevelColors, LogEntry, LogLevel

__all__ = [
    "ALL_LEVELS",
    "ConsoleHandler",
    "ConsoleSettings",
    "F",
    "Field",
    "HandlerRegistry",
    "LevelColors",
    "LogEntry",
    "LogLevel",
    "LogPanic",
    "Logger",
    "QueueAdapter",
    "RFC3339",
    "RenderOptions",
    "TraceSpan",
    "create_shutdown",
    "format_entry",
    "load_console_settings",
]

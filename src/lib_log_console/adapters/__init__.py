"""Adapters implementing the application ports."""

from __future__ import annotations

from ._formatting import RFC3339, RenderOptions, format_entry
from .clock import SystemClock
from .console import ConsoleHandler, detect_color_support
from .queue import QueueAdapter

__all__ = [
    "ConsoleHandler",
    "QueueAdapter",
    "RFC3339",
    "RenderOptions",
    "SystemClock",
    "detect_color_support",
    "format_entry",
]

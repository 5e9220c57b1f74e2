"""Console adapters."""

from __future__ import annotations

from .ansi_console import ConsoleHandler, detect_color_support

__all__ = ["ConsoleHandler", "detect_color_support"]

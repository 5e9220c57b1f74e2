"""Shutdown orchestration for registered handlers.

Purpose
-------
Provide a unified shutdown routine that drains every handler queue so no
accepted entry is lost, then empties the registry.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from lib_log_console.application.registry import HandlerRegistry


def create_shutdown(registry: HandlerRegistry, *, drain: bool = True) -> Callable[[], Awaitable[None]]:
    """Return an async callable performing the shutdown sequence."""

    async def shutdown() -> None:
        """Stop each handler (draining by default) and clear the registry."""
        for handler in registry.handlers():
            await asyncio.to_thread(handler.stop, drain=drain)
        registry.clear()

    return shutdown


__all__ = ["create_shutdown"]

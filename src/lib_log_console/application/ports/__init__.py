"""Protocols the application layer depends on."""

from __future__ import annotations

from .clock import ClockPort
from .handler import HandlerPort
from .queue import QueuePort

__all__ = ["ClockPort", "HandlerPort", "QueuePort"]

"""Application use cases composed by the facade and the CLI."""

from __future__ import annotations

from .dispatch import create_dispatch
from .shutdown import create_shutdown

__all__ = ["create_dispatch", "create_shutdown"]

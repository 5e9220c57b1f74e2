"""System clock adapter stamping entries in timezone-aware UTC."""

from __future__ import annotations

from datetime import datetime, timezone

from lib_log_console.application.ports.clock import ClockPort


class SystemClock(ClockPort):
    """Concrete clock returning the current UTC time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


__all__ = ["SystemClock"]

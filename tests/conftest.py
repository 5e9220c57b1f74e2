from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from io import StringIO

import pytest

from lib_log_console.adapters.console import ConsoleHandler
from lib_log_console.application.logger import Logger
from lib_log_console.application.registry import HandlerRegistry


class FrozenClock:
    """Clock returning a fixed instant until advanced explicitly."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, **delta: float) -> None:
        self.instant = self.instant + timedelta(**delta)


def take(buffer: StringIO) -> str:
    """Return and clear everything written to ``buffer``."""

    value = buffer.getvalue()
    buffer.seek(0)
    buffer.truncate(0)
    return value


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def buffer() -> StringIO:
    return StringIO()


@pytest.fixture
def handler(buffer: StringIO, clock: FrozenClock) -> Iterator[ConsoleHandler]:
    console = ConsoleHandler(buffer, color=False, clock=clock)
    console.use_mini_timestamp(True)
    yield console
    if console.running:
        console.stop()


@pytest.fixture
def registry(handler: ConsoleHandler) -> HandlerRegistry:
    handlers = HandlerRegistry()
    handlers.register(handler)
    return handlers


@pytest.fixture
def log(registry: HandlerRegistry, clock: FrozenClock) -> Logger:
    return Logger(registry, clock=clock)

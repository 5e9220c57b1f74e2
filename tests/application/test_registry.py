from __future__ import annotations

import pytest

from lib_log_console.application.ports.handler import HandlerPort
from lib_log_console.application.registry import HandlerRegistry
from lib_log_console.domain.events import LogEntry
from lib_log_console.domain.levels import ALL_LEVELS, LogLevel
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


class RecordingHandler:
    def __init__(self) -> None:
        self.running = False
        self.starts = 0
        self.entries: list[tuple[LogEntry, bool]] = []

    def start(self) -> None:
        self.starts += 1
        self.running = True

    def stop(self, *, drain: bool = True) -> None:
        self.running = False

    def handle(self, entry: LogEntry, *, wait: bool = False) -> None:
        self.entries.append((entry, wait))


def test_recording_handler_satisfies_port() -> None:
    assert isinstance(RecordingHandler(), HandlerPort)


def test_register_without_levels_covers_every_level() -> None:
    registry = HandlerRegistry()
    handler = RecordingHandler()

    registry.register(handler)

    assert all(registry.handlers_for(level) == (handler,) for level in ALL_LEVELS)
    assert handler.starts == 1


def test_register_for_selected_levels_only() -> None:
    registry = HandlerRegistry()
    errors = RecordingHandler()

    registry.register(errors, LogLevel.ERROR, "alert")

    assert registry.handlers_for(LogLevel.ERROR) == (errors,)
    assert registry.handlers_for(LogLevel.ALERT) == (errors,)
    assert registry.handlers_for(LogLevel.INFO) == ()


def test_register_keeps_registration_order_and_ignores_duplicates() -> None:
    registry = HandlerRegistry()
    first, second = RecordingHandler(), RecordingHandler()

    registry.register(first)
    registry.register(second, LogLevel.INFO)
    registry.register(first, LogLevel.INFO)

    assert registry.handlers_for(LogLevel.INFO) == (first, second)
    assert registry.handlers() == (first, second)
    assert first.starts == 1


def test_register_rejects_unknown_levels_before_changing_anything() -> None:
    registry = HandlerRegistry()
    handler = RecordingHandler()

    with pytest.raises(ValueError, match="Unknown log level"):
        registry.register(handler, LogLevel.INFO, "verbose")

    assert registry.handlers() == ()
    assert handler.starts == 0


def test_clear_empties_every_level() -> None:
    registry = HandlerRegistry()
    registry.register(RecordingHandler())

    registry.clear()

    assert registry.handlers() == ()

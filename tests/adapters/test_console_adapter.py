from __future__ import annotations

import threading
from io import StringIO
from typing import Any

import pytest

from lib_log_console.adapters.console import ConsoleHandler, detect_color_support
from lib_log_console.config import ConsoleSettings
from lib_log_console.domain.colors import LIGHT_GREEN, RED
from lib_log_console.domain.events import F, LogEntry
from lib_log_console.domain.levels import LogLevel
from tests.conftest import FrozenClock, take
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


class BrokenStream:
    def write(self, text: str) -> int:
        raise OSError("disk full")


def entry_at(clock: FrozenClock, level: LogLevel, message: str, *fields: Any) -> LogEntry:
    return LogEntry(level, message, clock.now(), fields)


def test_handle_before_start_raises(handler: ConsoleHandler, clock: FrozenClock) -> None:
    with pytest.raises(RuntimeError, match="not running"):
        handler.handle(entry_at(clock, LogLevel.INFO, "early"))


def test_handler_writes_rendered_line(handler: ConsoleHandler, buffer: StringIO, clock: FrozenClock) -> None:
    handler.start()
    entry = entry_at(clock, LogLevel.INFO, "info", F("key", "value"))

    handler.handle(entry, wait=True)

    assert take(buffer) == "  INFO[0000] info                      key=value\n"
    assert handler.render(entry) == "  INFO[0000] info                      key=value\n"


def test_mini_timestamp_counts_from_handler_creation(handler: ConsoleHandler, buffer: StringIO, clock: FrozenClock) -> None:
    handler.start()
    clock.advance(milliseconds=42)
    handler.handle(entry_at(clock, LogLevel.DEBUG, "later"), wait=True)
    clock.advance(seconds=1)
    handler.handle(entry_at(clock, LogLevel.DEBUG, "much later"), wait=True)

    assert take(buffer) == " DEBUG[0042] later\n DEBUG[1042] much later\n"


def test_entries_are_written_in_submission_order(handler: ConsoleHandler, buffer: StringIO, clock: FrozenClock) -> None:
    handler.start()
    for index in range(25):
        handler.handle(entry_at(clock, LogLevel.INFO, f"line-{index}"))
    handler.stop()

    lines = take(buffer).splitlines()
    assert lines == [f"  INFO[0000] line-{index}" for index in range(25)]


def test_concurrent_producers_never_interleave_lines(handler: ConsoleHandler, buffer: StringIO, clock: FrozenClock) -> None:
    handler.start()

    def produce(name: str) -> None:
        for index in range(40):
            handler.handle(entry_at(clock, LogLevel.WARN, name, F("n", index)))

    threads = [threading.Thread(target=produce, args=(f"worker-{number}",)) for number in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    handler.stop()

    lines = take(buffer).splitlines()
    assert len(lines) == 200
    assert all(line.startswith("  WARN[0000] worker-") for line in lines)
    for number in range(5):
        mine = [line.rsplit("n=", 1)[1] for line in lines if f"worker-{number} " in line]
        assert mine == [str(index) for index in range(40)]


def test_setters_change_rendering(handler: ConsoleHandler, buffer: StringIO, clock: FrozenClock) -> None:
    handler.display_color(True)
    handler.set_level_color("debug", LIGHT_GREEN)
    handler.set_ansi_reset("\x1b[39m")
    handler.start()

    handler.handle(entry_at(clock, LogLevel.DEBUG, "debug", F("key", "value")), wait=True)

    assert take(buffer) == "\x1b[32;1m DEBUG\x1b[39m[0000] debug                     \x1b[32;1mkey\x1b[39m=value\n"


def test_calendar_timestamp_format(handler: ConsoleHandler, buffer: StringIO, clock: FrozenClock) -> None:
    handler.use_mini_timestamp(False)
    handler.set_timestamp_format("%Y")
    handler.start()

    handler.handle(entry_at(clock, LogLevel.NOTICE, "notice"), wait=True)

    year = clock.now().astimezone().strftime("%Y")
    assert take(buffer) == f"NOTICE[{year}] notice\n"


def test_invalid_configuration_is_rejected(handler: ConsoleHandler) -> None:
    with pytest.raises(ValueError, match="timestamp format"):
        handler.set_timestamp_format("")
    with pytest.raises(ValueError, match="Unknown log level"):
        handler.set_level_color("verbose", RED)
    with pytest.raises(ValueError, match="positive"):
        handler.set_buffer_size(0)
    with pytest.raises(ValueError, match="positive"):
        ConsoleHandler(StringIO(), color=False, buffer_size=True)  # type: ignore[arg-type]


def test_buffer_size_is_fixed_once_running(handler: ConsoleHandler) -> None:
    handler.set_buffer_size(10)
    assert handler.buffer_size == 10

    handler.start()
    with pytest.raises(RuntimeError, match="before the handler starts"):
        handler.set_buffer_size(5)
    assert handler.buffer_size == 10


def test_write_failures_are_reported_and_handler_keeps_running(buffer: StringIO, clock: FrozenClock) -> None:
    diagnostics: list[tuple[str, dict[str, Any]]] = []
    handler = ConsoleHandler(
        BrokenStream(),  # type: ignore[arg-type]
        color=False,
        clock=clock,
        diagnostic=lambda name, payload: diagnostics.append((name, payload)),
    )
    handler.use_mini_timestamp(True)
    handler.start()
    try:
        handler.handle(entry_at(clock, LogLevel.ERROR, "lost"), wait=True)
        handler.set_writer(buffer)
        handler.handle(entry_at(clock, LogLevel.ERROR, "kept"), wait=True)
    finally:
        handler.stop()

    assert [name for name, _ in diagnostics] == ["queue_worker_error"]
    assert "disk full" in diagnostics[0][1]["exception"]
    assert take(buffer) == " ERROR[0000] kept\n"


def test_flush_waits_for_pending_lines(handler: ConsoleHandler, buffer: StringIO, clock: FrozenClock) -> None:
    handler.start()
    for index in range(5):
        handler.handle(entry_at(clock, LogLevel.INFO, f"n{index}"))

    assert handler.flush(timeout=2.0) is True
    assert len(take(buffer).splitlines()) == 5


def test_from_settings_applies_every_option(buffer: StringIO, clock: FrozenClock) -> None:
    settings = ConsoleSettings(
        color=True,
        mini_timestamp=True,
        buffer_size=7,
        level_colors={LogLevel.INFO: RED},
        ansi_reset="\x1b[39m",
    )

    handler = ConsoleHandler.from_settings(settings, stream=buffer, clock=clock)

    assert handler.buffer_size == 7
    assert handler.options.color is True
    assert handler.options.mini_timestamp is True
    assert handler.level_colors[LogLevel.INFO] == RED
    assert handler.render(entry_at(clock, LogLevel.INFO, "x")) == "\x1b[31m  INFO\x1b[39m[0000] x\n"


def test_color_detection_for_plain_streams(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)
    stream = StringIO()
    assert detect_color_support(stream) is False
    assert ConsoleHandler(stream).options.color is False


def test_start_time_comes_from_clock(handler: ConsoleHandler, clock: FrozenClock) -> None:
    assert handler.start_time == clock.now()
    assert handler.running is False

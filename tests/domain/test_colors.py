from __future__ import annotations

import pytest

from lib_log_console.domain import colors
from lib_log_console.domain.colors import LevelColors, resolve_color
from lib_log_console.domain.levels import ALL_LEVELS, LogLevel
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.mark.parametrize(
    "level, code",
    [
        (LogLevel.DEBUG, "\x1b[32m"),
        (LogLevel.INFO, "\x1b[34m"),
        (LogLevel.NOTICE, "\x1b[36;1m"),
        (LogLevel.WARN, "\x1b[33;1m"),
        (LogLevel.ERROR, "\x1b[31;1m"),
        (LogLevel.ALERT, "\x1b[31m\x1b[4m"),
        (LogLevel.PANIC, "\x1b[31m"),
    ],
)
def test_default_level_colors(level: LogLevel, code: str) -> None:
    assert LevelColors()[level] == code


def test_table_has_one_slot_per_level() -> None:
    table = LevelColors()
    assert len(table) == len(ALL_LEVELS)
    assert [level for level, _ in table] == list(ALL_LEVELS)


def test_set_accepts_level_names_and_rejects_unknown_levels() -> None:
    table = LevelColors()
    table.set("debug", colors.LIGHT_GREEN)
    assert table[LogLevel.DEBUG] == "\x1b[32;1m"

    with pytest.raises(ValueError, match="Unknown log level"):
        table.set("verbose", colors.RED)
    with pytest.raises(TypeError):
        table.set(42, colors.RED)  # type: ignore[arg-type]


def test_overrides_apply_per_instance() -> None:
    overridden = LevelColors({LogLevel.INFO: colors.MAGENTA})

    assert overridden[LogLevel.INFO] == colors.MAGENTA
    assert LevelColors()[LogLevel.INFO] == colors.BLUE
    assert dict(overridden)[LogLevel.DEBUG] == colors.GREEN


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("light_green", "\x1b[32;1m"),
        ("Light-Green", "\x1b[32;1m"),
        ("red underline", "\x1b[31m\x1b[4m"),
        ("35", "\x1b[35m"),
        ("31;1", "\x1b[31;1m"),
        ("\x1b[7m", "\x1b[7m"),
    ],
)
def test_resolve_color_accepts_names_params_and_sequences(spec: str, expected: str) -> None:
    assert resolve_color(spec) == expected


def test_resolve_color_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown colour"):
        resolve_color("chartreuse")

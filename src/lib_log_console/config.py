"""Configuration helpers: ``.env`` loading and console settings resolution.

Purpose
-------
Translate environment variables (optionally seeded from a nearby ``.env``
file via python-dotenv) into a :class:`ConsoleSettings` value that
:meth:`ConsoleHandler.from_settings` consumes.

Contents
--------
* :data:`DOTENV_ENV_VAR`, :func:`should_use_dotenv`, :func:`enable_dotenv`.
* :class:`ConsoleSettings` and :func:`load_console_settings`.
* Parsing helpers for booleans, buffer sizes and ``LEVEL=colour`` lists.

System Role
-----------
Outermost layer. Environment values win over arguments supplied in code so
operators can restyle a deployed process without touching it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from lib_log_console.adapters._formatting import RFC3339
from lib_log_console.adapters.console.ansi_console import DEFAULT_BUFFER_SIZE
from lib_log_console.domain.colors import RESET, resolve_color
from lib_log_console.domain.levels import LogLevel, coerce_level


logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_CONSOLE_USE_DOTENV"

ENV_COLOR = "LOG_CONSOLE_COLOR"
ENV_MINI_TIMESTAMP = "LOG_CONSOLE_MINI_TIMESTAMP"
ENV_TIMESTAMP_FORMAT = "LOG_CONSOLE_TIMESTAMP_FORMAT"
ENV_BUFFER = "LOG_CONSOLE_BUFFER"
ENV_LEVEL_COLORS = "LOG_CONSOLE_LEVEL_COLORS"
ENV_ANSI_RESET = "LOG_CONSOLE_ANSI_RESET"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_loaded_dotenv: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether to load ``.env``; an explicit CLI flag wins over the env toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="1")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding real environment variables.

    Walks up from ``search_from`` (default: the current working directory).
    Returns the resolved path of the loaded file, or ``None`` when no file was
    found. Repeated calls reuse the first result.
    """

    global _loaded_dotenv
    if _loaded_dotenv is not None:
        return _loaded_dotenv

    if search_from is None:
        candidate = find_dotenv(usecwd=True)
    else:
        candidate = _find_upwards(Path(search_from))
    if not candidate:
        logger.debug("No .env file found")
        return None

    path = Path(candidate).resolve()
    load_dotenv(path, override=False)
    _loaded_dotenv = path
    logger.debug("Loaded environment from %s", path)
    return path


def _find_upwards(start: Path) -> str:
    directory = start.resolve()
    for folder in (directory, *directory.parents):
        target = folder / ".env"
        if target.is_file():
            return str(target)
    return ""


def _reset_dotenv_state_for_testing() -> None:
    global _loaded_dotenv
    _loaded_dotenv = None


@dataclass(frozen=True)
class ConsoleSettings:
    """Resolved console handler configuration."""

    color: bool | None = None
    mini_timestamp: bool = False
    timestamp_format: str = RFC3339
    buffer_size: int = DEFAULT_BUFFER_SIZE
    level_colors: Mapping[LogLevel, str] = field(default_factory=lambda: MappingProxyType({}))
    ansi_reset: str = RESET


def load_console_settings(
    *,
    color: bool | None = None,
    mini_timestamp: bool = False,
    timestamp_format: str = RFC3339,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    level_colors: Mapping[LogLevel | str, str] | None = None,
    ansi_reset: str = RESET,
    environ: Mapping[str, str] | None = None,
) -> ConsoleSettings:
    """Merge explicit arguments with environment overrides.

    Precedence for colour: ``LOG_CONSOLE_COLOR`` > ``NO_COLOR`` >
    ``FORCE_COLOR`` > ``color`` argument (``None`` = detect at handler build).

    Raises
    ------
    ValueError
        For unknown levels or colours, non-positive buffer sizes, and
        unparsable booleans.
    """

    env = os.environ if environ is None else environ

    resolved_color = color
    if env.get("FORCE_COLOR"):
        resolved_color = True
    if env.get("NO_COLOR"):
        resolved_color = False
    resolved_color = _env_bool(env, ENV_COLOR, resolved_color)

    resolved_mini = _env_bool(env, ENV_MINI_TIMESTAMP, mini_timestamp)
    resolved_format = env.get(ENV_TIMESTAMP_FORMAT) or timestamp_format
    resolved_buffer = _parse_buffer(env.get(ENV_BUFFER), buffer_size)

    colors: dict[LogLevel, str] = {}
    for key, value in (level_colors or {}).items():
        colors[coerce_level(key)] = resolve_color(value)
    for key, value in _parse_level_colors(env.get(ENV_LEVEL_COLORS)).items():
        colors[LogLevel.from_name(key)] = resolve_color(value)

    reset_raw = env.get(ENV_ANSI_RESET)
    resolved_reset = resolve_color(reset_raw) if reset_raw else ansi_reset

    return ConsoleSettings(
        color=resolved_color,
        mini_timestamp=bool(resolved_mini),
        timestamp_format=resolved_format,
        buffer_size=resolved_buffer,
        level_colors=MappingProxyType(colors),
        ansi_reset=resolved_reset,
    )


def _env_bool(env: Mapping[str, str], name: str, default: bool | None) -> bool | None:
    """Return the boolean value of ``name`` with fallback.

    Examples
    --------
    >>> _env_bool({"X": "on"}, "X", None)
    True
    >>> _env_bool({}, "X", False)
    False
    """
    value = env.get(name)
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")


def _parse_buffer(raw: str | None, fallback: int) -> int:
    if raw is None or not raw.strip():
        return fallback
    try:
        size = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_BUFFER} must be an integer, got {raw!r}") from exc
    if size < 1:
        raise ValueError(f"{ENV_BUFFER} must be positive, got {size}")
    return size


def _parse_level_colors(raw: str | None) -> dict[str, str]:
    """Convert ``LEVEL=colour`` comma-separated strings into a dictionary.

    Examples
    --------
    >>> _parse_level_colors('debug=light_green, ERROR = 35')
    {'DEBUG': 'light_green', 'ERROR': '35'}
    >>> _parse_level_colors(None)
    {}
    """
    if not raw:
        return {}
    result: dict[str, str] = {}
    for chunk in raw.split(","):
        if not chunk.strip():
            continue
        if "=" not in chunk:
            raise ValueError(f"{ENV_LEVEL_COLORS} entries must look like LEVEL=colour, got {chunk.strip()!r}")
        key, value = chunk.split("=", 1)
        key = key.strip().upper()
        value = value.strip()
        if not key or not value:
            continue
        result[key] = value
    return result


__all__ = [
    "ConsoleSettings",
    "DOTENV_ENV_VAR",
    "enable_dotenv",
    "load_console_settings",
    "should_use_dotenv",
]

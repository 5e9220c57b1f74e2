"""Click-based command line interface.

Purpose
-------
Give operators a quick way to preview the console renderer: the metadata
banner, a demo that runs every level through a real handler, and a palette
table of the configured colours.

Contents
--------
* :func:`cli` - root group handling ``--traceback`` and ``--use-dotenv``.
* ``info``, ``logdemo``, ``palette`` commands.
* :func:`main` - entry point wrapping :func:`lib_cli_exit_tools.run_cli`.
"""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Any, Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __init__conf__
from . import config as config_module
from .adapters.console import ConsoleHandler
from .application.logger import Logger, LogPanic
from .application.registry import HandlerRegistry
from .application.use_cases.shutdown import create_shutdown
from .domain.events import F
from .domain.levels import LogLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_DEMO_MESSAGES: tuple[tuple[LogLevel, str], ...] = (
    (LogLevel.DEBUG, "debug message"),
    (LogLevel.INFO, "information message"),
    (LogLevel.NOTICE, "notice message"),
    (LogLevel.WARN, "warning message"),
    (LogLevel.ERROR, "error message"),
    (LogLevel.ALERT, "alert message"),
)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load environment variables from the nearest .env (default: ${config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Root command storing global flags; prints the banner without a subcommand."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    env_toggle = os.getenv(config_module.DOTENV_ENV_VAR)
    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=env_toggle):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--color/--no-color", default=None, help="Force ANSI colours on or off (default: detect).")
@click.option(
    "--mini-timestamp/--calendar-timestamp",
    default=None,
    help="Render elapsed milliseconds instead of a calendar timestamp.",
)
@click.option("--timestamp-format", default=None, help="strftime pattern or 'rfc3339'.")
@click.option("--buffer-size", type=click.IntRange(min=1), default=None, help="Entry queue capacity.")
def cli_logdemo(
    color: bool | None,
    mini_timestamp: bool | None,
    timestamp_format: str | None,
    buffer_size: int | None,
) -> None:
    """Emit one entry per level, a trace span and a panic through a console handler."""

    overrides: dict[str, Any] = {"color": color}
    if mini_timestamp is not None:
        overrides["mini_timestamp"] = mini_timestamp
    if timestamp_format is not None:
        overrides["timestamp_format"] = timestamp_format
    if buffer_size is not None:
        overrides["buffer_size"] = buffer_size

    try:
        settings = config_module.load_console_settings(**overrides)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    emitted = _logdemo(settings)
    click.echo(f"logdemo emitted {emitted} entries")


def _logdemo(settings: config_module.ConsoleSettings) -> int:
    registry = HandlerRegistry()
    handler = ConsoleHandler.from_settings(settings, stream=sys.stdout)
    registry.register(handler)
    log = Logger(registry).with_fields(F("demo", "logdemo"))
    emitted = 0
    try:
        for level, message in _DEMO_MESSAGES:
            log.log(level, message)
            emitted += 1
        log.with_fields(step=2).info("fields stay aligned")
        emitted += 1
        with log.trace("traced operation"):
            pass
        emitted += 1
        try:
            log.panic("panic message")
        except LogPanic:
            emitted += 1
    finally:
        asyncio.run(create_shutdown(registry)())
    return emitted


@cli.command("palette", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_palette() -> None:
    """Show level labels with their configured colour codes."""

    try:
        settings = config_module.load_console_settings(color=True)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    handler = ConsoleHandler.from_settings(settings, stream=sys.stdout)

    table = Table(title="lib_log_console palette")
    table.add_column("Level")
    table.add_column("Ordinal", justify="right")
    table.add_column("Code")
    table.add_column("Sample")
    reset = handler.options.reset
    for level, code in handler.level_colors:
        table.add_row(level.name, str(level.ordinal), repr(code), Text.from_ansi(f"{code}{level.label}{reset}"))
    Console(file=sys.stdout).print(table)


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the CLI with error handling and return the exit code.

    Restores the traceback preferences of :mod:`lib_cli_exit_tools` afterwards
    so embedding hosts keep their own settings.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]

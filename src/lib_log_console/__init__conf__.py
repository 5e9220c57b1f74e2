"""Static package metadata surfaced by the CLI ``info`` command.

Keep the values in sync with ``pyproject.toml``.
"""

from __future__ import annotations

from typing import Callable

name = "lib_log_console"
title = "Queue-backed console log renderer with aligned fields and ANSI colours"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_console"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_console"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner through ``writer`` (``print`` when omitted)."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)


def summary_info() -> str:
    """Return the banner produced by :func:`print_info` as a string.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """

    lines: list[str] = []
    print_info(writer=lines.append)
    return "".join(lines)

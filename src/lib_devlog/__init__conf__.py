"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from typing import Callable

name = "lib_devlog"
title = "Compact, colourised dev-terminal rendering for structured log records"
version = "0.1.0"
shell_command = "lib_devlog"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Print the summary banner, or hand each line to ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_devlog:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    if writer is None:
        print("".join(lines), end="")
        return
    for line in lines:
        writer(line)

"""Rich-backed console adapter implementing :class:`ConsolePort`.

Purpose
-------
Write rendered blocks to the terminal one whole block at a time, and report
whether the underlying stream can display colour.

Contents
--------
* :class:`RichConsoleAdapter` - sink constructed by :func:`lib_devlog.init`.

System Role
-----------
Primary human-facing sink. Rich is used for terminal detection (TTY, colour
system, ``NO_COLOR``); the already styled text is written verbatim so Rich
never re-wraps or re-styles a line.
"""

from __future__ import annotations

import threading

from rich.console import Console

from lib_devlog.application.ports.console import ConsolePort
from lib_devlog.domain.rendered import RenderedBlock


class RichConsoleAdapter(ConsolePort):
    """Serialise rendered blocks onto a Rich console's stream."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        stderr: bool = True,
    ) -> None:
        """Configure the adapter with colour overrides.

        ``force_color`` treats the stream as a terminal even when it is not;
        ``no_color`` disables colour regardless of the terminal.
        """
        if console is not None:
            self._console = console
        else:
            self._console = Console(
                stderr=stderr,
                force_terminal=True if force_color else None,
                no_color=no_color,
                soft_wrap=True,
            )
        self._force_color = force_color
        self._no_color = no_color
        self._lock = threading.Lock()

    @property
    def console(self) -> Console:
        return self._console

    @property
    def supports_color(self) -> bool:
        """Return ``True`` when styled output should be emitted."""

        if self._no_color or self._console.no_color:
            return False
        if not (self._force_color or self._console.is_terminal):
            return False
        return self._console.color_system is not None

    @property
    def color_system(self) -> str | None:
        return self._console.color_system

    def write(self, block: RenderedBlock) -> None:
        """Write ``block`` followed by a newline without interleaving.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO())
        >>> adapter = RichConsoleAdapter(console=console)
        >>> adapter.write(RenderedBlock(("INFO  ready", "      id=1")))
        >>> console.file.getvalue()
        'INFO  ready\\n      id=1\\n'
        """
        text = block.text + "\n"
        with self._lock:
            stream = self._console.file
            stream.write(text)
            stream.flush()

    def flush(self) -> None:
        with self._lock:
            self._console.file.flush()


__all__ = ["RichConsoleAdapter"]

"""Console port describing terminal emission contracts.

Purpose
-------
Define the abstraction for sinks that receive rendered blocks, letting the
application layer depend on a narrow protocol.

Contents
--------
* :class:`ConsolePort` – runtime-checkable protocol with ``write`` and
  ``flush``.

System Role
-----------
The renderer never writes anywhere itself; the runtime hands each
:class:`~lib_devlog.domain.rendered.RenderedBlock` to a console port so Rich
(or a test double) can plug in without leaking upstream.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_devlog.domain.rendered import RenderedBlock


@runtime_checkable
class ConsolePort(Protocol):
    """Write rendered blocks to an interactive console."""

    supports_color: bool

    def write(self, block: RenderedBlock) -> None:
        """Write every line of ``block`` followed by a newline."""

    def flush(self) -> None:
        """Flush buffered output."""


__all__ = ["ConsolePort"]

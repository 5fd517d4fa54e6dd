"""Protocols the application layer depends on."""

from __future__ import annotations

from .console import ConsolePort
from .style import StylePort
from .time import ClockPort

__all__ = ["ClockPort", "ConsolePort", "StylePort"]

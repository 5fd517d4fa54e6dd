"""Rich-powered style emitter implementing :class:`StylePort`.

Purpose
-------
Turn Rich style strings (``"bold red"``, ``"#39ff14"``, ``"dim"``) into SGR
escape sequences for one colour system, or into nothing at all when colour is
disabled.

Contents
--------
* :class:`RichStyleEmitter` – :meth:`apply` / :meth:`strip` pair used by the
  record renderer.

System Role
-----------
Only place where escape sequences are produced. Each line of a styled span is
wrapped separately so no sequence is left open across a line break.
"""

from __future__ import annotations

import logging

from rich.color import ColorSystem
from rich.console import COLOR_SYSTEMS
from rich.errors import StyleSyntaxError
from rich.style import Style

from lib_devlog.application.ports.style import StylePort
from lib_devlog.domain.rendered import strip_styles

logger = logging.getLogger(__name__)


class RichStyleEmitter(StylePort):
    """Apply Rich styles to text spans.

    Examples
    --------
    >>> RichStyleEmitter(enabled=True).apply("WARN", "yellow")
    '\\x1b[33mWARN\\x1b[0m'
    >>> RichStyleEmitter(enabled=False).apply("WARN", "yellow")
    'WARN'
    """

    def __init__(self, *, enabled: bool, color_system: str | None = "standard") -> None:
        system = COLOR_SYSTEMS.get(color_system) if color_system else None
        self._color_system: ColorSystem | None = system
        self.enabled = bool(enabled) and system is not None
        self._invalid: set[str] = set()

    @property
    def color_system(self) -> str | None:
        for name, system in COLOR_SYSTEMS.items():
            if system is self._color_system:
                return name
        return None

    def apply(self, text: str, style: str) -> str:
        """Return ``text`` wrapped in ``style``; plain when disabled or invalid."""

        if not self.enabled or not text or not style:
            return text
        try:
            parsed = Style.parse(style)
        except StyleSyntaxError:
            if style not in self._invalid:
                self._invalid.add(style)
                logger.debug("ignoring invalid console style %r", style)
            return text
        return "\n".join(parsed.render(line, color_system=self._color_system) for line in text.split("\n"))

    def strip(self, text: str) -> str:
        return strip_styles(text)


__all__ = ["RichStyleEmitter"]

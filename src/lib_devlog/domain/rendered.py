"""Rendered output of one record."""

from __future__ import annotations

import re
from dataclasses import dataclass

_SGR_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def strip_styles(text: str) -> str:
    """Return ``text`` without SGR escape sequences.

    Examples
    --------
    >>> strip_styles("\\x1b[33mWARN\\x1b[0m ready")
    'WARN ready'
    """

    return _SGR_PATTERN.sub("", text)


@dataclass(slots=True, frozen=True)
class RenderedBlock:
    """Ordered lines produced for one record.

    Each line is self-contained: any style sequence opened on a line is reset
    on that same line.
    """

    lines: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))

    @property
    def text(self) -> str:
        """Return the lines joined by ``\\n`` without a trailing separator."""

        return "\n".join(self.lines)

    @property
    def plain(self) -> str:
        """Return :attr:`text` with styling removed."""

        return strip_styles(self.text)

    def __str__(self) -> str:
        return self.text


__all__ = ["RenderedBlock", "strip_styles"]

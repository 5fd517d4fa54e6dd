"""Log level abstraction and the level styler.

Purpose
-------
Offer the closed set of severities understood by the renderer together with
the fixed label/colour table used for the level badge.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
* :data:`DEFAULT_LEVEL_STYLES` mapping levels to Rich style strings.
* :func:`style_level` returning the ``(label, style)`` pair for a badge.

System Role
-----------
Used by records to normalise producer input and by the record renderer to
decorate the level badge. Unknown values fail towards visibility by being
treated as :attr:`LogLevel.ERROR`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping


class LogLevel(Enum):
    """Enumerated logging levels used throughout the system."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @property
    def severity(self) -> str:
        """Return the lowercase severity name."""

        return self.name.lower()

    @property
    def label(self) -> str:
        """Return the badge label shown on the console."""

        return self.name

    def to_python_level(self) -> int:
        """Return the :mod:`logging` level number matching this level."""

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`.

        Levels between the stdlib constants round down; anything at or above
        ``logging.ERROR`` (including ``CRITICAL``) maps to ``ERROR``.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.CRITICAL)
        <LogLevel.ERROR: 40>
        >>> LogLevel.from_python_level(15)
        <LogLevel.DEBUG: 10>
        """
        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.WARN
        if level >= logging.INFO:
            return cls.INFO
        if level >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE

    @classmethod
    def coerce(cls, value: Any) -> "LogLevel":
        """Return a level for any producer-supplied ``value``.

        Names are matched case-insensitively and exact numeric values are
        accepted. Everything else becomes :attr:`ERROR`.

        Examples
        --------
        >>> LogLevel.coerce("warn")
        <LogLevel.WARN: 30>
        >>> LogLevel.coerce("verbose")
        <LogLevel.ERROR: 40>
        >>> LogLevel.coerce(99)
        <LogLevel.ERROR: 40>
        """
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            try:
                return cls.from_name(value)
            except ValueError:
                return cls.ERROR
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return cls.ERROR
        return cls.ERROR


_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "ERROR",
    "FATAL": "ERROR",
    "ERR": "ERROR",
}

_PYTHON_LEVELS = {
    LogLevel.TRACE: 5,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

DEFAULT_LEVEL_STYLES: Mapping[LogLevel, str] = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.INFO: "green",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "red",
}
# Rich style strings applied to the level badge when no theme overrides them.


LEVEL_LABEL_WIDTH = max(len(level.label) for level in LogLevel)


def style_level(level: Any, styles: Mapping[LogLevel, str] | None = None) -> tuple[str, str]:
    """Return the badge label and style for ``level``.

    Examples
    --------
    >>> style_level("info")
    ('INFO', 'green')
    >>> style_level(object())
    ('ERROR', 'red')
    """

    resolved = LogLevel.coerce(level)
    table = styles if styles is not None else DEFAULT_LEVEL_STYLES
    return resolved.label, table.get(resolved, DEFAULT_LEVEL_STYLES[resolved])


__all__ = ["DEFAULT_LEVEL_STYLES", "LEVEL_LABEL_WIDTH", "LogLevel", "style_level"]

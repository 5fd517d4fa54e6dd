"""Console palettes for the level badge and the decorative spans.

Themes are keyed by name and map level names to Rich style strings. The
remaining roles (timestamp, breadcrumb, field keys, cause lines) share one
muted scheme across themes.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .levels import DEFAULT_LEVEL_STYLES, LogLevel


CONSOLE_STYLE_THEMES: dict[str, dict[str, str]] = {
    "classic": {level.name: style for level, style in DEFAULT_LEVEL_STYLES.items()},
    "dark": {
        "TRACE": "grey30",
        "DEBUG": "grey42",
        "INFO": "bright_white",
        "WARN": "bold gold3",
        "ERROR": "bold red3",
    },
    "neon": {
        "TRACE": "#7f7f7f",
        "DEBUG": "#00ffd5",
        "INFO": "#39ff14",
        "WARN": "#fff700",
        "ERROR": "#ff073a",
    },
    "pastel": {
        "TRACE": "grey62",
        "DEBUG": "aquamarine1",
        "INFO": "light_sky_blue1",
        "WARN": "khaki1",
        "ERROR": "light_salmon1",
    },
}
"""Built-in console palettes keyed by theme name."""


@dataclass(slots=True, frozen=True)
class Palette:
    """Resolved styles for every span the renderer decorates."""

    levels: Mapping[LogLevel, str]
    timestamp: str = "dim"
    breadcrumb: str = "dim"
    field_key: str = "cyan"
    field_separator: str = "dim"
    cause_marker: str = "red"
    cause_key: str = "bold red"
    cause_detail: str = "dim"


def normalise_styles(styles: Mapping[LogLevel | str, str] | None) -> dict[str, str]:
    """Return ``styles`` keyed by canonical level name.

    Raises :class:`ValueError` for keys that are not level names.

    Examples
    --------
    >>> normalise_styles({'warning': 'bold yellow', LogLevel.INFO: 'blue'})
    {'WARN': 'bold yellow', 'INFO': 'blue'}
    """
    if not styles:
        return {}
    normalised: dict[str, str] = {}
    for key, value in styles.items():
        level = key if isinstance(key, LogLevel) else LogLevel.from_name(str(key))
        normalised[level.name] = value
    return normalised


def resolve_palette(theme: str | None = None, styles: Mapping[LogLevel | str, str] | None = None) -> Palette:
    """Combine a named theme with per-level overrides into a :class:`Palette`."""

    key = (theme or "classic").strip().lower()
    try:
        base = CONSOLE_STYLE_THEMES[key]
    except KeyError as exc:
        raise ValueError(f"Unknown console theme: {theme!r}") from exc
    merged = {LogLevel.from_name(name): style for name, style in base.items()}
    for name, style in normalise_styles(styles).items():
        merged[LogLevel[name]] = style
    return Palette(levels=MappingProxyType(merged))


__all__ = ["CONSOLE_STYLE_THEMES", "Palette", "normalise_styles", "resolve_palette"]

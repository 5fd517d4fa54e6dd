"""Rendering options shared by every record the renderer formats.

Purpose
-------
Collect the switches that shape console output (colour, optional segments,
wrap width, theme) into one immutable value validated on construction.

Contents
--------
* :class:`RenderConfig` with :meth:`RenderConfig.replace` and
  :meth:`RenderConfig.palette`.
* :data:`DEFAULT_MAX_LINE_WIDTH` and :data:`DEFAULT_TIMESTAMP_FORMAT`.

System Role
-----------
Built by :mod:`lib_devlog.config` (environment) or by the builder, then
handed to :class:`~lib_devlog.application.use_cases.render.RecordRenderer`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from .palettes import CONSOLE_STYLE_THEMES, Palette, normalise_styles, resolve_palette
from .values import MAX_CAUSE_DEPTH, MAX_NESTING_DEPTH

DEFAULT_MAX_LINE_WIDTH = 120
DEFAULT_TIMESTAMP_FORMAT = "%H:%M:%S"


@dataclass(slots=True, frozen=True)
class RenderConfig:
    """Immutable rendering options.

    Attributes
    ----------
    color_enabled:
        ``True``/``False`` forces styling on or off; ``None`` lets the
        composition root decide from the console capabilities.
    show_timestamp:
        Prefix each record with ``[HH:MM:SS]``.
    max_line_width:
        Soft wrap width for the field segment; ``0`` disables wrapping.
    timestamp_format:
        :meth:`datetime.strftime` pattern used inside the brackets.
    show_level, show_module_path:
        Toggle the level badge and the breadcrumb.
    show_file, show_line_number, show_thread_name, show_thread_id:
        Toggle the optional origin details.
    theme, styles:
        Palette name and per-level overrides.
    breadcrumb_separator:
        Text placed between the innermost frame name and the module path.
    max_cause_depth, max_nesting_depth:
        Limits for cause chains and nested field values.
    """

    color_enabled: bool | None = None
    show_timestamp: bool = False
    max_line_width: int = DEFAULT_MAX_LINE_WIDTH
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    show_level: bool = True
    show_module_path: bool = True
    show_file: bool = False
    show_line_number: bool = False
    show_thread_name: bool = False
    show_thread_id: bool = False
    theme: str = "classic"
    styles: Mapping[str, str] = field(default_factory=dict)
    breadcrumb_separator: str = "::"
    max_cause_depth: int = MAX_CAUSE_DEPTH
    max_nesting_depth: int = MAX_NESTING_DEPTH

    def __post_init__(self) -> None:
        theme = (self.theme or "classic").strip().lower()
        if theme not in CONSOLE_STYLE_THEMES:
            raise ValueError(f"Unknown console theme: {self.theme!r}")
        object.__setattr__(self, "theme", theme)
        object.__setattr__(self, "styles", MappingProxyType(normalise_styles(self.styles)))
        if self.max_line_width < 0:
            raise ValueError("max_line_width must be >= 0")
        if self.max_cause_depth < 1:
            raise ValueError("max_cause_depth must be >= 1")
        if self.max_nesting_depth < 1:
            raise ValueError("max_nesting_depth must be >= 1")

    def replace(self, **changes: Any) -> "RenderConfig":
        """Return a copy with ``changes`` applied and validated.

        Examples
        --------
        >>> RenderConfig().replace(show_timestamp=True).show_timestamp
        True
        """
        if "styles" in changes and changes["styles"] is None:
            changes["styles"] = {}
        return replace(self, **changes)

    def palette(self) -> Palette:
        """Return the palette for :attr:`theme` with :attr:`styles` applied."""

        return resolve_palette(self.theme, self.styles)


__all__ = ["DEFAULT_MAX_LINE_WIDTH", "DEFAULT_TIMESTAMP_FORMAT", "RenderConfig"]

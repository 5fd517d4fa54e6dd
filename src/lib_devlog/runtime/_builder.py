"""Fluent builder assembling a :class:`RenderConfig` step by step.

Purpose
-------
Offer the familiar "format subscriber" style of configuration::

    lib_devlog.fmt().with_timer().with_thread_names().init()

Each ``with_*`` call returns a new builder; the terminal methods produce a
config (:meth:`DevLogBuilder.build`), a stdlib handler
(:meth:`DevLogBuilder.finish`) or install the global runtime
(:meth:`DevLogBuilder.init` / :meth:`DevLogBuilder.try_init`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Mapping

from rich.console import Console

from lib_devlog.adapters.logging_bridge import DevLogHandler
from lib_devlog.domain import ContextBinder, LogLevel, RenderConfig
from lib_devlog.domain.render_config import DEFAULT_TIMESTAMP_FORMAT

from ._composition import create_renderer, create_sink


@dataclass(slots=True, frozen=True)
class DevLogBuilder:
    """Immutable builder; every ``with_*`` method returns a modified copy.

    Examples
    --------
    >>> config = DevLogBuilder().with_timer().with_line_number().with_max_line_width(80).build()
    >>> config.show_timestamp, config.show_line_number, config.max_line_width
    (True, True, 80)
    """

    config: RenderConfig = field(default_factory=RenderConfig)
    console: Console | None = None
    capture_logging: bool = True
    logging_level: int = logging.DEBUG

    def _with(self, **changes: object) -> "DevLogBuilder":
        return replace(self, config=self.config.replace(**changes))

    def with_timer(self, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> "DevLogBuilder":
        """Show timestamps rendered with ``timestamp_format``."""

        return self._with(show_timestamp=True, timestamp_format=timestamp_format)

    def with_timestamps(self, display: bool = True) -> "DevLogBuilder":
        return self._with(show_timestamp=display)

    def without_time(self) -> "DevLogBuilder":
        return self._with(show_timestamp=False)

    def with_target(self, display: bool = True) -> "DevLogBuilder":
        """Toggle the breadcrumb (span name and module path)."""

        return self._with(show_module_path=display)

    def with_level(self, display: bool = True) -> "DevLogBuilder":
        return self._with(show_level=display)

    def with_thread_ids(self, display: bool = True) -> "DevLogBuilder":
        return self._with(show_thread_id=display)

    def with_thread_names(self, display: bool = True) -> "DevLogBuilder":
        return self._with(show_thread_name=display)

    def with_file(self, display: bool = True) -> "DevLogBuilder":
        return self._with(show_file=display)

    def with_line_number(self, display: bool = True) -> "DevLogBuilder":
        return self._with(show_line_number=display)

    def with_source_location(self, display: bool = True) -> "DevLogBuilder":
        """Toggle file and line number together."""

        return self._with(show_file=display, show_line_number=display)

    def with_color(self, enabled: bool | None = True) -> "DevLogBuilder":
        """Force colour on/off; ``None`` restores terminal detection."""

        return self._with(color_enabled=enabled)

    def with_theme(self, theme: str, styles: Mapping[LogLevel | str, str] | None = None) -> "DevLogBuilder":
        return self._with(theme=theme, styles=styles or {})

    def with_max_line_width(self, width: int) -> "DevLogBuilder":
        return self._with(max_line_width=width)

    def with_console(self, console: Console | None) -> "DevLogBuilder":
        return replace(self, console=console)

    def with_logging_capture(self, enabled: bool = True, *, level: int = logging.DEBUG) -> "DevLogBuilder":
        """Control whether :meth:`init` installs the stdlib logging bridge."""

        return replace(self, capture_logging=enabled, logging_level=level)

    def build(self) -> RenderConfig:
        return self.config

    def finish(self) -> DevLogHandler:
        """Return a standalone stdlib handler rendering with this configuration.

        The handler owns a fresh context binder; it is not attached to any
        logger.
        """
        sink = create_sink(self.config, console=self.console)
        renderer = create_renderer(self.config, sink)
        return DevLogHandler(renderer, sink, binder=ContextBinder())

    def init(self) -> None:
        """Install the global runtime; raises :class:`RuntimeError` when one exists."""

        from . import init as runtime_init

        runtime_init(
            self.config,
            console=self.console,
            capture_logging=self.capture_logging,
            logging_level=self.logging_level,
        )

    def try_init(self) -> bool:
        """Like :meth:`init` but return ``False`` instead of raising."""

        try:
            self.init()
        except RuntimeError:
            return False
        return True


__all__ = ["DevLogBuilder"]

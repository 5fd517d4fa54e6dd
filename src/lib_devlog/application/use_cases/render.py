"""Record renderer laying out one record as a terminal text block.

Purpose
-------
Turn a :class:`~lib_devlog.domain.record.Record` into a
:class:`~lib_devlog.domain.rendered.RenderedBlock` that reads left to right in
triage order: time, severity, origin, message, details, causes.

Contents
--------
* :class:`RecordRenderer` – configured renderer with a total
  :meth:`RecordRenderer.render`.
* ``_Line`` – accumulator tracking the visible width of a line while styled
  spans are appended.

System Role
-----------
Core of the engine. Field values go through
:func:`~lib_devlog.domain.values.format_value`, badge colours through
:func:`~lib_devlog.domain.levels.style_level` and every styled span through the
injected :class:`~lib_devlog.application.ports.StylePort`. Widths are measured
on plain text only, so alignment is identical with and without colour.

Layout
------
``[12:00:01] WARN  (request::app::server) message key=value key=value``

Fields that would push the line past ``max_line_width`` continue on a new
line indented to the message column. Error fields are rendered beneath the
main line::

    ERROR (app::db) Database query failed
                    └─ cause: query failed
                       caused by: UNKNOWN_TABLE
"""

from __future__ import annotations

import logging
from datetime import datetime

from rich.cells import cell_len

from lib_devlog.application.ports import StylePort
from lib_devlog.domain.levels import LEVEL_LABEL_WIDTH, LogLevel, style_level
from lib_devlog.domain.palettes import Palette
from lib_devlog.domain.record import Record
from lib_devlog.domain.render_config import RenderConfig
from lib_devlog.domain.rendered import RenderedBlock
from lib_devlog.domain.values import (
    TRUNCATION_MARKER,
    ErrorValue,
    FieldPairs,
    Unit,
    error_chain,
    escape_text,
    format_value,
    quote_key,
    safe_text,
)

from .compose import breadcrumb, merge_fields

logger = logging.getLogger(__name__)

UNKNOWN_TIME = "<unknown time>"
CAUSE_MARKER = "└─"
CAUSE_LABEL = "caused by:"
TRUNCATED_CHAIN = f"{TRUNCATION_MARKER} (cause chain truncated)"


class _Line:
    """Accumulate styled spans while tracking the visible width."""

    __slots__ = ("_emitter", "_parts", "width")

    def __init__(self, emitter: StylePort, indent: int = 0) -> None:
        self._emitter = emitter
        self._parts: list[str] = [" " * indent] if indent > 0 else []
        self.width = max(indent, 0)

    def write(self, text: str, style: str | None = None) -> None:
        if not text:
            return
        if style:
            # trailing spaces stay unstyled
            core = text.rstrip(" ")
            if core:
                self._parts.append(self._emitter.apply(core, style))
            if len(core) < len(text):
                self._parts.append(text[len(core) :])
        else:
            self._parts.append(text)
        self.width += cell_len(text)

    def render(self) -> str:
        return "".join(self._parts).rstrip(" ")


class RecordRenderer:
    """Render records according to a :class:`RenderConfig`.

    Parameters
    ----------
    config:
        Rendering options; defaults to :class:`RenderConfig()`.
    emitter:
        Style port used for every decorated span. Pass a disabled emitter for
        plain output.
    palette:
        Explicit palette; defaults to ``config.palette()``.

    Examples
    --------
    >>> from lib_devlog.adapters.styling import RichStyleEmitter
    >>> renderer = RecordRenderer(emitter=RichStyleEmitter(enabled=False))
    >>> record = Record("info", "Server started", "app::server", fields={"port": 8000, "environment": "DEV"})
    >>> print(renderer.render(record))
    INFO  (app::server) Server started port=8000 environment=DEV
    """

    def __init__(self, config: RenderConfig | None = None, *, emitter: StylePort, palette: Palette | None = None) -> None:
        self._config = config if config is not None else RenderConfig()
        self._emitter = emitter
        self._palette = palette if palette is not None else self._config.palette()

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def emitter(self) -> StylePort:
        return self._emitter

    def render(self, record: Record) -> RenderedBlock:
        """Return the text block for ``record``; never raises."""

        try:
            return RenderedBlock(tuple(self._render_lines(record)))
        except Exception as exc:
            logger.debug("rendering failed, emitting fallback block", exc_info=True)
            return _fallback_block(record, exc)

    def _render_lines(self, record: Record) -> list[str]:
        config = self._config
        palette = self._palette
        message, event_fields = _promote_cause(record.message, record.fields)
        fields = merge_fields(record.context_stack, event_fields)

        head = _Line(self._emitter)
        if config.show_timestamp:
            head.write(self._timestamp_text(record.timestamp), palette.timestamp)
            head.write(" ")
        if config.show_level:
            label, style = style_level(record.level, palette.levels)
            head.write(label, style)
            head.write(" " * (LEVEL_LABEL_WIDTH - cell_len(label) + 1))
        origin = self._origin_text(record)
        if origin:
            head.write(f"({origin})", palette.breadcrumb)
            head.write(" ")
        column = head.width

        lines: list[str] = []
        current = head
        message_lines = message.splitlines() or [""]
        current.write(escape_text(message_lines[0]))
        for text in message_lines[1:]:
            lines.append(current.render())
            current = _Line(self._emitter, column)
            current.write(escape_text(text))

        errors: list[tuple[str, ErrorValue]] = []
        limit = config.max_line_width
        for key, value in fields:
            if isinstance(value, ErrorValue):
                errors.append((key, value))
                continue
            plain_key = quote_key(key)
            rendered = "" if isinstance(value, Unit) else self._format(value)
            token_width = cell_len(plain_key) + (0 if isinstance(value, Unit) else 1 + cell_len(rendered))
            if limit > 0 and current.width > column and current.width + 1 + token_width > limit:
                lines.append(current.render())
                current = _Line(self._emitter, column)
            if current.width > column:
                current.write(" ")
            current.write(plain_key, palette.field_key)
            if not isinstance(value, Unit):
                current.write("=", palette.field_separator)
                current.write(rendered)
        lines.append(current.render())

        for key, error in errors:
            lines.extend(self._cause_lines(key, error, column))
        return lines

    def _format(self, value: object) -> str:
        return format_value(
            value,
            max_depth=self._config.max_nesting_depth,
            max_cause_depth=self._config.max_cause_depth,
        )

    def _timestamp_text(self, timestamp: datetime | None) -> str:
        if timestamp is None:
            return UNKNOWN_TIME
        try:
            local = timestamp.astimezone() if timestamp.tzinfo is not None else timestamp
            return f"[{local.strftime(self._config.timestamp_format)}]"
        except (ValueError, OverflowError, OSError):
            return UNKNOWN_TIME

    def _origin_text(self, record: Record) -> str:
        config = self._config
        parts: list[str] = []
        if config.show_module_path:
            crumb = breadcrumb(record.context_stack, record.module_path, config.breadcrumb_separator)
            if crumb:
                parts.append(crumb)

        location = ""
        if config.show_file and record.file:
            location = record.file
            if config.show_line_number and record.line is not None:
                location = f"{location}:{record.line}"
        elif config.show_line_number and record.line is not None:
            location = f"line {record.line}"
        if location:
            parts.append(location)

        thread = ""
        if config.show_thread_name and record.thread_name:
            thread = record.thread_name
        if config.show_thread_id and record.thread_id is not None:
            thread = f"{thread}#{record.thread_id}"
        if thread:
            parts.append(thread)
        return escape_text(" ".join(parts))

    def _cause_lines(self, key: str, error: ErrorValue, column: int) -> list[str]:
        palette = self._palette
        first = _Line(self._emitter, column)
        first.write(CAUSE_MARKER, palette.cause_marker)
        first.write(" ")
        first.write(f"{quote_key(key)}:", palette.cause_key)
        first.write(" ")
        first.write(escape_text(error.message))
        lines = [first.render()]

        causes, truncated = error_chain(error, max_cause_depth=self._config.max_cause_depth)
        for cause in causes:
            line = _Line(self._emitter, column + len(CAUSE_MARKER) + 1)
            line.write(CAUSE_LABEL, palette.cause_detail)
            line.write(" ")
            line.write(escape_text(cause))
            lines.append(line.render())
        if truncated:
            line = _Line(self._emitter, column + len(CAUSE_MARKER) + 1)
            line.write(TRUNCATED_CHAIN, palette.cause_detail)
            lines.append(line.render())
        return lines


def _promote_cause(message: str, fields: FieldPairs) -> tuple[str, FieldPairs]:
    """Use a leading ``cause`` error as the message when the message is empty."""

    if message or not fields:
        return message, fields
    key, value = fields[0]
    if key != "cause" or not isinstance(value, ErrorValue):
        return message, fields
    rest = fields[1:]
    if value.cause is not None:
        rest = (("cause", value.cause),) + rest
    return value.message, rest


def _fallback_block(record: object, exc: Exception) -> RenderedBlock:
    message = getattr(record, "message", "")
    text = escape_text(safe_text(message)) if message else ""
    failure = escape_text(f"{type(exc).__name__}: {safe_text(exc)}")
    label = LogLevel.ERROR.label.ljust(LEVEL_LABEL_WIDTH)
    return RenderedBlock((" ".join(part for part in (label, text, f"<render failure: {failure}>") if part),))


__all__ = ["RecordRenderer"]

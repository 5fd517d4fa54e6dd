"""Dev-terminal rendering of structured log records.

Typical use::

    import lib_devlog

    lib_devlog.init()
    log = lib_devlog.get("app.server")
    with lib_devlog.span("request", id=42):
        log.info("request handled", status=200)
    lib_devlog.shutdown()

renders ``INFO  (request::app::server) request handled id=42 status=200``.
"""

from __future__ import annotations

from .adapters import DevLogFormatter, DevLogHandler, RichConsoleAdapter, RichStyleEmitter
from .application.use_cases import RecordRenderer, breadcrumb, merge_fields
from .domain import (
    CONSOLE_STYLE_THEMES,
    ContextBinder,
    ContextFrame,
    ErrorValue,
    Event,
    FieldUpdate,
    LogLevel,
    Record,
    RenderConfig,
    RenderedBlock,
    SpanClose,
    SpanOpen,
    format_value,
    strip_styles,
    style_level,
)
from .runtime import (
    DevLogBuilder,
    LoggerProxy,
    demo_records,
    fmt,
    get,
    init,
    is_initialised,
    logdemo,
    record_fields,
    render,
    shutdown,
    span,
    summary_info,
)

__all__ = [
    "CONSOLE_STYLE_THEMES",
    "ContextBinder",
    "ContextFrame",
    "DevLogBuilder",
    "DevLogFormatter",
    "DevLogHandler",
    "ErrorValue",
    "Event",
    "FieldUpdate",
    "LogLevel",
    "LoggerProxy",
    "Record",
    "RecordRenderer",
    "RenderConfig",
    "RenderedBlock",
    "RichConsoleAdapter",
    "RichStyleEmitter",
    "SpanClose",
    "SpanOpen",
    "breadcrumb",
    "demo_records",
    "fmt",
    "format_value",
    "get",
    "init",
    "is_initialised",
    "logdemo",
    "merge_fields",
    "record_fields",
    "render",
    "shutdown",
    "span",
    "strip_styles",
    "style_level",
    "summary_info",
]

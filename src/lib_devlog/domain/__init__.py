"""Domain entities and value objects used by the rendering engine."""

from __future__ import annotations

from .context import ContextBinder, ContextFrame
from .levels import DEFAULT_LEVEL_STYLES, LEVEL_LABEL_WIDTH, LogLevel, style_level
from .palettes import CONSOLE_STYLE_THEMES, Palette, resolve_palette
from .record import Record
from .render_config import RenderConfig
from .rendered import RenderedBlock, strip_styles
from .signals import Event, FieldUpdate, Signal, SpanClose, SpanOpen
from .values import (
    UNIT,
    Bool,
    ErrorValue,
    FieldPairs,
    FieldValue,
    Float,
    Integer,
    Nested,
    Other,
    String,
    Unit,
    error_value,
    field_value,
    format_value,
    normalize_fields,
)

__all__ = [
    "Bool",
    "CONSOLE_STYLE_THEMES",
    "ContextBinder",
    "ContextFrame",
    "DEFAULT_LEVEL_STYLES",
    "ErrorValue",
    "Event",
    "FieldPairs",
    "FieldUpdate",
    "FieldValue",
    "Float",
    "Integer",
    "LEVEL_LABEL_WIDTH",
    "LogLevel",
    "Nested",
    "Other",
    "Palette",
    "Record",
    "RenderConfig",
    "RenderedBlock",
    "Signal",
    "SpanClose",
    "SpanOpen",
    "String",
    "UNIT",
    "Unit",
    "error_value",
    "field_value",
    "format_value",
    "normalize_fields",
    "resolve_palette",
    "strip_styles",
    "style_level",
]

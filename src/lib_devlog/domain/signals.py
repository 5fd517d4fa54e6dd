"""Instrumentation signals consumed by the span collector.

The record-producing side talks to the collector through four variants:
span open/close, field updates on an open span, and events. Only events turn
into records; the others maintain the context stack.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

from .values import FieldPairs, normalize_fields


@dataclass(slots=True, frozen=True)
class SpanOpen:
    span_id: int
    name: str
    fields: FieldPairs = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", normalize_fields(self.fields))


@dataclass(slots=True, frozen=True)
class SpanClose:
    span_id: int


@dataclass(slots=True, frozen=True)
class FieldUpdate:
    """Record new field values on an open span (innermost when ``span_id`` is ``None``)."""

    span_id: int | None
    fields: FieldPairs = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", normalize_fields(self.fields))


@dataclass(slots=True, frozen=True)
class Event:
    """A log call site firing; becomes a :class:`~lib_devlog.domain.record.Record`."""

    level: Any
    message: str
    module_path: str = ""
    fields: FieldPairs = ()
    timestamp: datetime | None = None
    file: str | None = None
    line: int | None = None
    thread_name: str | None = None
    thread_id: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", normalize_fields(self.fields))


Signal = Union[SpanOpen, SpanClose, FieldUpdate, Event]


__all__ = ["Event", "FieldUpdate", "Signal", "SpanClose", "SpanOpen"]

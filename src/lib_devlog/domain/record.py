"""Domain record describing one structured log event.

Purpose
-------
Provide the immutable value the renderer consumes. Construction normalises
whatever the producer hands over (raw Python values, unknown levels, missing
messages) so a record can always be rendered.

Contents
--------
* :class:`Record` dataclass with :meth:`Record.from_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping

from .context import ContextFrame
from .levels import LogLevel
from .values import ErrorValue, FieldPairs, FieldValue, Nested, field_value, normalize_fields, safe_text


@dataclass(slots=True, frozen=True)
class Record:
    """Immutable log record handed to the renderer.

    Attributes
    ----------
    level:
        Severity; anything that is not a known level is stored as
        :attr:`LogLevel.ERROR`.
    message:
        Primary message, ``""`` when the producer supplied none.
    module_path:
        Identifier of the emitting code location (``app::server``).
    timestamp:
        Instant of emission, optional.
    fields:
        Ordered, key-unique ``(key, FieldValue)`` pairs.
    context_stack:
        Frames active at emission time, outermost first.
    file, line, thread_name, thread_id:
        Optional source location and thread metadata.
    """

    level: LogLevel
    message: str = ""
    module_path: str = ""
    timestamp: datetime | None = None
    fields: FieldPairs = ()
    context_stack: tuple[ContextFrame, ...] = ()
    file: str | None = None
    line: int | None = None
    thread_name: str | None = None
    thread_id: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", LogLevel.coerce(self.level))
        object.__setattr__(self, "message", _text(self.message))
        object.__setattr__(self, "module_path", _text(self.module_path))
        if not isinstance(self.timestamp, datetime):
            object.__setattr__(self, "timestamp", None)
        object.__setattr__(self, "fields", normalize_fields(self.fields))
        frames = tuple(frame for frame in (self.context_stack or ()) if isinstance(frame, ContextFrame))
        object.__setattr__(self, "context_stack", frames)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Record":
        """Build a record from a JSON-compatible mapping.

        Recognised keys: ``level``, ``message`` (or ``msg``), ``module_path``
        (or ``target``), ``timestamp`` (ISO 8601), ``fields`` (object or list
        of ``[key, value]`` pairs), ``spans`` (list of ``{"name", "fields"}``),
        ``file``, ``line``, ``thread_name``, ``thread_id``. A value written as
        ``{"$error": "message", "cause": {...}}`` becomes an error value.

        Raises :class:`ValueError` when ``payload`` is not a mapping or the
        timestamp cannot be parsed.

        Examples
        --------
        >>> record = Record.from_dict({"level": "warn", "message": "slow", "fields": {"ms": 930}})
        >>> record.level, record.fields
        (<LogLevel.WARN: 30>, (('ms', Integer(value=930)),))
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"record payload must be an object, got {type(payload).__name__}")

        timestamp = payload.get("timestamp")
        if isinstance(timestamp, str):
            try:
                timestamp = datetime.fromisoformat(timestamp)
            except ValueError as exc:
                raise ValueError(f"invalid timestamp: {timestamp!r}") from exc

        spans = payload.get("spans") or ()
        frames = tuple(
            ContextFrame(name=span.get("name", ""), fields=_decode_fields(span.get("fields")))
            for span in spans
            if isinstance(span, Mapping)
        )
        line = payload.get("line")
        thread_id = payload.get("thread_id")
        return cls(
            level=payload.get("level", LogLevel.INFO),
            message=payload.get("message", payload.get("msg", "")),
            module_path=payload.get("module_path", payload.get("target", "")),
            timestamp=timestamp,
            fields=_decode_fields(payload.get("fields")),
            context_stack=frames,
            file=payload.get("file"),
            line=line if isinstance(line, int) else None,
            thread_name=payload.get("thread_name"),
            thread_id=thread_id if isinstance(thread_id, int) else None,
        )

    def replace(self, **changes: Any) -> "Record":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return safe_text(value)


def _decode_fields(raw: Any) -> FieldPairs:
    if not raw:
        return ()
    if isinstance(raw, Mapping):
        pairs = list(raw.items())
    else:
        pairs = [tuple(item) for item in raw if isinstance(item, (list, tuple)) and len(item) == 2]
    return normalize_fields((key, _decode_value(value)) for key, value in pairs)


def _decode_value(raw: Any) -> FieldValue:
    if isinstance(raw, Mapping):
        if "$error" in raw:
            cause = raw.get("cause")
            decoded = _decode_value(cause) if isinstance(cause, Mapping) else None
            return ErrorValue(
                safe_text(raw["$error"]),
                cause=decoded if isinstance(decoded, ErrorValue) else None,
            )
        return Nested(tuple((safe_text(key), _decode_value(value)) for key, value in raw.items()))
    return field_value(raw)


__all__ = ["Record"]

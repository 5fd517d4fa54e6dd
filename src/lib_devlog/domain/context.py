"""Context frames and the binder tracking them per execution flow.

Purpose
-------
Model the execution scopes (spans) whose fields are inherited by every record
emitted while they are active.

Contents
--------
* :class:`ContextFrame` – immutable named scope with ordered fields.
* :class:`ContextBinder` – stack manager built atop :mod:`contextvars` so
  threads and asyncio tasks each observe their own stack.

System Role
-----------
The binder is owned by the collecting side; the renderer only ever sees the
immutable snapshot attached to a :class:`~lib_devlog.domain.record.Record`.
"""

from __future__ import annotations

import contextvars
import itertools
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterator, Mapping

from .values import FieldPairs, normalize_fields


@dataclass(slots=True, frozen=True)
class ContextFrame:
    """Named execution scope carrying its own ordered field set.

    Attributes
    ----------
    name:
        Span name shown in the breadcrumb when the frame is innermost.
    fields:
        Ordered ``(key, FieldValue)`` pairs; accepts any mapping or pair
        iterable on construction.
    span_id:
        Identifier assigned by the binder so close/update signals can find
        the frame again.
    """

    name: str
    fields: FieldPairs = ()
    span_id: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name or ""))
        object.__setattr__(self, "fields", normalize_fields(self.fields))

    def with_fields(self, fields: Mapping[str, Any] | FieldPairs) -> "ContextFrame":
        """Return a copy with ``fields`` recorded.

        Known keys keep their position and take the new value; unknown keys
        are appended.

        Examples
        --------
        >>> frame = ContextFrame("request", {"id": 42, "user": None})
        >>> [key for key, _ in frame.with_fields({"user": "ada", "status": 200}).fields]
        ['id', 'user', 'status']
        """
        merged = dict(self.fields)
        merged.update(normalize_fields(fields))
        return replace(self, fields=tuple(merged.items()))


class ContextBinder:
    """Manage :class:`ContextFrame` stacks bound to the current execution flow."""

    _stack_var: contextvars.ContextVar[tuple[ContextFrame, ...]]

    def __init__(self) -> None:
        self._stack_var = contextvars.ContextVar("lib_devlog_context_stack", default=())
        self._ids = itertools.count(1)

    def next_span_id(self) -> int:
        """Return a fresh span identifier."""

        return next(self._ids)

    @contextmanager
    def bind(self, name: str, /, **fields: Any) -> Iterator[ContextFrame]:
        """Push a frame for the duration of the ``with`` block."""

        frame = ContextFrame(name=name, fields=fields, span_id=self.next_span_id())
        token = self._stack_var.set(self._stack_var.get() + (frame,))
        try:
            yield frame
        finally:
            self._stack_var.reset(token)

    def push(self, frame: ContextFrame) -> None:
        """Append ``frame`` as the innermost scope."""

        self._stack_var.set(self._stack_var.get() + (frame,))

    def pop(self, span_id: int) -> ContextFrame | None:
        """Remove the innermost frame carrying ``span_id`` and return it."""

        stack = list(self._stack_var.get())
        for index in range(len(stack) - 1, -1, -1):
            if stack[index].span_id == span_id:
                frame = stack.pop(index)
                self._stack_var.set(tuple(stack))
                return frame
        return None

    def update(self, span_id: int | None, fields: Mapping[str, Any] | FieldPairs) -> ContextFrame | None:
        """Record ``fields`` on the frame ``span_id`` (innermost when ``None``)."""

        stack = list(self._stack_var.get())
        for index in range(len(stack) - 1, -1, -1):
            if span_id is None or stack[index].span_id == span_id:
                stack[index] = stack[index].with_fields(fields)
                self._stack_var.set(tuple(stack))
                return stack[index]
        return None

    def current(self) -> ContextFrame | None:
        """Return the innermost frame, if any."""

        stack = self._stack_var.get()
        return stack[-1] if stack else None

    def snapshot(self) -> tuple[ContextFrame, ...]:
        """Return the active stack, outermost first."""

        return self._stack_var.get()

    def clear(self) -> None:
        """Remove all bound frames."""

        self._stack_var.set(())


__all__ = ["ContextBinder", "ContextFrame"]

"""Span collector turning instrumentation signals into records.

Purpose
-------
Consume the four signal variants produced by instrumentation and keep the
context binder in sync, snapshotting the active frames for every event.

Contents
--------
* :func:`create_collector` factory returning the collecting callable.

System Role
-----------
Sits between the record-producing side (logger proxies, the logging bridge)
and the renderer. It owns no state itself; the binder holds the stack.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from lib_devlog.application.ports import ClockPort
from lib_devlog.domain.context import ContextBinder, ContextFrame
from lib_devlog.domain.record import Record
from lib_devlog.domain.signals import Event, FieldUpdate, Signal, SpanClose, SpanOpen

logger = logging.getLogger(__name__)

CollectCallable = Callable[[Signal], "Record | None"]


def create_collector(*, binder: ContextBinder, clock: ClockPort) -> CollectCallable:
    """Build the signal consumer bound to ``binder`` and ``clock``.

    Span signals return ``None``; an :class:`Event` returns the record built
    from it with the binder's current stack attached. Events without a
    timestamp are stamped with ``clock.now()``.

    Examples
    --------
    >>> from datetime import datetime
    >>> class Clock:
    ...     def now(self):
    ...         return datetime(2025, 1, 1, 12, 0, 0)
    >>> collect = create_collector(binder=ContextBinder(), clock=Clock())
    >>> collect(SpanOpen(1, "request", {"id": 42}))
    >>> record = collect(Event("info", "handled", fields={"status": 200}))
    >>> [frame.name for frame in record.context_stack], record.timestamp.hour
    (['request'], 12)
    """

    def _collect(signal: Signal) -> Record | None:
        if isinstance(signal, SpanOpen):
            binder.push(ContextFrame(name=signal.name, fields=signal.fields, span_id=signal.span_id))
            return None
        if isinstance(signal, SpanClose):
            if binder.pop(signal.span_id) is None:
                logger.debug("close for unknown span %s ignored", signal.span_id)
            return None
        if isinstance(signal, FieldUpdate):
            if binder.update(signal.span_id, signal.fields) is None:
                logger.debug("field update for unknown span %s ignored", signal.span_id)
            return None
        if isinstance(signal, Event):
            return Record(
                level=signal.level,
                message=signal.message,
                module_path=signal.module_path,
                timestamp=signal.timestamp or clock.now(),
                fields=signal.fields,
                context_stack=binder.snapshot(),
                file=signal.file,
                line=signal.line,
                thread_name=signal.thread_name,
                thread_id=signal.thread_id,
            )
        raise TypeError(f"unsupported signal: {type(signal).__name__}")

    return _collect


__all__ = ["CollectCallable", "create_collector"]

"""Bridge from the stdlib :mod:`logging` module into the record renderer.

Purpose
-------
Let applications keep calling ``logging.getLogger(__name__).info(...)`` while
the console shows dev-terminal output.

Contents
--------
* :func:`record_from_logging` – convert a :class:`logging.LogRecord`.
* :class:`DevLogHandler` – handler rendering and writing each record.
* :class:`DevLogFormatter` – formatter returning the rendered text, for hosts
  that bring their own handler.

System Role
-----------
Installed on the root logger by :func:`lib_devlog.init` (``capture_logging``)
or returned by ``fmt().finish()``. Records emitted while the handler is
already emitting on the same thread are dropped so a failing sink cannot
recurse into itself.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from lib_devlog.application.ports.console import ConsolePort
from lib_devlog.application.use_cases.render import RecordRenderer
from lib_devlog.domain.context import ContextBinder, ContextFrame
from lib_devlog.domain.levels import LogLevel
from lib_devlog.domain.record import Record
from lib_devlog.domain.rendered import RenderedBlock
from lib_devlog.domain.values import error_value, safe_text

_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _extra_fields(log_record: logging.LogRecord) -> list[tuple[str, Any]]:
    return [
        (key, value) for key, value in vars(log_record).items() if key not in _STANDARD_ATTRS and not key.startswith("_")
    ]


def _message(log_record: logging.LogRecord) -> str:
    try:
        return log_record.getMessage()
    except Exception:
        return safe_text(log_record.msg)


def record_from_logging(
    log_record: logging.LogRecord,
    *,
    context_stack: Sequence[ContextFrame] = (),
    separator: str = "::",
) -> Record:
    """Return the :class:`Record` equivalent of ``log_record``.

    ``extra=`` attributes become fields in insertion order and an attached
    exception becomes a ``cause`` error field.

    Examples
    --------
    >>> log_record = logging.makeLogRecord(
    ...     {"name": "app.server", "levelno": logging.INFO, "msg": "Server started", "port": 8000}
    ... )
    >>> record = record_from_logging(log_record)
    >>> record.module_path, record.level, record.fields
    ('app::server', <LogLevel.INFO: 20>, (('port', Integer(value=8000)),))
    """
    fields = _extra_fields(log_record)
    exc_info = log_record.exc_info
    if exc_info and exc_info[1] is not None:
        fields.append(("cause", error_value(exc_info[1])))
    name = log_record.name or ""
    return Record(
        level=LogLevel.from_python_level(log_record.levelno),
        message=_message(log_record),
        module_path="" if name == "root" else name.replace(".", separator),
        timestamp=datetime.fromtimestamp(log_record.created, tz=timezone.utc),
        fields=fields,
        context_stack=tuple(context_stack),
        file=log_record.filename or None,
        line=log_record.lineno if isinstance(log_record.lineno, int) else None,
        thread_name=log_record.threadName,
        thread_id=log_record.thread,
    )


class DevLogHandler(logging.Handler):
    """Render stdlib log records and write them to a console port."""

    def __init__(
        self,
        renderer: RecordRenderer,
        sink: ConsolePort,
        *,
        binder: ContextBinder | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level=level)
        self._renderer = renderer
        self._sink = sink
        self._binder = binder
        self._guard = threading.local()

    @property
    def binder(self) -> ContextBinder | None:
        return self._binder

    @property
    def renderer(self) -> RecordRenderer:
        return self._renderer

    def render(self, log_record: logging.LogRecord) -> RenderedBlock:
        """Return the rendered block for ``log_record`` without writing it."""

        stack = self._binder.snapshot() if self._binder is not None else ()
        record = record_from_logging(
            log_record,
            context_stack=stack,
            separator=self._renderer.config.breadcrumb_separator,
        )
        return self._renderer.render(record)

    def emit(self, record: logging.LogRecord) -> None:
        if getattr(self._guard, "active", False):
            return
        self._guard.active = True
        try:
            self._sink.write(self.render(record))
        except Exception:
            self.handleError(record)
        finally:
            self._guard.active = False

    def flush(self) -> None:
        self.acquire()
        try:
            self._sink.flush()
        finally:
            self.release()


class DevLogFormatter(logging.Formatter):
    """Formatter returning the rendered text of a record."""

    def __init__(self, renderer: RecordRenderer, *, binder: ContextBinder | None = None) -> None:
        super().__init__()
        self._renderer = renderer
        self._binder = binder

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        stack = self._binder.snapshot() if self._binder is not None else ()
        converted = record_from_logging(record, context_stack=stack, separator=self._renderer.config.breadcrumb_separator)
        return self._renderer.render(converted).text


__all__ = ["DevLogFormatter", "DevLogHandler", "record_from_logging"]

"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate a :class:`RenderConfig` into the live :class:`LoggingRuntime`
singleton: binder, collector, renderer, console sink and the optional stdlib
logging bridge.

Contents
--------
* :class:`SystemClock` – clock port backed by :func:`datetime.now`.
* :func:`create_renderer` – resolve colour support and build the renderer.
* :func:`build_runtime` – assemble every collaborator.
* :class:`LoggerProxy` – per-name façade with ``trace``..``error`` methods.

System Role
-----------
Anchors the clean-architecture boundary: adapters are chosen here, while
``lib_devlog.runtime`` exposes only the façade.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from rich.console import Console

from lib_devlog.adapters.console.rich_console import RichConsoleAdapter
from lib_devlog.adapters.logging_bridge import DevLogHandler
from lib_devlog.adapters.styling import RichStyleEmitter
from lib_devlog.application.ports import ClockPort, ConsolePort
from lib_devlog.application.use_cases.collect import CollectCallable, create_collector
from lib_devlog.application.use_cases.render import RecordRenderer
from lib_devlog.domain import ContextBinder, Event, LogLevel, RenderConfig, RenderedBlock

from ._state import LoggingRuntime

logger = logging.getLogger(__name__)

TRACE_LEVEL_NAME = "TRACE"


class SystemClock(ClockPort):
    """Clock returning timezone-aware UTC instants."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def create_sink(config: RenderConfig, *, console: Console | None = None) -> RichConsoleAdapter:
    """Return the console sink honouring the forced colour setting."""

    return RichConsoleAdapter(
        console=console,
        force_color=config.color_enabled is True,
        no_color=config.color_enabled is False,
    )


def create_renderer(config: RenderConfig, sink: ConsolePort | None = None) -> RecordRenderer:
    """Build a renderer whose colour setting is resolved against ``sink``.

    An explicit ``config.color_enabled`` wins; otherwise colour follows the
    sink's terminal detection (plain output when there is no sink).
    """

    if config.color_enabled is not None:
        enabled = config.color_enabled
    else:
        enabled = bool(sink is not None and sink.supports_color)
    color_system = getattr(sink, "color_system", None) or "standard"
    emitter = RichStyleEmitter(enabled=enabled, color_system=color_system)
    return RecordRenderer(config, emitter=emitter)


def create_emit(
    collect: CollectCallable,
    renderer: RecordRenderer,
    sink: ConsolePort,
) -> Callable[[Event], RenderedBlock]:
    """Return the callable turning an event into written output."""

    def _emit(event: Event) -> RenderedBlock:
        record = collect(event)
        block = renderer.render(record)
        sink.write(block)
        return block

    return _emit


def install_trace_level() -> None:
    """Register the ``TRACE`` level name with :mod:`logging`."""

    level = LogLevel.TRACE.to_python_level()
    if logging.getLevelName(level) != TRACE_LEVEL_NAME:
        logging.addLevelName(level, TRACE_LEVEL_NAME)


def build_runtime(
    config: RenderConfig,
    *,
    console: Console | None = None,
    capture_logging: bool = True,
    logging_level: int = logging.DEBUG,
) -> LoggingRuntime:
    """Assemble the logging runtime from ``config``."""

    install_trace_level()
    binder = ContextBinder()
    sink = create_sink(config, console=console)
    renderer = create_renderer(config, sink)
    collect = create_collector(binder=binder, clock=SystemClock())
    runtime = LoggingRuntime(
        binder=binder,
        config=config,
        renderer=renderer,
        sink=sink,
        collect=collect,
        emit=create_emit(collect, renderer, sink),
    )
    if capture_logging:
        handler = DevLogHandler(renderer, sink, binder=binder)
        root = logging.getLogger()
        logger.debug("installing stdlib logging bridge at level %s", logging.getLevelName(logging_level))
        runtime.handler = handler
        runtime.previous_root_level = root.level
        root.addHandler(handler)
        root.setLevel(logging_level)
    return runtime


def teardown_runtime(runtime: LoggingRuntime) -> None:
    """Detach the logging bridge and flush the sink."""

    if runtime.handler is not None:
        root = logging.getLogger()
        root.removeHandler(runtime.handler)
        if runtime.previous_root_level is not None:
            root.setLevel(runtime.previous_root_level)
        runtime.handler.close()
    runtime.sink.flush()


class LoggerProxy:
    """Lightweight logger façade bound to a name and the runtime emitter.

    Dots in ``name`` become the breadcrumb separator so ``app.server`` shows
    as ``app::server``. Each level method returns the rendered block that was
    written.
    """

    def __init__(
        self,
        name: str,
        emit: Callable[[Event], RenderedBlock],
        *,
        separator: str = "::",
        capture_location: bool = False,
    ) -> None:
        self._name = name
        self._module_path = name.replace(".", separator) if name else ""
        self._emit = emit
        self._capture_location = capture_location

    @property
    def name(self) -> str:
        return self._name

    def trace(self, message: str, /, extra: Mapping[str, Any] | None = None, **fields: Any) -> RenderedBlock:
        return self._log(LogLevel.TRACE, message, extra, fields)

    def debug(self, message: str, /, extra: Mapping[str, Any] | None = None, **fields: Any) -> RenderedBlock:
        return self._log(LogLevel.DEBUG, message, extra, fields)

    def info(self, message: str, /, extra: Mapping[str, Any] | None = None, **fields: Any) -> RenderedBlock:
        return self._log(LogLevel.INFO, message, extra, fields)

    def warn(self, message: str, /, extra: Mapping[str, Any] | None = None, **fields: Any) -> RenderedBlock:
        return self._log(LogLevel.WARN, message, extra, fields)

    warning = warn

    def error(self, message: str, /, extra: Mapping[str, Any] | None = None, **fields: Any) -> RenderedBlock:
        return self._log(LogLevel.ERROR, message, extra, fields)

    def _log(
        self,
        level: LogLevel,
        message: str,
        extra: Mapping[str, Any] | None,
        fields: Mapping[str, Any],
    ) -> RenderedBlock:
        payload = dict(extra or {})
        payload.update(fields)
        file = line = None
        if self._capture_location:
            caller = sys._getframe(2)
            file = os.path.basename(caller.f_code.co_filename)
            line = caller.f_lineno
        thread = threading.current_thread()
        event = Event(
            level=level,
            message=message,
            module_path=self._module_path,
            fields=payload,
            file=file,
            line=line,
            thread_name=thread.name,
            thread_id=threading.get_ident(),
        )
        return self._emit(event)


__all__ = [
    "LoggerProxy",
    "SystemClock",
    "build_runtime",
    "create_emit",
    "create_renderer",
    "create_sink",
    "install_trace_level",
    "teardown_runtime",
]

"""Runtime state container and access helpers."""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import Callable

from lib_devlog.adapters.console.rich_console import RichConsoleAdapter
from lib_devlog.adapters.logging_bridge import DevLogHandler
from lib_devlog.application.use_cases.collect import CollectCallable
from lib_devlog.application.use_cases.render import RecordRenderer
from lib_devlog.domain import ContextBinder, Event, RenderConfig, RenderedBlock


@dataclass(slots=True)
class LoggingRuntime:
    """Aggregate of live collaborators assembled by the composition root."""

    binder: ContextBinder
    config: RenderConfig
    renderer: RecordRenderer
    sink: RichConsoleAdapter
    collect: CollectCallable
    emit: Callable[[Event], RenderedBlock]
    handler: DevLogHandler | None = None
    previous_root_level: int | None = None


_STATE: LoggingRuntime | None = None
_STATE_LOCK = RLock()


def set_runtime(runtime: LoggingRuntime) -> None:
    """Install ``runtime`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = runtime


def clear_runtime() -> None:
    """Remove the active runtime if present."""

    with _STATE_LOCK:
        global _STATE
        _STATE = None


def current_runtime() -> LoggingRuntime:
    """Return the active runtime or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise RuntimeError("lib_devlog.init() must be called before using the logging API")
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_devlog.init` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = [
    "LoggingRuntime",
    "clear_runtime",
    "current_runtime",
    "is_initialised",
    "set_runtime",
]

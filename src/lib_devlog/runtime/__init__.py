"""Runtime façade that wires the rendering engine for host applications.

Purpose
-------
Expose a stable entry point (`init`, `get`, `span`, `render`, `shutdown`,
`fmt`) that host applications use instead of importing the inner layers
directly.

Contents
--------
* ``init`` – composition root assembling binder, renderer and console sink.
* ``get`` / ``span`` / ``record_fields`` – logger proxies and context frames.
* ``render`` – render a single record without writing it.
* ``shutdown`` – deterministic teardown.
* ``fmt`` – fluent builder alternative to ``init``.
* ``summary_info`` – metadata banner used by the CLI.

System Role
-----------
Forms the outer shell: high-level policy depends only on abstractions;
adapters and infrastructure are hidden behind this interface.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from rich.console import Console

from lib_devlog.domain import ContextFrame, FieldUpdate, Record, RenderConfig, RenderedBlock, SpanClose, SpanOpen

from ._builder import DevLogBuilder
from ._composition import LoggerProxy, build_runtime, create_renderer, teardown_runtime
from ._demo import demo_records, logdemo
from ._state import LoggingRuntime, clear_runtime, current_runtime, is_initialised, set_runtime

__all__ = [
    "DevLogBuilder",
    "LoggerProxy",
    "LoggingRuntime",
    "demo_records",
    "fmt",
    "get",
    "init",
    "is_initialised",
    "logdemo",
    "record_fields",
    "render",
    "shutdown",
    "span",
    "summary_info",
]


def init(
    config: RenderConfig | None = None,
    *,
    console: Console | None = None,
    capture_logging: bool = True,
    logging_level: int = logging.DEBUG,
) -> None:
    """Compose the runtime and install it as the active singleton.

    Inputs
    ------
    config:
        Rendering options. When omitted the defaults are resolved from the
        ``LOG_*`` environment variables (see :mod:`lib_devlog.config`).
    console:
        Rich console to write to; defaults to a stderr console.
    capture_logging:
        Install :class:`~lib_devlog.adapters.logging_bridge.DevLogHandler` on
        the root logger so stdlib ``logging`` calls render too.
    logging_level:
        Root logger level applied while the bridge is installed.

    Side Effects
    ------------
    Raises :class:`RuntimeError` if called while a runtime is already active.
    """

    if is_initialised():
        raise RuntimeError(
            "lib_devlog.init() cannot be called twice without shutdown(); call lib_devlog.shutdown() first",
        )
    if config is None:
        from lib_devlog.config import render_config_from_env

        config = render_config_from_env()
    runtime = build_runtime(config, console=console, capture_logging=capture_logging, logging_level=logging_level)
    set_runtime(runtime)


def get(name: str) -> LoggerProxy:
    """Return a logger proxy bound to the configured runtime.

    Raises :class:`RuntimeError` when ``init`` has not been called.
    """

    runtime = current_runtime()
    config = runtime.config
    return LoggerProxy(
        name,
        runtime.emit,
        separator=config.breadcrumb_separator,
        capture_location=config.show_file or config.show_line_number,
    )


@contextmanager
def span(name: str, /, **fields: Any) -> Iterator[ContextFrame]:
    """Open a context frame for the duration of the ``with`` block.

    Every record emitted inside the block inherits ``fields`` and shows
    ``name`` in its breadcrumb. The frame is closed even when the block
    raises.
    """

    runtime = current_runtime()
    span_id = runtime.binder.next_span_id()
    runtime.collect(SpanOpen(span_id, name, fields))
    try:
        yield runtime.binder.current()
    finally:
        runtime.collect(SpanClose(span_id))


def record_fields(**fields: Any) -> None:
    """Record ``fields`` on the innermost open span."""

    runtime = current_runtime()
    runtime.collect(FieldUpdate(None, fields))


def render(record: Record, config: RenderConfig | None = None) -> RenderedBlock:
    """Render ``record`` without writing it.

    Uses the active runtime's renderer when no ``config`` is given and a
    runtime exists; otherwise a plain renderer for ``config``.
    """

    if config is None and is_initialised():
        return current_runtime().renderer.render(record)
    return create_renderer(config if config is not None else RenderConfig()).render(record)


def shutdown() -> None:
    """Detach the logging bridge, flush the sink and clear runtime state.

    Raises :class:`RuntimeError` when no runtime is active.
    """

    runtime = current_runtime()
    try:
        teardown_runtime(runtime)
    finally:
        clear_runtime()


def fmt() -> DevLogBuilder:
    """Return a fresh :class:`DevLogBuilder`."""

    return DevLogBuilder()


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point and docs.

    Outputs
    -------
    str
        Multi-line banner ending with a newline.
    """

    from .. import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)

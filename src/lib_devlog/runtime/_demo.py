"""Sample records showcasing the console layout.

The first four records are the reference scenarios (missing config value,
startup with fields, failed query with a cause, request span), followed by
one record per level so themes can be compared side by side.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from lib_devlog.domain import ContextFrame, ErrorValue, LogLevel, Record, RenderConfig
from lib_devlog.domain.palettes import CONSOLE_STYLE_THEMES

from ._composition import create_renderer


def demo_records(now: datetime | None = None) -> list[Record]:
    """Return the records rendered by ``lib_devlog demo``."""

    stamp = now if now is not None else datetime.now().astimezone()
    request = ContextFrame("request", {"id": 42, "path": "/api/users"})
    records = [
        Record(
            LogLevel.WARN,
            "No value found for 'PORT' in env, defaulting to 8000",
            "app::server",
            timestamp=stamp,
        ),
        Record(
            LogLevel.INFO,
            "Server started",
            "app::server",
            timestamp=stamp,
            fields={"port": 8000, "environment": "DEV"},
        ),
        Record(
            LogLevel.ERROR,
            "Database query failed",
            "app::db",
            timestamp=stamp,
            fields={"cause": ErrorValue("relation does not exist", cause=ErrorValue("UNKNOWN_TABLE"))},
        ),
        Record(
            LogLevel.INFO,
            "request handled",
            timestamp=stamp,
            fields={"status": 200, "elapsed_ms": 12.5},
            context_stack=(request,),
        ),
    ]
    for level in LogLevel:
        records.append(
            Record(level, f"{level.severity} message", "demo", timestamp=stamp, fields={"retry": level is LogLevel.WARN})
        )
    return records


def logdemo(
    *,
    theme: str = "classic",
    color: bool | None = None,
    show_timestamp: bool = False,
    max_line_width: int | None = None,
    writer: Callable[[str], None] | None = None,
) -> list[str]:
    """Render :func:`demo_records` with ``theme`` and return the text blocks.

    ``color=None`` renders plain text because there is no terminal to probe.
    Each block is also passed to ``writer`` when given.
    """
    if theme not in CONSOLE_STYLE_THEMES:
        raise ValueError(f"Unknown console theme: {theme!r}")
    changes: dict[str, object] = {"theme": theme, "color_enabled": bool(color), "show_timestamp": show_timestamp}
    if max_line_width is not None:
        changes["max_line_width"] = max_line_width
    renderer = create_renderer(RenderConfig().replace(**changes))
    blocks = [renderer.render(record).text for record in demo_records()]
    if writer is not None:
        for block in blocks:
            writer(block)
    return blocks


__all__ = ["demo_records", "logdemo"]

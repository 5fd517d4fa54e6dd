"""Adapters implementing the application ports with Rich and stdlib logging."""

from __future__ import annotations

from .console.rich_console import RichConsoleAdapter
from .logging_bridge import DevLogFormatter, DevLogHandler, record_from_logging
from .styling import RichStyleEmitter

__all__ = ["DevLogFormatter", "DevLogHandler", "RichConsoleAdapter", "RichStyleEmitter", "record_from_logging"]

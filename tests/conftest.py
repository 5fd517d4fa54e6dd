from __future__ import annotations

from io import StringIO
from typing import Iterator

import pytest
from rich.console import Console

import lib_devlog
from lib_devlog.adapters.styling import RichStyleEmitter
from lib_devlog.application.use_cases.render import RecordRenderer
from lib_devlog.domain import RenderConfig

_LOG_ENV_VARS = (
    "LOG_FORCE_COLOR",
    "LOG_NO_COLOR",
    "LOG_SHOW_TIMESTAMP",
    "LOG_MAX_LINE_WIDTH",
    "LOG_CONSOLE_THEME",
    "LOG_CONSOLE_STYLES",
    "LIB_DEVLOG_USE_DOTENV",
    "NO_COLOR",
    "FORCE_COLOR",
)


@pytest.fixture(autouse=True)
def _clean_log_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _LOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_runtime() -> Iterator[None]:
    try:
        yield
    finally:
        if lib_devlog.is_initialised():
            lib_devlog.shutdown()


@pytest.fixture
def plain_console() -> Console:
    return Console(file=StringIO(), force_terminal=False, color_system=None, width=200)


@pytest.fixture
def color_console() -> Console:
    return Console(file=StringIO(), force_terminal=True, color_system="standard", width=200)


@pytest.fixture
def plain_renderer() -> RecordRenderer:
    return RecordRenderer(RenderConfig(color_enabled=False), emitter=RichStyleEmitter(enabled=False))


@pytest.fixture
def color_renderer() -> RecordRenderer:
    return RecordRenderer(RenderConfig(color_enabled=True), emitter=RichStyleEmitter(enabled=True))

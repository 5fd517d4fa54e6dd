from __future__ import annotations

import logging

import pytest
from rich.console import Console

import lib_devlog
from lib_devlog.adapters.logging_bridge import DevLogHandler
from lib_devlog.domain import LogLevel, RenderConfig
from lib_devlog.runtime import DevLogBuilder
from lib_devlog.runtime._state import current_runtime


def test_defaults_match_render_config() -> None:
    assert lib_devlog.fmt().build() == RenderConfig()


def test_builder_steps_return_new_builders() -> None:
    base = lib_devlog.fmt()
    changed = base.with_timer("%H:%M")
    assert base.build().show_timestamp is False
    assert changed.build().show_timestamp is True
    assert changed.build().timestamp_format == "%H:%M"


def test_toggles_map_onto_config_fields() -> None:
    config = (
        lib_devlog.fmt()
        .with_target(False)
        .with_level(False)
        .with_thread_ids()
        .with_thread_names()
        .with_source_location()
        .with_color(False)
        .with_max_line_width(0)
        .build()
    )
    assert config.show_module_path is False
    assert config.show_level is False
    assert config.show_thread_id is True
    assert config.show_thread_name is True
    assert config.show_file is True
    assert config.show_line_number is True
    assert config.color_enabled is False
    assert config.max_line_width == 0


def test_without_time_switches_timestamps_off() -> None:
    assert lib_devlog.fmt().with_timestamps().without_time().build().show_timestamp is False


def test_theme_and_style_overrides() -> None:
    config = lib_devlog.fmt().with_theme("Neon", {"warn": "bold yellow"}).build()
    assert config.theme == "neon"
    assert config.palette().levels[LogLevel.WARN] == "bold yellow"


def test_unknown_theme_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown console theme"):
        lib_devlog.fmt().with_theme("sepia")


def test_negative_width_is_rejected() -> None:
    with pytest.raises(ValueError, match="max_line_width"):
        lib_devlog.fmt().with_max_line_width(-1)


def test_finish_returns_unattached_handler(plain_console: Console) -> None:
    handler = lib_devlog.fmt().with_color(False).with_console(plain_console).finish()
    assert isinstance(handler, DevLogHandler)
    assert handler not in logging.getLogger().handlers

    logger = logging.getLogger("lib_devlog.tests.builder")
    logger.propagate = False
    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    try:
        logger.info("ready", extra={"port": 8000})
    finally:
        logger.removeHandler(handler)
        logger.propagate = True

    assert plain_console.file.getvalue() == "INFO  (lib_devlog::tests::builder) ready port=8000\n"


def test_init_installs_runtime_with_builder_config(plain_console: Console) -> None:
    builder = lib_devlog.fmt().with_color(False).with_console(plain_console).with_logging_capture(False)
    builder.init()
    assert current_runtime().config == builder.build()
    assert current_runtime().handler is None


def test_try_init_reports_existing_runtime(plain_console: Console) -> None:
    builder = DevLogBuilder().with_console(plain_console).with_logging_capture(False)
    assert builder.try_init() is True
    assert builder.try_init() is False

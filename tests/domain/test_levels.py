from __future__ import annotations

import logging

import pytest

from lib_devlog.domain.levels import DEFAULT_LEVEL_STYLES, LEVEL_LABEL_WIDTH, LogLevel, style_level
from lib_devlog.domain.palettes import CONSOLE_STYLE_THEMES, normalise_styles, resolve_palette


@pytest.mark.parametrize(
    "name, expected",
    [
        ("trace", LogLevel.TRACE),
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("Warn", LogLevel.WARN),
        ("Warning", LogLevel.WARN),
        ("error", LogLevel.ERROR),
        ("CRITICAL", LogLevel.ERROR),
        (" fatal ", LogLevel.ERROR),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        LogLevel.from_name("verbose")


@pytest.mark.parametrize(
    "number, expected",
    [
        (1, LogLevel.TRACE),
        (5, LogLevel.TRACE),
        (logging.DEBUG, LogLevel.DEBUG),
        (15, LogLevel.DEBUG),
        (logging.INFO, LogLevel.INFO),
        (logging.WARNING, LogLevel.WARN),
        (logging.ERROR, LogLevel.ERROR),
        (logging.CRITICAL, LogLevel.ERROR),
    ],
)
def test_from_python_level_rounds_down(number: int, expected: LogLevel) -> None:
    assert LogLevel.from_python_level(number) is expected


@pytest.mark.parametrize("level", LogLevel)
def test_to_python_level_round_trips(level: LogLevel) -> None:
    assert LogLevel.from_python_level(level.to_python_level()) is level


@pytest.mark.parametrize("value", ["verbose", 99, 3.5, None, object(), True])
def test_coerce_fails_towards_error(value: object) -> None:
    assert LogLevel.coerce(value) is LogLevel.ERROR


def test_coerce_accepts_names_numbers_and_members() -> None:
    assert LogLevel.coerce("warn") is LogLevel.WARN
    assert LogLevel.coerce(20) is LogLevel.INFO
    assert LogLevel.coerce(LogLevel.DEBUG) is LogLevel.DEBUG


@pytest.mark.parametrize(
    "level, label, style",
    [
        ("trace", "TRACE", "dim"),
        ("DEBUG", "DEBUG", "cyan"),
        ("Info", "INFO", "green"),
        ("warn", "WARN", "yellow"),
        ("error", "ERROR", "red"),
    ],
)
def test_style_level_table(level: str, label: str, style: str) -> None:
    assert style_level(level) == (label, style)


def test_style_level_treats_unknown_as_error() -> None:
    assert style_level("bogus") == ("ERROR", "red")


def test_style_level_uses_palette_overrides() -> None:
    palette = resolve_palette("classic", {"warn": "bold magenta"})
    assert style_level(LogLevel.WARN, palette.levels) == ("WARN", "bold magenta")
    assert style_level(LogLevel.INFO, palette.levels) == ("INFO", "green")


def test_label_width_fits_every_label() -> None:
    assert LEVEL_LABEL_WIDTH == 5
    assert all(len(level.label) <= LEVEL_LABEL_WIDTH for level in LogLevel)


@pytest.mark.parametrize("theme", sorted(CONSOLE_STYLE_THEMES))
def test_every_theme_covers_every_level(theme: str) -> None:
    palette = resolve_palette(theme)
    assert set(palette.levels) == set(LogLevel)


def test_classic_theme_matches_default_styles() -> None:
    assert dict(resolve_palette().levels) == dict(DEFAULT_LEVEL_STYLES)


def test_resolve_palette_rejects_unknown_theme() -> None:
    with pytest.raises(ValueError, match="Unknown console theme"):
        resolve_palette("sepia")


def test_normalise_styles_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        normalise_styles({"LOUD": "red"})

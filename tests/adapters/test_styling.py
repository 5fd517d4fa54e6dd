from __future__ import annotations

import pytest

from lib_devlog.adapters.styling import RichStyleEmitter
from lib_devlog.application.ports import StylePort


def test_emitter_satisfies_style_port() -> None:
    assert isinstance(RichStyleEmitter(enabled=False), StylePort)


@pytest.mark.parametrize(
    "style, expected",
    [
        ("yellow", "\x1b[33mWARN\x1b[0m"),
        ("red", "\x1b[31mWARN\x1b[0m"),
        ("bold red", "\x1b[1;31mWARN\x1b[0m"),
        ("dim", "\x1b[2mWARN\x1b[0m"),
    ],
)
def test_standard_colour_system_sequences(style: str, expected: str) -> None:
    assert RichStyleEmitter(enabled=True).apply("WARN", style) == expected


def test_disabled_emitter_returns_text_unchanged() -> None:
    emitter = RichStyleEmitter(enabled=False)
    assert emitter.enabled is False
    assert emitter.apply("WARN", "yellow") == "WARN"


def test_unknown_colour_system_disables_styling() -> None:
    emitter = RichStyleEmitter(enabled=True, color_system=None)
    assert emitter.enabled is False
    assert emitter.color_system is None
    assert emitter.apply("WARN", "yellow") == "WARN"


def test_truecolor_system_keeps_hex_colours() -> None:
    emitter = RichStyleEmitter(enabled=True, color_system="truecolor")
    assert emitter.color_system == "truecolor"
    assert emitter.apply("x", "#ff0000") == "\x1b[38;2;255;0;0mx\x1b[0m"


def test_invalid_style_degrades_to_plain_text(caplog: pytest.LogCaptureFixture) -> None:
    emitter = RichStyleEmitter(enabled=True)
    with caplog.at_level("DEBUG", logger="lib_devlog.adapters.styling"):
        assert emitter.apply("WARN", "definitely-not-a-colour") == "WARN"
        assert emitter.apply("WARN", "definitely-not-a-colour") == "WARN"
    assert len([record for record in caplog.records if "invalid console style" in record.getMessage()]) == 1


def test_each_line_is_closed_before_the_break() -> None:
    styled = RichStyleEmitter(enabled=True).apply("one\ntwo", "red")
    assert styled.split("\n") == ["\x1b[31mone\x1b[0m", "\x1b[31mtwo\x1b[0m"]


def test_strip_removes_sequences_only() -> None:
    emitter = RichStyleEmitter(enabled=True)
    assert emitter.strip(emitter.apply("WARN", "bold yellow") + " rest") == "WARN rest"


def test_empty_span_or_style_emits_nothing_extra() -> None:
    emitter = RichStyleEmitter(enabled=True)
    assert emitter.apply("", "red") == ""
    assert emitter.apply("text", "") == "text"

from __future__ import annotations

from datetime import datetime, timezone

from lib_devlog.adapters.console.rich_console import RichConsoleAdapter
from lib_devlog.adapters.styling import RichStyleEmitter
from lib_devlog.application.ports.console import ConsolePort
from lib_devlog.application.ports.style import StylePort
from lib_devlog.application.ports.time import ClockPort
from lib_devlog.domain.rendered import RenderedBlock
from lib_devlog.runtime._composition import SystemClock


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def record(self, name: str, **payload) -> None:
        self.calls.append((name, payload))


class _FakeConsole(ConsolePort):
    supports_color = False

    def __init__(self, recorder: _Recorder) -> None:
        self.recorder = recorder

    def write(self, block: RenderedBlock) -> None:
        self.recorder.record("write", block=block)

    def flush(self) -> None:
        self.recorder.record("flush")


class _FakeStyle(StylePort):
    enabled = True

    def apply(self, text: str, style: str) -> str:
        return f"<{style}>{text}</{style}>"

    def strip(self, text: str) -> str:
        return text


class _FixedClock(ClockPort):
    def now(self) -> datetime:
        return datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_console_port_contract() -> None:
    recorder = _Recorder()
    console = _FakeConsole(recorder)
    block = RenderedBlock(("INFO  ready",))
    console.write(block)
    console.flush()
    assert recorder.calls == [("write", {"block": block}), ("flush", {})]
    assert isinstance(console, ConsolePort)


def test_style_port_contract() -> None:
    style = _FakeStyle()
    assert isinstance(style, StylePort)
    assert style.apply("WARN", "yellow") == "<yellow>WARN</yellow>"


def test_clock_port_contract() -> None:
    assert isinstance(_FixedClock(), ClockPort)
    assert _FixedClock().now().tzinfo is timezone.utc


def test_structural_matches_are_recognised() -> None:
    class Duck:
        supports_color = True

        def write(self, block: RenderedBlock) -> None:
            pass

        def flush(self) -> None:
            pass

    assert isinstance(Duck(), ConsolePort)
    assert not isinstance(object(), ConsolePort)


def test_shipped_adapters_implement_ports(plain_console) -> None:
    assert isinstance(RichConsoleAdapter(console=plain_console), ConsolePort)
    assert isinstance(RichStyleEmitter(enabled=False), StylePort)
    assert isinstance(SystemClock(), ClockPort)
    assert SystemClock().now().tzinfo is not None

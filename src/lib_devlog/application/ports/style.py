"""Style port wrapping text in terminal styling sequences."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StylePort(Protocol):
    """Decorate text spans with a named style.

    Implementations must return ``text`` unchanged when :attr:`enabled` is
    false, and every styled span must be reset before it ends so lines stay
    self-contained.
    """

    enabled: bool

    def apply(self, text: str, style: str) -> str: ...

    def strip(self, text: str) -> str: ...


__all__ = ["StylePort"]

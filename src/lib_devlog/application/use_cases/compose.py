"""Context composer: merged field sets and module-path breadcrumbs.

Purpose
-------
Combine the fields inherited from active context frames with the event's own
fields, and derive the breadcrumb shown next to the level badge.

Contents
--------
* :func:`merge_fields` – outermost frame first, event fields last, a later
  duplicate key replacing the earlier one at the later position.
* :func:`breadcrumb` – innermost frame name joined with the module path.

System Role
-----------
Pure helpers called by the record renderer; they never mutate the frames or
the record they read.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from lib_devlog.domain.context import ContextFrame
from lib_devlog.domain.values import FieldPairs, FieldValue


def merge_fields(context_stack: Sequence[ContextFrame], event_fields: Iterable[tuple[str, FieldValue]]) -> FieldPairs:
    """Return the ordered, key-unique field set of a record.

    Examples
    --------
    >>> from lib_devlog.domain.values import normalize_fields
    >>> outer = ContextFrame("request", {"id": 42, "user": "ada"})
    >>> merged = merge_fields([outer], normalize_fields({"id": 7, "status": 200}))
    >>> [key for key, _ in merged]
    ['user', 'id', 'status']
    """
    merged: dict[str, FieldValue] = {}

    def _append(pairs: Iterable[tuple[str, FieldValue]]) -> None:
        for key, value in pairs:
            merged.pop(key, None)
            merged[key] = value

    for frame in context_stack:
        _append(frame.fields)
    _append(event_fields)
    return tuple(merged.items())


def breadcrumb(context_stack: Sequence[ContextFrame], module_path: str, separator: str = "::") -> str:
    """Return ``innermost-frame<separator>module_path`` with empty parts dropped.

    Examples
    --------
    >>> breadcrumb([ContextFrame("request")], "app::server")
    'request::app::server'
    >>> breadcrumb([], "app::server")
    'app::server'
    >>> breadcrumb([ContextFrame("request")], "")
    'request'
    """
    parts = []
    if context_stack:
        name = context_stack[-1].name
        if name:
            parts.append(name)
    if module_path:
        parts.append(module_path)
    return separator.join(parts)


__all__ = ["breadcrumb", "merge_fields"]

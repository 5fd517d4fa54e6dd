"""Use cases orchestrating collection, composition and rendering."""

from __future__ import annotations

from .collect import CollectCallable, create_collector
from .compose import breadcrumb, merge_fields
from .render import RecordRenderer

__all__ = ["CollectCallable", "RecordRenderer", "breadcrumb", "create_collector", "merge_fields"]

from __future__ import annotations

import itertools

import pytest

from lib_devlog.application.use_cases.compose import breadcrumb, merge_fields
from lib_devlog.domain.context import ContextFrame
from lib_devlog.domain.values import Integer, String, normalize_fields


def test_context_fields_come_first_then_event_fields() -> None:
    stack = [ContextFrame("request", {"id": 42})]
    merged = merge_fields(stack, normalize_fields({"status": 200}))
    assert merged == (("id", Integer(42)), ("status", Integer(200)))


def test_event_field_overrides_context_field_at_event_position() -> None:
    stack = [ContextFrame("request", {"user": "ada", "id": 42})]
    merged = merge_fields(stack, normalize_fields({"status": 200, "user": "bob"}))
    assert merged == (("id", Integer(42)), ("status", Integer(200)), ("user", String("bob")))


def test_inner_frames_override_outer_frames() -> None:
    stack = [ContextFrame("outer", {"tenant": "a", "region": "eu"}), ContextFrame("inner", {"tenant": "b"})]
    merged = merge_fields(stack, ())
    assert merged == (("region", String("eu")), ("tenant", String("b")))


def test_merge_does_not_mutate_frames() -> None:
    frame = ContextFrame("request", {"id": 42})
    merge_fields([frame], normalize_fields({"id": 7}))
    assert frame.fields == (("id", Integer(42)),)


@pytest.mark.parametrize("order", list(itertools.permutations(["a", "b", "c"])))
def test_merge_order_follows_insertion_for_every_permutation(order: tuple[str, ...]) -> None:
    stack = [ContextFrame("ctx", {key: 0 for key in order})]
    event = normalize_fields({order[0]: 1})
    merged = merge_fields(stack, event)
    assert [key for key, _ in merged] == [*order[1:], order[0]]
    assert dict(merged)[order[0]] == Integer(1)


@pytest.mark.parametrize(
    "names, module_path, expected",
    [
        (["request"], "app::server", "request::app::server"),
        (["outer", "inner"], "app", "inner::app"),
        ([], "app::server", "app::server"),
        (["request"], "", "request"),
        ([], "", ""),
        ([""], "app", "app"),
    ],
)
def test_breadcrumb_joins_innermost_frame_and_module_path(names: list[str], module_path: str, expected: str) -> None:
    stack = [ContextFrame(name) for name in names]
    assert breadcrumb(stack, module_path) == expected


def test_breadcrumb_uses_custom_separator() -> None:
    assert breadcrumb([ContextFrame("job")], "worker.tasks", separator=" > ") == "job > worker.tasks"

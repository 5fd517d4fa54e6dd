from __future__ import annotations

import asyncio
import threading

from lib_devlog.domain.context import ContextBinder, ContextFrame
from lib_devlog.domain.values import Integer, String


def test_frame_normalises_fields_in_order() -> None:
    frame = ContextFrame("request", {"id": 42, "path": "/users"})
    assert frame.fields == (("id", Integer(42)), ("path", String("/users")))


def test_with_fields_updates_in_place_and_appends() -> None:
    frame = ContextFrame("request", {"id": 42, "user": None})
    updated = frame.with_fields({"user": "ada", "status": 200})

    assert [key for key, _ in updated.fields] == ["id", "user", "status"]
    assert dict(updated.fields)["user"] == String("ada")
    assert frame.fields[1][0] == "user"


def test_bind_pushes_and_pops_frames() -> None:
    binder = ContextBinder()
    with binder.bind("outer", a=1) as outer:
        with binder.bind("inner", b=2) as inner:
            assert binder.snapshot() == (outer, inner)
            assert binder.current() is inner
        assert binder.snapshot() == (outer,)
    assert binder.snapshot() == ()
    assert binder.current() is None


def test_bind_releases_frame_when_block_raises() -> None:
    binder = ContextBinder()
    try:
        with binder.bind("doomed"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert binder.snapshot() == ()


def test_pop_removes_frame_by_span_id() -> None:
    binder = ContextBinder()
    first = ContextFrame("first", span_id=1)
    second = ContextFrame("second", span_id=2)
    binder.push(first)
    binder.push(second)

    assert binder.pop(1) is first
    assert binder.snapshot() == (second,)
    assert binder.pop(99) is None


def test_update_targets_innermost_frame_by_default() -> None:
    binder = ContextBinder()
    binder.push(ContextFrame("outer", span_id=1))
    binder.push(ContextFrame("inner", span_id=2))

    binder.update(None, {"status": 200})
    binder.update(1, {"tenant": "acme"})

    outer, inner = binder.snapshot()
    assert dict(inner.fields) == {"status": Integer(200)}
    assert dict(outer.fields) == {"tenant": String("acme")}
    assert binder.update(42, {"x": 1}) is None


def test_span_ids_are_unique() -> None:
    binder = ContextBinder()
    assert len({binder.next_span_id() for _ in range(50)}) == 50


def test_threads_observe_their_own_stack() -> None:
    binder = ContextBinder()
    seen: list[tuple[ContextFrame, ...]] = []

    def worker() -> None:
        seen.append(binder.snapshot())
        with binder.bind("worker"):
            seen.append(binder.snapshot())

    with binder.bind("main"):
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()
        assert [frame.name for frame in binder.snapshot()] == ["main"]

    assert seen[0] == ()
    assert [frame.name for frame in seen[1]] == ["worker"]


def test_asyncio_tasks_do_not_leak_frames() -> None:
    binder = ContextBinder()

    async def task(name: str) -> list[str]:
        with binder.bind(name):
            await asyncio.sleep(0)
            return [frame.name for frame in binder.snapshot()]

    async def main() -> list[list[str]]:
        return list(await asyncio.gather(task("a"), task("b")))

    assert asyncio.run(main()) == [["a"], ["b"]]


def test_clear_removes_everything() -> None:
    binder = ContextBinder()
    binder.push(ContextFrame("x"))
    binder.clear()
    assert binder.snapshot() == ()

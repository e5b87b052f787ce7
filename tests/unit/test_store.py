"""Unit tests for kubewait.watcher.store.ObservedObjectSet."""

from __future__ import annotations

from typing import Any

from kubewait.models.events import EventType, WatchEvent
from kubewait.watcher.store import ObservedObjectSet


def _obj(name: str, ready: bool, namespace: str = "ns1") -> dict[str, Any]:
    return {"metadata": {"name": name, "namespace": namespace}, "ready": ready}


def _is_ready(obj: dict[str, Any]) -> bool:
    return obj["ready"]


class TestReplace:
    def test_replace_discards_previous_contents(self) -> None:
        store = ObservedObjectSet()
        store.replace([_obj("a", True), _obj("b", True)])
        store.replace([_obj("c", False)])

        assert len(store) == 1
        assert store.list()[0]["metadata"]["name"] == "c"

    def test_same_name_in_different_namespaces_kept_apart(self) -> None:
        store = ObservedObjectSet()
        store.replace([_obj("a", True, "ns1"), _obj("a", True, "ns2")])
        assert len(store) == 2

    def test_nameless_objects_are_not_merged(self) -> None:
        store = ObservedObjectSet()
        store.replace([{"ready": True}, {"ready": True}])
        assert len(store) == 2


class TestApply:
    def test_added_then_modified_updates_in_place(self) -> None:
        store = ObservedObjectSet()
        store.apply(WatchEvent(type=EventType.ADDED, object=_obj("a", False)))
        store.apply(WatchEvent(type=EventType.MODIFIED, object=_obj("a", True)))

        assert len(store) == 1
        assert store.all_satisfy(_is_ready)

    def test_deleted_removes(self) -> None:
        store = ObservedObjectSet()
        store.replace([_obj("a", True), _obj("b", False)])
        store.apply(WatchEvent(type=EventType.DELETED, object=_obj("b", False)))

        assert [o["metadata"]["name"] for o in store.list()] == ["a"]

    def test_deleting_unknown_object_is_noop(self) -> None:
        store = ObservedObjectSet()
        store.replace([_obj("a", True)])
        store.apply(WatchEvent(type=EventType.DELETED, object=_obj("zzz", True)))
        assert len(store) == 1

    def test_bookmark_and_error_ignored(self) -> None:
        store = ObservedObjectSet()
        store.replace([_obj("a", True)])
        store.apply(WatchEvent(type=EventType.BOOKMARK, resource_version="9"))
        store.apply(WatchEvent.failure("boom"))
        assert len(store) == 1


class TestAllSatisfy:
    def test_empty_set_never_satisfies(self) -> None:
        assert ObservedObjectSet().all_satisfy(lambda obj: True) is False

    def test_one_failing_object_fails(self) -> None:
        store = ObservedObjectSet()
        store.replace([_obj("a", True), _obj("b", False)])
        assert store.all_satisfy(_is_ready) is False

    def test_all_satisfying(self) -> None:
        store = ObservedObjectSet()
        store.replace([_obj("a", True), _obj("b", True)])
        assert store.all_satisfy(_is_ready) is True

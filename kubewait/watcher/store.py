"""Last known state of every resource matching a wait call."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from kubewait.meta import object_meta
from kubewait.models.events import EventType, WatchEvent


def _key(obj: Any) -> tuple[str, str]:
    meta = object_meta(obj)
    if meta.name:
        return meta.key
    # Nameless objects cannot be correlated across events; keep them distinct.
    return ("", meta.uid or f"#{id(obj)}")


class ObservedObjectSet:
    """Objects keyed by (namespace, name), populated by a list and kept
    current by watch events. Exclusive to one wait call.
    """

    def __init__(self) -> None:
        self._objects: dict[tuple[str, str], Any] = {}

    def replace(self, items: Iterable[Any]) -> None:
        self._objects = {_key(item): item for item in items}

    def apply(self, event: WatchEvent) -> None:
        if event.type in (EventType.ADDED, EventType.MODIFIED):
            self._objects[_key(event.object)] = event.object
        elif event.type is EventType.DELETED:
            self._objects.pop(_key(event.object), None)

    def list(self) -> list[Any]:
        return list(self._objects.values())

    def __len__(self) -> int:
        return len(self._objects)

    def all_satisfy(self, predicate: Callable[[Any], bool]) -> bool:
        """True only if the set is non-empty and *predicate* holds for every object.

        An empty set never satisfies: no matching resources is not evidence
        of readiness.
        """
        if not self._objects:
            return False
        return all(predicate(obj) for obj in self._objects.values())

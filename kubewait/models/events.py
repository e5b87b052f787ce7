"""Change-feed event data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class EventType(StrEnum):
    """Watch event type as delivered by the API server."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    ERROR = "ERROR"
    BOOKMARK = "BOOKMARK"


@dataclass(frozen=True)
class WatchEvent:
    """A single change-feed event.

    ``object`` is the typed model (e.g. ``V1Pod``) or raw dict for the
    resource. ERROR events carry ``error`` (and ``status`` when the server
    reported one) instead of a resource object.
    """

    type: EventType
    object: Any = None
    resource_version: str = ""
    error: str = ""
    status: int | None = None

    @classmethod
    def failure(cls, error: str, status: int | None = None) -> WatchEvent:
        return cls(type=EventType.ERROR, error=error, status=status)

    @property
    def carries_object(self) -> bool:
        """True for event types whose object reflects resource state."""
        return self.type in (EventType.ADDED, EventType.MODIFIED, EventType.DELETED)

    def __str__(self) -> str:
        if self.type is EventType.ERROR:
            return f"{self.type}: {self.error}"
        return f"{self.type} rv={self.resource_version or '?'}"


@dataclass
class ListResult:
    """Point-in-time snapshot returned by a list call."""

    items: list[Any] = field(default_factory=list)
    resource_version: str = ""

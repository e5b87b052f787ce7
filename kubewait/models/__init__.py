"""Core data structures for kubewait."""

from kubewait.models.config import KubeWaitConfig
from kubewait.models.events import EventType, ListResult, WatchEvent
from kubewait.models.resources import (
    POD_KIND,
    GroupVersionKind,
    ObjectMeta,
    ResourceDescriptor,
    SelectorSpec,
)

__all__ = [
    "POD_KIND",
    "EventType",
    "GroupVersionKind",
    "KubeWaitConfig",
    "ListResult",
    "ObjectMeta",
    "ResourceDescriptor",
    "SelectorSpec",
    "WatchEvent",
]

"""Condition watching over a list-then-watch event source.

Submodules
----------
source    -- ListWatchSource: the narrow list + watch interface.
store     -- ObservedObjectSet: last known state of matching objects.
condition -- ConditionWatcher: precondition check, then the event loop.
kube      -- KubeListWatchSource: kubernetes-asyncio implementation.
"""

from kubewait.watcher.condition import ConditionWatcher, WaitSession
from kubewait.watcher.kube import KubeListWatchSource
from kubewait.watcher.source import ListWatchSource
from kubewait.watcher.store import ObservedObjectSet

__all__ = [
    "ConditionWatcher",
    "KubeListWatchSource",
    "ListWatchSource",
    "ObservedObjectSet",
    "WaitSession",
]

"""kubewait: block until Kubernetes resources satisfy a condition.

A list snapshot is checked first; if it does not already satisfy the
predicate, a watch opened at the snapshot's resource version is consumed
until an event does, the deadline passes or the feed fails.
"""

from kubewait import predicates
from kubewait.client import create_api_client
from kubewait.errors import KubeWaitError, ResolutionError, TransportError, WaitTimeoutError
from kubewait.models import EventType, GroupVersionKind, ResourceDescriptor, SelectorSpec, WatchEvent
from kubewait.wait import Waiter, wait_pod, wait_resource

__version__ = "0.1.0"

__all__ = [
    "EventType",
    "GroupVersionKind",
    "KubeWaitError",
    "ResolutionError",
    "ResourceDescriptor",
    "SelectorSpec",
    "TransportError",
    "WaitTimeoutError",
    "Waiter",
    "WatchEvent",
    "__version__",
    "create_api_client",
    "predicates",
    "wait_pod",
    "wait_resource",
]

"""The list-then-watch event source interface consumed by the condition watcher."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator

from kubewait.models.events import ListResult, WatchEvent
from kubewait.models.resources import ResourceDescriptor, SelectorSpec


class ListWatchSource(ABC):
    """Scoped list and watch over one resource type.

    Implementations own the transport: connection handling, decoding and
    resuming a cleanly closed watch window all live here. They do not retry
    failed connections; failures surface as ERROR events or TransportError.
    """

    @abstractmethod
    async def list(
        self,
        descriptor: ResourceDescriptor,
        namespace: str,
        selector: SelectorSpec,
    ) -> ListResult:
        """Snapshot of matching objects plus the resource version it was taken at.

        An empty *namespace* means all namespaces (or a cluster-scoped type).
        """

    @abstractmethod
    def watch(
        self,
        descriptor: ResourceDescriptor,
        namespace: str,
        selector: SelectorSpec,
        resource_version: str,
    ) -> AsyncGenerator[WatchEvent, None]:
        """Ordered events after *resource_version*.

        Must be an async generator: the consumer closes it with ``aclose()``
        on every exit path, which has to release the underlying connection.
        """

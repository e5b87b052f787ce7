"""Caller-facing wait API.

Usage::

    from kubewait import SelectorSpec, create_api_client, predicates, wait_pod

    async with await create_api_client() as api:
        await wait_pod(
            api,
            "default",
            SelectorSpec(label_selector="app=web"),
            predicates.pod_ready(),
            timeout=120,
        )

``Waiter`` is the injectable form: it takes the two collaborators
(discovery and list-watch source) so tests and embedders can substitute
their own.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from kubewait.discovery.kube import KubeDiscoverySource
from kubewait.discovery.resolver import DiscoverySource, TypeResolver
from kubewait.errors import WaitTimeoutError
from kubewait.models.config import WaitConfig
from kubewait.models.events import WatchEvent
from kubewait.models.resources import POD_KIND, GroupVersionKind, SelectorSpec
from kubewait.watcher.condition import ConditionWatcher
from kubewait.watcher.kube import KubeListWatchSource
from kubewait.watcher.source import ListWatchSource

if TYPE_CHECKING:
    from kubernetes_asyncio.client import ApiClient, V1Pod

T = TypeVar("T")


class Waiter:
    """Resolves the kind, then runs the condition watcher.

    Resolution always completes (or fails with ResolutionError) before any
    list or watch call is made.
    """

    def __init__(
        self,
        discovery: DiscoverySource,
        source: ListWatchSource,
        default_timeout: float = 60.0,
    ) -> None:
        self._resolver = TypeResolver(discovery)
        self._watcher = ConditionWatcher(source)
        self._default_timeout = default_timeout

    @classmethod
    def from_api_client(cls, api_client: ApiClient, config: WaitConfig | None = None) -> Waiter:
        config = config or WaitConfig()
        return cls(
            KubeDiscoverySource(api_client),
            KubeListWatchSource(api_client, watch_timeout_seconds=config.watch_timeout_seconds),
            default_timeout=config.default_timeout,
        )

    async def wait_resource(
        self,
        namespace: str,
        gvk: GroupVersionKind,
        selector: SelectorSpec,
        predicate: Callable[[T], bool],
        timeout: float | None = None,
    ) -> WatchEvent | None:
        """Wait until resources of kind *gvk* satisfy *predicate*.

        *predicate* receives the object as the source delivers it (a typed
        model for built-in kinds, a dict for custom resources); it must be
        written for that one kind.

        One deadline covers kind resolution and the wait itself; expiry in
        either raises WaitTimeoutError.

        Returns None when the initial snapshot already satisfied the
        predicate, else the satisfying event.
        """
        timeout = self._default_timeout if timeout is None else timeout
        deadline = asyncio.get_running_loop().time() + timeout

        scope = asyncio.timeout_at(deadline)
        try:
            async with scope:
                descriptor = await self._resolver.resolve(gvk)
        except TimeoutError as exc:
            if not scope.expired():
                raise
            raise WaitTimeoutError(gvk, timeout) from exc

        return await self._watcher.wait(namespace, descriptor, selector, predicate, timeout, deadline=deadline)

    async def wait_pod(
        self,
        namespace: str,
        selector: SelectorSpec,
        checker: Callable[[V1Pod], bool],
        timeout: float | None = None,
    ) -> WatchEvent | None:
        """``wait_resource`` specialised to core/v1 Pods."""
        return await self.wait_resource(namespace, POD_KIND, selector, checker, timeout)


async def wait_resource(
    api_client: ApiClient,
    namespace: str,
    gvk: GroupVersionKind,
    selector: SelectorSpec,
    predicate: Callable[[Any], bool],
    timeout: float,
) -> WatchEvent | None:
    return await Waiter.from_api_client(api_client).wait_resource(namespace, gvk, selector, predicate, timeout)


async def wait_pod(
    api_client: ApiClient,
    namespace: str,
    selector: SelectorSpec,
    checker: Callable[[V1Pod], bool],
    timeout: float,
) -> WatchEvent | None:
    return await Waiter.from_api_client(api_client).wait_pod(namespace, selector, checker, timeout)
